"""
Installments: persisting a document's payment schedule.
"""

import logging

from django.db import transaction

from ledgerman.models.payment import Installment
from ledgerman.schedule import generate_schedule

logger = logging.getLogger('ledgerman')


class LedgerInstallments:
    """Installment (scadenze) methods."""

    @classmethod
    def generate_schedule(cls, condition, document_date, total_amount):
        """See ledgerman.schedule.generate_schedule()."""
        return generate_schedule(condition, document_date, total_amount)

    @classmethod
    def create_installments(cls, document) -> list[Installment]:
        """
        Create the installments of a document from its payment condition.

        No-op (empty list) when the document has no payment condition.
        The schedule splits document.gross_total.

        Raises:
            LedgerError('INVALID_PAYMENT_CONDITION'): Condition out of bounds
            LedgerError('INVALID_AMOUNT'): Negative total
        """
        condition = document.payment_condition
        if condition is None:
            return []

        schedule = generate_schedule(condition, document.date, document.gross_total)

        with transaction.atomic():
            installments = Installment.objects.bulk_create([
                Installment(
                    organization_id=document.organization_id,
                    document=document,
                    sequence_number=item.sequence_number,
                    due_date=item.due_date,
                    amount=item.amount,
                )
                for item in schedule
            ])

        logger.info(
            "ledger.installments.created",
            extra={
                "document_id": document.pk,
                "document_number": document.number,
                "count": len(installments),
                "total": str(document.gross_total),
            },
        )
        return installments
