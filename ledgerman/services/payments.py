"""
Payments: registering money movements and allocating them onto installments.

Installment status is never written: it follows from the allocations.
"""

import logging
from collections import defaultdict
from decimal import Decimal

from django.db import transaction
from django.db.models import F, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import DocumentDirection, PaymentDirection
from ledgerman.models.payment import Installment, Payment, PaymentAllocation
from ledgerman.services.movements import parse_quantity

logger = logging.getLogger('ledgerman')


def expected_payment_direction(document_direction) -> str:
    """Purchases are paid out, everything else is collected."""
    if document_direction == DocumentDirection.PURCHASE:
        return PaymentDirection.OUTFLOW
    return PaymentDirection.INFLOW


class LedgerPayments:
    """Payment and allocation methods."""

    @classmethod
    def register_payment(cls, organization, amount, date, direction,
                         reference='', notes='') -> Payment:
        """
        Record a payment received (INFLOW) or made (OUTFLOW).

        Raises:
            LedgerError('INVALID_AMOUNT'): amount <= 0 or not a decimal
        """
        amount = parse_quantity(amount, 'INVALID_AMOUNT')
        if amount <= 0:
            raise LedgerError('INVALID_AMOUNT', amount=amount)
        if direction not in PaymentDirection.values:
            raise LedgerError('DIRECTION_MISMATCH', direction=direction)

        payment = Payment.objects.create(
            organization=organization,
            amount=amount,
            date=date,
            direction=direction,
            reference=reference,
            notes=notes,
        )
        logger.info(
            "ledger.payment.registered",
            extra={
                "payment_id": payment.pk,
                "tenant_id": organization.pk,
                "amount": str(amount),
                "direction": direction,
            },
        )
        return payment

    @classmethod
    def allocate_payment(cls, payment, allocations) -> list[PaymentAllocation]:
        """
        Allocate parts of a payment onto installments.

        Args:
            payment: Payment to allocate
            allocations: {installment_id: amount} or iterable of
                (installment_id, amount) pairs; repeated ids are summed

        Returns:
            The PaymentAllocation rows touched (created or increased)

        Raises:
            LedgerError('INVALID_AMOUNT'): An amount is <= 0
            LedgerError('INSTALLMENT_NOT_FOUND'): Unknown id or other tenant
            LedgerError('ALLOCATION_EXCEEDS_PAYMENT'): More than the payment's residual
            LedgerError('ALLOCATION_EXCEEDS_RESIDUAL'): More than an installment's residual
            LedgerError('DIRECTION_MISMATCH'): Payment direction does not fit the document

        Concurrency:
            - Runs under transaction.atomic()
            - Locks the payment and the installments with select_for_update()
            - Residuals are computed after the locks
        """
        pairs = allocations.items() if hasattr(allocations, 'items') else allocations
        grouped: dict = defaultdict(lambda: Decimal('0'))
        for installment_id, amount in pairs:
            amount = parse_quantity(amount, 'INVALID_AMOUNT')
            if amount <= 0:
                raise LedgerError('INVALID_AMOUNT', amount=amount, installment_id=installment_id)
            grouped[installment_id] += amount

        if not grouped:
            return []

        with transaction.atomic():
            payment = Payment.objects.select_for_update().get(pk=payment.pk)

            installments = {
                inst.pk: inst
                for inst in Installment.objects.select_for_update(of=('self',)).filter(
                    organization_id=payment.organization_id,
                    pk__in=list(grouped),
                ).select_related('document__document_type')
            }
            missing = [pk for pk in grouped if pk not in installments]
            if missing:
                raise LedgerError('INSTALLMENT_NOT_FOUND', installment_ids=missing)

            already = PaymentAllocation.objects.filter(payment=payment).aggregate(
                t=Coalesce(Sum('amount'), Decimal('0'))
            )['t']
            requested = sum(grouped.values(), Decimal('0'))
            if already + requested > payment.amount:
                raise LedgerError(
                    'ALLOCATION_EXCEEDS_PAYMENT',
                    payment_id=payment.pk,
                    residual=payment.amount - already,
                    requested=requested,
                )

            touched = []
            for installment_id, amount in grouped.items():
                installment = installments[installment_id]

                expected = expected_payment_direction(installment.document.document_type.direction)
                if payment.direction != expected:
                    raise LedgerError(
                        'DIRECTION_MISMATCH',
                        payment_id=payment.pk,
                        installment_id=installment_id,
                        direction=payment.direction,
                        expected=expected,
                    )

                residual = installment.residual
                if amount > residual:
                    raise LedgerError(
                        'ALLOCATION_EXCEEDS_RESIDUAL',
                        installment_id=installment_id,
                        residual=residual,
                        requested=amount,
                    )

                allocation, created = PaymentAllocation.objects.get_or_create(
                    payment=payment,
                    installment=installment,
                    defaults={'amount': amount},
                )
                if not created:
                    PaymentAllocation.objects.filter(pk=allocation.pk).update(
                        amount=F('amount') + amount,
                        updated_at=timezone.now(),
                    )
                    allocation.refresh_from_db()
                touched.append(allocation)

            logger.info(
                "ledger.payment.allocated",
                extra={
                    "payment_id": payment.pk,
                    "tenant_id": payment.organization_id,
                    "installments": [str(pk) for pk in grouped],
                    "amount": str(requested),
                },
            )
            return touched

    @classmethod
    def open_installments(cls, organization, until=None):
        """
        Installments not yet fully paid, earliest due first.

        Args:
            until: Only installments due on or before this date
        """
        qs = Installment.objects.filter(organization=organization).with_paid_amount()
        if until is not None:
            qs = qs.filter(due_date__lte=until)
        return qs.filter(paid_total__lt=F('amount')).select_related(
            'document',
        ).order_by('due_date', 'sequence_number')
