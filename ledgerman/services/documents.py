"""
Documents: the save workflow that feeds the ledger.

A document, its lines, its stock movements and its installments are written
in one transaction. If any step raises, none of them persist.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from ledgerman.classifier import classify_movement, reverse_sign
from ledgerman.conf import ledgerman_settings
from ledgerman.exceptions import LedgerError
from ledgerman.models.document import Document, DocumentLine
from ledgerman.models.movement import StockMovement
from ledgerman.models.payment import PaymentAllocation
from ledgerman.protocols.store import MovementRecord
from ledgerman.services.installments import LedgerInstallments
from ledgerman.services.movements import StockMovements, parse_quantity

logger = logging.getLogger('ledgerman')


@dataclass(frozen=True)
class LineInput:
    """A document line as entered, before totals are computed."""

    product: object | None = None
    description: str = ''
    quantity: Decimal | str = Decimal('0')
    unit_price: Decimal | str = Decimal('0')
    vat_rate: Decimal | str = Decimal('0')
    warehouse: object | None = None


def round_amount(value: Decimal) -> Decimal:
    return value.quantize(
        ledgerman_settings.amount_quantum,
        rounding=ledgerman_settings.rounding_mode,
    )


def _check_tenant(organization, **related) -> None:
    for name, obj in related.items():
        if obj is not None and obj.organization_id != organization.pk:
            raise LedgerError(
                'TENANT_MISMATCH',
                field=name,
                organization_id=organization.pk,
                other_organization_id=obj.organization_id,
            )


class LedgerDocuments:
    """Document save workflow."""

    @classmethod
    def save_document(cls, organization, document_type, number, date, lines, *,
                      entity=None, main_warehouse=None, payment_condition=None,
                      notes='') -> Document:
        """
        Create a document with its lines, movements and installments.

        Args:
            organization: Tenant
            document_type: DocumentTypeConfig of the tenant
            number: Document number (not generated here)
            date: Document date, start of the payment schedule
            lines: Iterable of LineInput

        Returns:
            The saved Document

        Raises:
            LedgerError('TENANT_MISMATCH'): A related object belongs to another tenant
            ProductNotFound, ConfigurationError, LedgerError: From the ledger
                and schedule steps; the whole save is rolled back
        """
        _check_tenant(
            organization,
            document_type=document_type,
            entity=entity,
            main_warehouse=main_warehouse,
            payment_condition=payment_condition,
        )
        lines = list(lines)

        with transaction.atomic():
            document = Document.objects.create(
                organization=organization,
                document_type=document_type,
                number=number,
                date=date,
                entity=entity,
                main_warehouse=main_warehouse,
                payment_condition=payment_condition,
                notes=notes,
            )
            movements = cls._write_lines(document, lines)
            document.save(update_fields=['net_total', 'vat_total', 'gross_total', 'updated_at'])
            installments = LedgerInstallments.create_installments(document)

        logger.info(
            "ledger.document.saved",
            extra={
                "document_id": document.pk,
                "document_number": document.number,
                "document_type": document_type.code,
                "tenant_id": organization.pk,
                "lines": len(lines),
                "movements": len(movements),
                "installments": len(installments),
                "gross_total": str(document.gross_total),
            },
        )
        return document

    @classmethod
    def replace_document_lines(cls, document, lines) -> Document:
        """
        Replace all lines of a saved document.

        Movements already written for the document are never deleted: for each
        (product, warehouse) with a non-zero net quantity an offsetting movement
        is appended, then the new lines write their own movements.

        Installments are regenerated only if none of them has allocations;
        otherwise they are kept as they are.
        """
        organization = document.organization
        lines = list(lines)

        with transaction.atomic():
            document = Document.objects.select_for_update().select_related(
                'document_type', 'organization', 'payment_condition',
            ).get(pk=document.pk)

            offsets = cls._offset_movements(document)
            DocumentLine.objects.filter(document=document).delete()
            movements = cls._write_lines(document, lines)
            document.save(update_fields=['net_total', 'vat_total', 'gross_total', 'updated_at'])

            has_allocations = PaymentAllocation.objects.filter(
                installment__document=document,
            ).exists()
            if not has_allocations:
                document.installments.all().delete()
                LedgerInstallments.create_installments(document)

        logger.info(
            "ledger.document.lines_replaced",
            extra={
                "document_id": document.pk,
                "document_number": document.number,
                "tenant_id": organization.pk,
                "offsets": len(offsets),
                "movements": len(movements),
                "installments_regenerated": not has_allocations,
            },
        )
        return document

    @classmethod
    def _write_lines(cls, document, lines):
        """Create lines and their movements; set document totals (not saved)."""
        organization = document.organization
        document_type = document.document_type
        net_total = vat_total = Decimal('0')
        movements = []

        for line_input in lines:
            _check_tenant(
                organization,
                product=line_input.product,
                warehouse=line_input.warehouse,
            )
            quantity = parse_quantity(line_input.quantity)
            unit_price = parse_quantity(line_input.unit_price, 'INVALID_AMOUNT')
            vat_rate = parse_quantity(line_input.vat_rate, 'INVALID_AMOUNT')

            net = round_amount(quantity * unit_price)
            vat = round_amount(net * vat_rate)

            line = DocumentLine.objects.create(
                document=document,
                product=line_input.product,
                description=line_input.description,
                quantity=quantity,
                unit_price=unit_price,
                vat_rate=vat_rate,
                net_amount=net,
                vat_amount=vat,
                gross_amount=net + vat,
                warehouse=line_input.warehouse,
            )
            net_total += net
            vat_total += vat

            movement = StockMovements.append_movement_for_line(
                line,
                document_type,
                line.warehouse_id,
                document.pk,
                document.number,
                organization.pk,
                fallback_warehouse_id=document.main_warehouse_id,
            )
            if movement is not None:
                movements.append(movement)

        document.net_total = net_total
        document.vat_total = vat_total
        document.gross_total = net_total + vat_total
        return movements

    @classmethod
    def _offset_movements(cls, document):
        """Append one inverse movement per (product, warehouse) still non-zero."""
        rows = StockMovement.objects.for_tenant(document.organization_id).filter(
            source_document=document,
        ).order_by().values('product_id', 'warehouse_id').annotate(
            total=Sum('quantity'),
        ).order_by('product_id', 'warehouse_id')

        offsets = []
        for row in rows:
            total = row['total']
            if not total:
                continue
            sign = reverse_sign(1 if total > 0 else -1)
            offsets.append(StockMovements.append(MovementRecord(
                tenant_id=document.organization_id,
                product_id=row['product_id'],
                warehouse_id=row['warehouse_id'],
                quantity=-total,
                category=classify_movement(document.document_type.code, sign),
                document_type_id=document.document_type_id,
                source_document_id=document.pk,
                source_document_number=document.number,
                reason='Storno righe documento',
            )))
        return offsets
