"""
Valuation: purchased/sold figures and weighted average cost per product/year.

Derived on every call from document lines; nothing is cached or stored, so
the figures cannot drift from the documents they summarize.
"""

from dataclasses import dataclass
from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce

from ledgerman.conf import ledgerman_settings
from ledgerman.models.document import DocumentLine
from ledgerman.models.enums import DocumentDirection

QUANTITY_FIELD = DecimalField(max_digits=18, decimal_places=4)
AMOUNT_FIELD = DecimalField(max_digits=14, decimal_places=2)


@dataclass(frozen=True)
class ValuationSummary:
    product_id: int
    year: int
    purchased_quantity: Decimal = Decimal('0')
    purchased_amount: Decimal = Decimal('0')
    sold_quantity: Decimal = Decimal('0')
    sold_amount: Decimal = Decimal('0')
    weighted_average_cost: Decimal = Decimal('0')


def weighted_average_cost(amount: Decimal, quantity: Decimal) -> Decimal:
    """amount / quantity to 4 places; 0 when nothing was purchased."""
    if quantity <= 0:
        return Decimal('0')
    return (amount / quantity).quantize(
        ledgerman_settings.quantity_quantum,
        rounding=ledgerman_settings.rounding_mode,
    )


class LedgerValuation:
    """Valuation methods."""

    @classmethod
    def valuation_summary(cls, organization, product, year: int) -> ValuationSummary:
        """
        Valuation figures of one product in one calendar year.

        Only lines of documents whose type has valuation_impact and a
        valuation sign count. Quantity and net amount are multiplied by that
        sign; SALE documents feed the sold figures, PURCHASE documents the
        purchased ones.
        """
        product_id = getattr(product, 'pk', product)
        sign = F('document__document_type__operation_sign_valuation')

        rows = DocumentLine.objects.filter(
            document__organization=organization,
            document__date__year=year,
            document__document_type__valuation_impact=True,
            document__document_type__operation_sign_valuation__isnull=False,
            document__document_type__direction__in=[
                DocumentDirection.SALE,
                DocumentDirection.PURCHASE,
            ],
            product_id=product_id,
        ).order_by().values('document__document_type__direction').annotate(
            qty=Coalesce(
                Sum(ExpressionWrapper(F('quantity') * sign, output_field=QUANTITY_FIELD)),
                Decimal('0'),
                output_field=QUANTITY_FIELD,
            ),
            amount=Coalesce(
                Sum(ExpressionWrapper(F('net_amount') * sign, output_field=AMOUNT_FIELD)),
                Decimal('0'),
                output_field=AMOUNT_FIELD,
            ),
        )

        totals = {
            row['document__document_type__direction']: (row['qty'], row['amount'])
            for row in rows
        }
        zero = (Decimal('0'), Decimal('0'))
        purchased_qty, purchased_amount = totals.get(DocumentDirection.PURCHASE.value, zero)
        sold_qty, sold_amount = totals.get(DocumentDirection.SALE.value, zero)

        return ValuationSummary(
            product_id=product_id,
            year=year,
            purchased_quantity=purchased_qty,
            purchased_amount=purchased_amount,
            sold_quantity=sold_qty,
            sold_amount=sold_amount,
            weighted_average_cost=weighted_average_cost(purchased_amount, purchased_qty),
        )
