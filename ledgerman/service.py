"""
Ledger Service — The single public interface for all ledger operations.

Usage:
    from ledgerman import ledger, LedgerError

    doc = ledger.save_document(org, ddt, 'DDT-1', today, [LineInput(product=p, quantity='4.5')])
    ledger.current_stock(p.pk, org.pk)  # Decimal('5.5000')
"""

from ledgerman.classifier import classify_movement
from ledgerman.fiscal import (
    validate_fiscal_code_checksum,
    validate_vat_checksum,
    validate_vat_or_fiscal_code,
)
from ledgerman.services.documents import LedgerDocuments
from ledgerman.services.installments import LedgerInstallments
from ledgerman.services.movements import StockMovements
from ledgerman.services.payments import LedgerPayments
from ledgerman.services.queries import StockQueries
from ledgerman.services.valuation import LedgerValuation


class Ledger(
    StockQueries,
    StockMovements,
    LedgerInstallments,
    LedgerDocuments,
    LedgerPayments,
    LedgerValuation,
):
    """
    Single interface for all ledger operations.

    Parameter convention: (what, tenant, where)
    Follows the ledger's own key: product, organization, warehouse.

    IMPORTANT: Every read and write is scoped by tenant. State-changing
    methods run under transaction.atomic(); see each method's docstring.
    """

    # ══════════════════════════════════════════════════════════════
    # PURE FUNCTIONS
    # ══════════════════════════════════════════════════════════════

    classify_movement = staticmethod(classify_movement)
    validate_vat_checksum = staticmethod(validate_vat_checksum)
    validate_fiscal_code_checksum = staticmethod(validate_fiscal_code_checksum)
    validate_vat_or_fiscal_code = staticmethod(validate_vat_or_fiscal_code)
