"""
Django Ledgerman — Registro di magazzino e scadenzario.

La giacenza non si salva: si calcola sommando i movimenti.

Uso:
    from ledgerman import ledger, LedgerError

    ledger.save_document(org, ddt, 'DDT-1', oggi, righe)
    ledger.current_stock(prodotto.pk, org.pk)
    ledger.generate_schedule(condizione, oggi, Decimal('300.00'))
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from ledgerman.service import Ledger
        return Ledger
    elif name == 'LedgerError':
        from ledgerman.exceptions import LedgerError
        return LedgerError
    elif name == 'ConfigurationError':
        from ledgerman.exceptions import ConfigurationError
        return ConfigurationError
    elif name == 'ProductNotFound':
        from ledgerman.exceptions import ProductNotFound
        return ProductNotFound
    elif name == 'LineInput':
        from ledgerman.services.documents import LineInput
        return LineInput
    elif name == 'StockMovement':
        from ledgerman.models.movement import StockMovement
        return StockMovement
    elif name == 'DocumentTypeConfig':
        from ledgerman.models.document_type import DocumentTypeConfig
        return DocumentTypeConfig
    elif name == 'MovementCategory':
        from ledgerman.models.enums import MovementCategory
        return MovementCategory
    elif name == 'Installment':
        from ledgerman.models.payment import Installment
        return Installment
    elif name == 'InstallmentStatus':
        from ledgerman.models.enums import InstallmentStatus
        return InstallmentStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'LedgerError',
    'ConfigurationError',
    'ProductNotFound',
    'LineInput',
    'StockMovement',
    'DocumentTypeConfig',
    'MovementCategory',
    'Installment',
    'InstallmentStatus',
]

__version__ = '0.1.0'
