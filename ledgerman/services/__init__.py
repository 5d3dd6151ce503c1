"""
Ledger services — modular organization of ledger operations.

Re-exports all public classes:
    from ledgerman.services import StockQueries, StockMovements, LedgerDocuments
"""

from ledgerman.services.documents import LedgerDocuments, LineInput
from ledgerman.services.installments import LedgerInstallments
from ledgerman.services.movements import StockMovements
from ledgerman.services.payments import LedgerPayments
from ledgerman.services.queries import StockQueries
from ledgerman.services.valuation import LedgerValuation, ValuationSummary

__all__ = [
    'StockQueries',
    'StockMovements',
    'LedgerInstallments',
    'LedgerDocuments',
    'LedgerPayments',
    'LedgerValuation',
    'LineInput',
    'ValuationSummary',
]
