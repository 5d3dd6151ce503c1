"""
Ledgerman Protocols.

Defines interfaces between the ledger core and its persistence.
"""

from ledgerman.protocols.store import (
    LedgerStore,
    MovementRecord,
    ProductInfo,
    ProductStore,
)

__all__ = [
    "LedgerStore",
    "MovementRecord",
    "ProductInfo",
    "ProductStore",
]
