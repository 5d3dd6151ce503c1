"""
Memory Store Adapter — in-process ledger for development and testing.

Implements LedgerStore and ProductStore with plain Python containers:
- Movements are appended to a list and never mutated
- Sums use Decimal addition (exact, order-independent)
- Products are registered explicitly with add_product()

Usage in settings.py:
    LEDGERMAN = {
        "LEDGER_STORE": "ledgerman.adapters.memory.MemoryLedgerStore",
        "PRODUCT_STORE": "ledgerman.adapters.memory.MemoryProductStore",
    }

WARNING: Not transactional and not shared between processes. Do NOT use
in production.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal
from typing import Any

from django.utils import timezone

from ledgerman.protocols.store import MovementRecord, ProductInfo


class MemoryLedgerStore:
    """List-backed LedgerStore."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: list[MovementRecord] = []

    def append(self, record: MovementRecord) -> MovementRecord:
        with self._lock:
            stored = replace(
                record,
                id=next(self._ids),
                created_at=record.created_at or timezone.now(),
            )
            self._records.append(stored)
        return stored

    def records(self, tenant_id: Any) -> list[MovementRecord]:
        """Snapshot of one tenant's rows, in insertion order."""
        return [r for r in self._records if r.tenant_id == tenant_id]

    def _matching(self, tenant_id, warehouse_id):
        for record in list(self._records):
            if record.tenant_id != tenant_id:
                continue
            if warehouse_id is not None and record.warehouse_id != warehouse_id:
                continue
            yield record

    def sum_quantity(self, tenant_id: Any, product_id: Any,
                     warehouse_id: Any | None = None) -> Decimal:
        return sum(
            (r.quantity for r in self._matching(tenant_id, warehouse_id)
             if r.product_id == product_id),
            Decimal('0'),
        )

    def sum_quantities(self, tenant_id: Any, product_ids: Iterable[Any],
                       warehouse_id: Any | None = None) -> dict[Any, Decimal]:
        totals = {pid: Decimal('0') for pid in product_ids}
        for record in self._matching(tenant_id, warehouse_id):
            if record.product_id in totals:
                totals[record.product_id] += record.quantity
        return totals


class MemoryProductStore:
    """Dict-backed ProductStore."""

    def __init__(self, products: Iterable[ProductInfo] = ()):
        self._products: dict[tuple[Any, Any], ProductInfo] = {}
        for product in products:
            self.add_product(product)

    def add_product(self, product: ProductInfo) -> ProductInfo:
        self._products[(product.tenant_id, product.id)] = product
        return product

    def get_product(self, tenant_id: Any, product_id: Any) -> ProductInfo | None:
        return self._products.get((tenant_id, product_id))

    def lock_product(self, tenant_id: Any, product_id: Any) -> ProductInfo | None:
        # No row locks in memory
        return self.get_product(tenant_id, product_id)
