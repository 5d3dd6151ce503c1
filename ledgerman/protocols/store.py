"""
Store Protocols — Interfaces between the ledger core and persistence.

Ledgerman defines these protocols; the ORM adapter implements them on top of
Django models, the memory adapter implements them in-process for tests and
tooling that must not touch a database.

Every method is tenant-scoped: there is no way to read or write a ledger row
without naming the tenant.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from ledgerman.models.enums import MovementCategory


@dataclass(frozen=True)
class ProductInfo:
    """What the ledger needs to know about a product."""

    id: Any
    tenant_id: Any
    manages_stock: bool
    default_warehouse_id: Any | None = None


@dataclass(frozen=True)
class MovementRecord:
    """A ledger entry, before or after persistence (id is None before)."""

    tenant_id: Any
    product_id: Any
    warehouse_id: Any
    quantity: Decimal
    category: MovementCategory
    document_type_id: Any | None = None
    source_document_id: Any | None = None
    source_document_number: str = ''
    reason: str = ''
    created_at: datetime | None = None
    id: Any | None = None


@runtime_checkable
class LedgerStore(Protocol):
    """
    Append-only ledger persistence.

    Implementations:
        - OrmLedgerStore: StockMovement rows, sums in SQL
        - MemoryLedgerStore: list of records, sums with Decimal
    """

    def append(self, record: MovementRecord) -> MovementRecord:
        """
        Persist a new movement.

        Returns:
            The stored record, with id and created_at filled in
        """
        ...

    def sum_quantity(
        self,
        tenant_id: Any,
        product_id: Any,
        warehouse_id: Any | None = None,
    ) -> Decimal:
        """
        Sum of quantity over matching rows.

        Returns:
            Decimal('0') when no rows match
        """
        ...

    def sum_quantities(
        self,
        tenant_id: Any,
        product_ids: Iterable[Any],
        warehouse_id: Any | None = None,
    ) -> dict[Any, Decimal]:
        """
        Per-product sums.

        Returns:
            Dict with an entry for every requested id; Decimal('0') when no rows
        """
        ...


@runtime_checkable
class ProductStore(Protocol):
    """Product lookup scoped by tenant."""

    def get_product(self, tenant_id: Any, product_id: Any) -> ProductInfo | None:
        """
        Args:
            tenant_id: Owning organization
            product_id: Product primary key

        Returns:
            ProductInfo or None if the product does not exist for this tenant
        """
        ...

    def lock_product(self, tenant_id: Any, product_id: Any) -> ProductInfo | None:
        """
        get_product() that also serializes concurrent issues of the product.

        Called inside transaction.atomic(); the lock, if any, is held until
        that transaction ends.
        """
        ...
