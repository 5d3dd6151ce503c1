"""
ORM Store Adapter — ledger persistence on Django models.

Default backend. Must be called inside the caller's transaction.atomic()
block so movements commit or roll back with the document that caused them.

Settings:
    LEDGERMAN = {
        "LEDGER_STORE": "ledgerman.adapters.orm.OrmLedgerStore",
        "PRODUCT_STORE": "ledgerman.adapters.orm.OrmProductStore",
    }
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from django.db.models import Sum
from django.db.models.functions import Coalesce

from ledgerman.exceptions import LedgerError
from ledgerman.models.catalog import Product
from ledgerman.models.movement import StockMovement
from ledgerman.protocols.store import MovementRecord, ProductInfo


def _to_record(movement: StockMovement) -> MovementRecord:
    return MovementRecord(
        id=movement.pk,
        tenant_id=movement.organization_id,
        product_id=movement.product_id,
        warehouse_id=movement.warehouse_id,
        quantity=movement.quantity,
        category=movement.category,
        document_type_id=movement.document_type_id,
        source_document_id=movement.source_document_id,
        source_document_number=movement.source_document_number,
        reason=movement.reason,
        created_at=movement.created_at,
    )


class OrmLedgerStore:
    """LedgerStore backed by the StockMovement table."""

    def append(self, record: MovementRecord) -> MovementRecord:
        movement = StockMovement.objects.create(
            organization_id=record.tenant_id,
            product_id=record.product_id,
            warehouse_id=record.warehouse_id,
            quantity=record.quantity,
            category=record.category,
            document_type_id=record.document_type_id,
            source_document_id=record.source_document_id,
            source_document_number=record.source_document_number,
            reason=record.reason,
        )
        return _to_record(movement)

    def sum_quantity(self, tenant_id: Any, product_id: Any,
                     warehouse_id: Any | None = None) -> Decimal:
        return StockMovement.objects.for_tenant(tenant_id).filter(
            product_id=product_id,
        ).at_warehouse(warehouse_id).aggregate(
            t=Coalesce(Sum('quantity'), Decimal('0'))
        )['t']

    def sum_quantities(self, tenant_id: Any, product_ids: Iterable[Any],
                       warehouse_id: Any | None = None) -> dict[Any, Decimal]:
        product_ids = list(product_ids)
        totals = {pid: Decimal('0') for pid in product_ids}
        if not product_ids:
            return totals

        rows = StockMovement.objects.for_tenant(tenant_id).filter(
            product_id__in=product_ids,
        ).at_warehouse(warehouse_id).order_by().values('product_id').annotate(
            total=Sum('quantity')
        )
        for row in rows:
            if row['total'] is not None:
                totals[row['product_id']] = row['total']
        return totals


class OrmProductStore:
    """ProductStore backed by the Product table."""

    def get_product(self, tenant_id: Any, product_id: Any) -> ProductInfo | None:
        product = Product.objects.select_related('product_type', 'default_warehouse').filter(
            organization_id=tenant_id,
            pk=product_id,
        ).first()
        return _to_info(product)

    def lock_product(self, tenant_id: Any, product_id: Any) -> ProductInfo | None:
        product = Product.objects.select_for_update(of=('self',)).select_related(
            'product_type', 'default_warehouse',
        ).filter(
            organization_id=tenant_id,
            pk=product_id,
        ).first()
        return _to_info(product)


def _to_info(product: Product | None) -> ProductInfo | None:
    if product is None:
        return None

    warehouse = product.default_warehouse
    if warehouse is not None and warehouse.organization_id != product.organization_id:
        raise LedgerError(
            'TENANT_MISMATCH',
            field='default_warehouse',
            product_id=product.pk,
            organization_id=product.organization_id,
            other_organization_id=warehouse.organization_id,
        )

    return ProductInfo(
        id=product.pk,
        tenant_id=product.organization_id,
        manages_stock=product.manages_stock,
        default_warehouse_id=product.default_warehouse_id,
    )
