"""
Stock queries — read-only ledger operations (stock, listing, stats).
"""

from datetime import datetime
from decimal import Decimal

from django.db.models import Count, Max

from ledgerman.adapters import get_ledger_store
from ledgerman.models.movement import StockMovement


class StockQueries:
    """Read-only ledger methods."""

    @classmethod
    def current_stock(cls, product_id, tenant_id, warehouse_id=None, store=None) -> Decimal:
        """
        On-hand quantity: sum of movement quantities.

        Args:
            product_id: Product primary key
            tenant_id: Owning organization
            warehouse_id: Restrict to one warehouse (None = all)

        Returns:
            Decimal; exactly Decimal('0') when the product has no movements
        """
        store = store or get_ledger_store()
        return store.sum_quantity(tenant_id, product_id, warehouse_id)

    @classmethod
    def current_stock_batch(cls, product_ids, tenant_id, warehouse_id=None,
                            store=None) -> dict:
        """
        current_stock() for many products in one query.

        Returns:
            Dict with every requested id; Decimal('0') for ids without movements
            (including ids that are not products at all)
        """
        store = store or get_ledger_store()
        return store.sum_quantities(tenant_id, product_ids, warehouse_id)

    @classmethod
    def list_movements(cls, tenant_id, product_id=None, warehouse_id=None,
                       category=None, source_document_id=None,
                       date_from=None, date_to=None):
        """List movements with filters, newest first."""
        qs = StockMovement.objects.for_tenant(tenant_id).select_related(
            'product', 'warehouse', 'document_type',
        ).at_warehouse(warehouse_id)

        if product_id is not None:
            qs = qs.filter(product_id=product_id)

        if category:
            qs = qs.filter(category=category)

        if source_document_id is not None:
            qs = qs.filter(source_document_id=source_document_id)

        # Dates are inclusive whole days; datetimes are exact bounds
        if isinstance(date_from, datetime):
            qs = qs.filter(created_at__gte=date_from)
        elif date_from is not None:
            qs = qs.filter(created_at__date__gte=date_from)

        if isinstance(date_to, datetime):
            qs = qs.filter(created_at__lte=date_to)
        elif date_to is not None:
            qs = qs.filter(created_at__date__lte=date_to)

        return qs.order_by('-created_at', '-id')

    @classmethod
    def movement_stats(cls, tenant_id) -> dict:
        """
        Counts for a tenant's ledger.

        Returns:
            {'total': int, 'by_category': {category: int}, 'last_movement_at': datetime | None}
        """
        qs = StockMovement.objects.for_tenant(tenant_id)
        by_category = {
            row['category']: row['n']
            for row in qs.order_by().values('category').annotate(n=Count('id'))
        }
        return {
            'total': sum(by_category.values()),
            'by_category': by_category,
            'last_movement_at': qs.aggregate(last=Max('created_at'))['last'],
        }
