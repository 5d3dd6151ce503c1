"""
Stock movements — the ledger write path.

Every stock change is a new StockMovement row. Nothing here updates or deletes
a row; corrections are offsetting movements (see LedgerDocuments).
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from ledgerman.adapters import get_ledger_store, get_product_store
from ledgerman.classifier import classify_movement
from ledgerman.exceptions import LedgerError, ProductNotFound
from ledgerman.protocols.store import MovementRecord

logger = logging.getLogger('ledgerman')


def parse_quantity(value, error_code='INVALID_QUANTITY') -> Decimal:
    """
    Decimal from a Decimal, int or decimal string.

    Floats are refused: they would carry binary rounding into the ledger.

    Raises:
        LedgerError(error_code)
    """
    if isinstance(value, (float, bool)) or value is None:
        raise LedgerError(error_code, requested=value)
    try:
        quantity = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise LedgerError(error_code, requested=value)
    if not quantity.is_finite():
        raise LedgerError(error_code, requested=value)
    return quantity


class StockMovements:
    """Ledger write methods."""

    @classmethod
    def append_movement_for_line(cls, line, type_config, warehouse_id,
                                 source_document_id, source_document_number,
                                 tenant_id, *, fallback_warehouse_id=None,
                                 reason='', store=None, product_store=None):
        """
        Append the movement a document line causes, if any.

        Short-circuits (return None, nothing written), in this order:
            1. type_config.inventory_movement is False
            2. line has no product (free-text line)
            3. product does not manage stock
            4. no warehouse can be resolved

        Warehouse resolution: warehouse_id, then the product's default
        warehouse, then fallback_warehouse_id (the document's main warehouse).

        Args:
            line: Object with product_id and quantity (DocumentLine or similar)
            type_config: DocumentTypeConfig (or object with code,
                inventory_movement and operation_sign_stock)
            warehouse_id: Warehouse set on the line, or None
            source_document_id: Document that caused the movement
            source_document_number: Denormalized document number
            tenant_id: Owning organization

        Returns:
            MovementRecord as stored, or None

        Raises:
            ProductNotFound: Product does not exist for this tenant
            ConfigurationError('MISSING_STOCK_SIGN'): Type moves stock without a sign
            LedgerError('TENANT_MISMATCH'): Product's default warehouse belongs to
                another tenant
            LedgerError('INVALID_QUANTITY'): Quantity is not a decimal
        """
        if not type_config.inventory_movement:
            return cls._skip('not_inventory', type_config, line)

        product_id = getattr(line, 'product_id', None)
        if product_id is None:
            return cls._skip('no_product', type_config, line)

        product_store = product_store or get_product_store()
        product = product_store.get_product(tenant_id, product_id)
        if product is None:
            raise ProductNotFound(
                product_id,
                tenant_id=tenant_id,
                source_document_number=source_document_number,
            )
        if not product.manages_stock:
            return cls._skip('not_stock_managed', type_config, line)

        sign = type_config.require_stock_sign()
        quantity = parse_quantity(line.quantity)

        resolved_warehouse = warehouse_id or product.default_warehouse_id or fallback_warehouse_id
        if resolved_warehouse is None:
            return cls._skip('no_warehouse', type_config, line)

        record = MovementRecord(
            tenant_id=tenant_id,
            product_id=product_id,
            warehouse_id=resolved_warehouse,
            quantity=quantity * sign,
            category=classify_movement(type_config.code, sign),
            document_type_id=getattr(type_config, 'pk', None),
            source_document_id=source_document_id,
            source_document_number=source_document_number or '',
            reason=reason,
        )
        return cls.append(record, store=store)

    @classmethod
    def append(cls, record: MovementRecord, store=None) -> MovementRecord:
        """Persist a ready-made record through the configured store."""
        store = store or get_ledger_store()
        stored = store.append(record)
        logger.info(
            "ledger.movement.appended",
            extra={
                "tenant_id": stored.tenant_id,
                "product_id": stored.product_id,
                "warehouse_id": stored.warehouse_id,
                "qty": str(stored.quantity),
                "category": str(stored.category),
                "source_document_number": stored.source_document_number,
                "movement_id": stored.id,
            },
        )
        return stored

    @classmethod
    def ensure_available(cls, product_id, tenant_id, quantity,
                         warehouse_id=None, store=None, product_store=None) -> Decimal:
        """
        Guard against negative stock before issuing quantity.

        Locks the product through the product store, then sums the ledger. Call it inside the
        transaction that appends the issuing movement: the lock is held until
        that transaction ends, so concurrent issues of the same product queue up.

        Returns:
            Current stock (before the issue)

        Raises:
            ProductNotFound: Product does not exist for this tenant
            LedgerError('INVALID_QUANTITY'): quantity <= 0 or not a decimal
            LedgerError('INSUFFICIENT_STOCK'): Stock is lower than quantity
        """
        quantity = parse_quantity(quantity)
        if quantity <= 0:
            raise LedgerError('INVALID_QUANTITY', requested=quantity)

        store = store or get_ledger_store()
        product_store = product_store or get_product_store()
        with transaction.atomic():
            if product_store.lock_product(tenant_id, product_id) is None:
                raise ProductNotFound(product_id, tenant_id=tenant_id)

            available = store.sum_quantity(tenant_id, product_id, warehouse_id)
            if available < quantity:
                raise LedgerError(
                    'INSUFFICIENT_STOCK',
                    product_id=product_id,
                    warehouse_id=warehouse_id,
                    available=available,
                    requested=quantity,
                )
            return available

    @classmethod
    def _skip(cls, why, type_config, line):
        logger.debug(
            "ledger.movement.skipped",
            extra={
                "skip_reason": why,
                "document_type": getattr(type_config, 'code', None),
                "product_id": getattr(line, 'product_id', None),
            },
        )
        return None
