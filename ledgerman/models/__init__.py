"""
Ledgerman Models.

Core models for the inventory ledger and payment schedules:
- Organization: Tenant scoping key
- Warehouse / ProductType / Product: Where and what is stocked
- Entity: Customers and suppliers (fiscal identifiers)
- DocumentTypeConfig: Per-tenant stock/valuation semantics
- Document / DocumentLine: What feeds the ledger
- StockMovement: Immutable ledger of quantity changes
- PaymentCondition / Installment / Payment / PaymentAllocation: Due dates and payments
"""

from ledgerman.models.catalog import Product, ProductType
from ledgerman.models.document import Document, DocumentLine
from ledgerman.models.document_type import DocumentTypeConfig
from ledgerman.models.entity import Entity
from ledgerman.models.enums import (
    DocumentDirection,
    EntityType,
    InstallmentStatus,
    MovementCategory,
    OperationSign,
    PaymentDirection,
)
from ledgerman.models.movement import StockMovement
from ledgerman.models.organization import Organization, Warehouse
from ledgerman.models.payment import Installment, Payment, PaymentAllocation, PaymentCondition

__all__ = [
    'MovementCategory',
    'OperationSign',
    'DocumentDirection',
    'EntityType',
    'InstallmentStatus',
    'PaymentDirection',
    'Organization',
    'Warehouse',
    'ProductType',
    'Product',
    'Entity',
    'DocumentTypeConfig',
    'Document',
    'DocumentLine',
    'StockMovement',
    'PaymentCondition',
    'Installment',
    'Payment',
    'PaymentAllocation',
]
