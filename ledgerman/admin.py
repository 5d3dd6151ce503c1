"""
Ledgerman Admin.

Configuration models are editable; the ledger and the schedule are not:
- DocumentTypeConfig / PaymentCondition / Warehouse / Product: list + edit
- Entity: list + edit (fiscal identifiers validated on save)
- Document: read-only, lines inline (documents go through ledger.save_document)
- StockMovement: read-only audit trail
- Installment: read-only with derived paid amount and status
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from ledgerman.models import (
    Document,
    DocumentLine,
    DocumentTypeConfig,
    Entity,
    Installment,
    Organization,
    Payment,
    PaymentAllocation,
    PaymentCondition,
    Product,
    ProductType,
    StockMovement,
    Warehouse,
)


class ReadOnlyAdminMixin:
    """No add, change or delete. Rows only change through the ledger service."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# CONFIGURATION (editable)
# =========================================================================

@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']
    search_fields = ['name']


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'organization']
    list_filter = ['organization']
    search_fields = ['code', 'name']


@admin.register(ProductType)
class ProductTypeAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'manage_stock', 'organization']
    list_filter = ['organization', 'manage_stock']
    search_fields = ['code', 'name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'product_type', 'default_warehouse', 'organization']
    list_filter = ['organization', 'product_type']
    search_fields = ['code', 'name']


@admin.register(Entity)
class EntityAdmin(admin.ModelAdmin):
    list_display = ['business_name', 'entity_type', 'vat_number', 'fiscal_code', 'organization']
    list_filter = ['organization', 'entity_type']
    search_fields = ['business_name', 'vat_number', 'fiscal_code']


@admin.register(DocumentTypeConfig)
class DocumentTypeConfigAdmin(admin.ModelAdmin):
    """Document type admin, editable. clean() enforces sign/flag coherence."""

    list_display = ['code', 'description', 'direction', 'inventory_movement',
                    'operation_sign_stock', 'valuation_impact',
                    'operation_sign_valuation', 'active', 'organization']
    list_filter = ['organization', 'direction', 'inventory_movement',
                   'valuation_impact', 'active']
    search_fields = ['code', 'description']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(PaymentCondition)
class PaymentConditionAdmin(admin.ModelAdmin):
    list_display = ['name', 'days_to_first_due', 'gap_between_dues',
                    'number_of_dues', 'is_end_of_month', 'active', 'organization']
    list_filter = ['organization', 'is_end_of_month', 'active']
    search_fields = ['name']


# =========================================================================
# DOCUMENTS (read-only)
# =========================================================================

class DocumentLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = DocumentLine
    extra = 0
    fields = ['product', 'description', 'quantity', 'unit_price', 'vat_rate',
              'net_amount', 'vat_amount', 'gross_amount', 'warehouse']
    readonly_fields = fields


@admin.register(Document)
class DocumentAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """Document admin, read-only. Saving goes through ledger.save_document()."""

    list_display = ['number', 'date', 'document_type', 'entity', 'gross_total', 'organization']
    list_filter = ['organization', 'document_type']
    search_fields = ['number']
    date_hierarchy = 'date'
    inlines = [DocumentLineInline]


# =========================================================================
# STOCK MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockMovement)
class StockMovementAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """StockMovement admin, read-only. Immutable audit trail."""

    list_display = ['created_at', 'product', 'warehouse', 'quantity', 'category',
                    'source_document_number', 'organization']
    list_filter = ['organization', 'category', 'warehouse']
    search_fields = ['source_document_number', 'reason']
    readonly_fields = ['organization', 'product', 'warehouse', 'quantity', 'category',
                       'document_type', 'source_document', 'source_document_number',
                       'reason', 'created_at']
    date_hierarchy = 'created_at'


# =========================================================================
# INSTALLMENTS AND PAYMENTS (read-only)
# =========================================================================

@admin.register(Installment)
class InstallmentAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """Installment admin, read-only. Status is derived from allocations."""

    list_display = ['document', 'sequence_number', 'due_date', 'amount',
                    'paid_display', 'status_display']
    list_filter = ['organization', 'due_date']
    search_fields = ['document__number']
    date_hierarchy = 'due_date'

    def get_queryset(self, request):
        return super().get_queryset(request).with_paid_amount().select_related('document')

    @admin.display(description=_('Pagato'))
    def paid_display(self, obj):
        return obj.paid_amount

    @admin.display(description=_('Stato'))
    def status_display(self, obj):
        return obj.status


class PaymentAllocationInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = PaymentAllocation
    extra = 0
    fields = ['installment', 'amount', 'updated_at']
    readonly_fields = fields


@admin.register(Payment)
class PaymentAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """Payment admin, read-only. Allocation goes through ledger.allocate_payment()."""

    list_display = ['date', 'direction', 'amount', 'reference', 'organization']
    list_filter = ['organization', 'direction']
    search_fields = ['reference']
    date_hierarchy = 'date'
    inlines = [PaymentAllocationInline]
