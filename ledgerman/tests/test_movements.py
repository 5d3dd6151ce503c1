"""
Tests for the ledger write path (append_movement_for_line, ensure_available).
"""

from dataclasses import replace
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from ledgerman import ConfigurationError, LedgerError, ProductNotFound, ledger
from ledgerman.adapters.orm import OrmLedgerStore
from ledgerman.models import DocumentLine, MovementCategory, Product, ProductType, StockMovement, Warehouse
from ledgerman.protocols.store import MovementRecord


pytestmark = pytest.mark.django_db


def line_for(product, quantity):
    """Unsaved document line; the ledger only reads product_id and quantity."""
    return DocumentLine(product=product, quantity=quantity)


def append(line, type_config, tenant, warehouse=None, number='DOC-1', **kwargs):
    return ledger.append_movement_for_line(
        line,
        type_config,
        warehouse.pk if warehouse else None,
        None,
        number,
        tenant.pk,
        **kwargs,
    )


class TestAppendMovementForLine:
    """Tests for ledger.append_movement_for_line()."""

    def test_stock_receipt(self, organization, product, of_type):
        """OF +1, '10.0000' -> +10.0000 SUPPLIER_RECEIPT."""
        record = append(line_for(product, '10.0000'), of_type, organization, number='OF-1')

        assert record.quantity == Decimal('10.0000')
        assert record.category == MovementCategory.SUPPLIER_RECEIPT

        movement = StockMovement.objects.get(pk=record.id)
        assert movement.quantity == Decimal('10.0000')
        assert movement.source_document_number == 'OF-1'
        assert movement.document_type == of_type
        assert ledger.current_stock(product.pk, organization.pk) == Decimal('10.0000')

    def test_delivery_issue_after_receipt(self, organization, product, of_type, ddt_type):
        """DDT -1, '4.5' after the receipt -> -4.5 DELIVERY_ISSUE, stock 5.5."""
        append(line_for(product, '10.0000'), of_type, organization)
        record = append(line_for(product, '4.5'), ddt_type, organization, number='DDT-1')

        assert record.quantity == Decimal('-4.5')
        assert record.category == MovementCategory.DELIVERY_ISSUE
        assert ledger.current_stock(product.pk, organization.pk) == Decimal('5.5')

    def test_credit_note_is_customer_return(self, organization, product, ndc_type):
        record = append(line_for(product, Decimal('2')), ndc_type, organization)

        assert record.quantity == Decimal('2')
        assert record.category == MovementCategory.CUSTOMER_RETURN

    def test_non_inventory_document_is_noop(self, organization, product, ord_type):
        assert append(line_for(product, '3'), ord_type, organization) is None
        assert StockMovement.objects.count() == 0

    def test_free_text_line_is_noop(self, organization, of_type):
        assert append(line_for(None, '3'), of_type, organization) is None
        assert StockMovement.objects.count() == 0

    def test_non_stock_product_is_noop(self, organization, service_product, of_type):
        assert append(line_for(service_product, '3'), of_type, organization) is None
        assert StockMovement.objects.count() == 0

    def test_untyped_product_is_noop(self, organization, warehouse, of_type):
        untyped = Product.objects.create(
            organization=organization, code='X', name='Senza tipo', default_warehouse=warehouse,
        )
        assert append(line_for(untyped, '3'), of_type, organization) is None

    def test_missing_product_raises(self, organization, of_type):
        line = DocumentLine(product_id=999999, quantity='1')

        with pytest.raises(ProductNotFound) as exc:
            append(line, of_type, organization)

        assert exc.value.code == 'PRODUCT_NOT_FOUND'
        assert exc.value.data['product_id'] == 999999
        assert StockMovement.objects.count() == 0

    def test_product_of_other_tenant_is_not_found(self, organization, other_organization,
                                                  product, of_type):
        with pytest.raises(ProductNotFound):
            append(line_for(product, '1'), of_type, other_organization)

    def test_missing_sign_raises_configuration_error(self, organization, product, broken_type):
        with pytest.raises(ConfigurationError) as exc:
            append(line_for(product, '1'), broken_type, organization)

        assert exc.value.code == 'MISSING_STOCK_SIGN'
        assert isinstance(exc.value, LedgerError)
        assert StockMovement.objects.count() == 0

    @pytest.mark.parametrize('quantity', ['abc', '', None, 1.5, 'NaN', 'Infinity'])
    def test_invalid_quantity(self, organization, product, of_type, quantity):
        with pytest.raises(LedgerError) as exc:
            append(line_for(product, quantity), of_type, organization)

        assert exc.value.code == 'INVALID_QUANTITY'

    def test_explicit_warehouse_wins(self, organization, product, second_warehouse, of_type):
        record = append(line_for(product, '1'), of_type, organization, warehouse=second_warehouse)

        assert record.warehouse_id == second_warehouse.pk

    def test_default_warehouse_used(self, organization, product, warehouse, of_type):
        record = append(line_for(product, '1'), of_type, organization)

        assert record.warehouse_id == warehouse.pk

    def test_fallback_warehouse_used(self, organization, goods_type, second_warehouse, of_type):
        no_default = Product.objects.create(
            organization=organization, code='BULL', name='Bullone', product_type=goods_type,
        )
        record = append(
            line_for(no_default, '1'), of_type, organization,
            fallback_warehouse_id=second_warehouse.pk,
        )

        assert record.warehouse_id == second_warehouse.pk

    def test_no_warehouse_is_noop(self, organization, goods_type, of_type):
        no_default = Product.objects.create(
            organization=organization, code='BULL', name='Bullone', product_type=goods_type,
        )
        assert append(line_for(no_default, '1'), of_type, organization) is None
        assert StockMovement.objects.count() == 0

    def test_default_warehouse_of_other_tenant_raises(self, organization, other_organization,
                                                      goods_type, of_type):
        foreign_warehouse = Warehouse.objects.create(organization=other_organization, code='EXT', name='Esterno')
        misplaced = Product.objects.create(
            organization=organization, code='DADO', name='Dado', product_type=goods_type,
            default_warehouse=foreign_warehouse,
        )

        with pytest.raises(LedgerError) as exc:
            append(line_for(misplaced, '1'), of_type, organization)

        assert exc.value.code == 'TENANT_MISMATCH'
        assert exc.value.data['other_organization_id'] == other_organization.pk
        assert StockMovement.objects.count() == 0


class TestImmutability:
    """StockMovement rows can't be changed or removed."""

    def test_update_raises(self, organization, product, of_type):
        record = append(line_for(product, '1'), of_type, organization)
        movement = StockMovement.objects.get(pk=record.id)
        movement.quantity = Decimal('100')

        with pytest.raises(LedgerError) as exc:
            movement.save()

        assert exc.value.code == 'IMMUTABLE_MOVEMENT'
        movement.refresh_from_db()
        assert movement.quantity == Decimal('1')

    def test_delete_raises(self, organization, product, of_type):
        record = append(line_for(product, '1'), of_type, organization)
        movement = StockMovement.objects.get(pk=record.id)

        with pytest.raises(LedgerError) as exc:
            movement.delete()

        assert exc.value.code == 'IMMUTABLE_MOVEMENT'
        assert StockMovement.objects.filter(pk=record.id).exists()


class TestEnsureAvailable:
    """Tests for ledger.ensure_available()."""

    def test_enough_stock(self, organization, product, of_type):
        append(line_for(product, '10'), of_type, organization)

        assert ledger.ensure_available(product.pk, organization.pk, Decimal('10')) == Decimal('10')

    def test_insufficient_stock(self, organization, product, of_type):
        append(line_for(product, '3'), of_type, organization)

        with pytest.raises(LedgerError) as exc:
            ledger.ensure_available(product.pk, organization.pk, Decimal('5'))

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        assert exc.value.available == Decimal('3')

    def test_scoped_by_warehouse(self, organization, product, second_warehouse, of_type):
        append(line_for(product, '3'), of_type, organization)

        with pytest.raises(LedgerError):
            ledger.ensure_available(product.pk, organization.pk, Decimal('1'),
                                    warehouse_id=second_warehouse.pk)

    def test_invalid_quantity(self, organization, product):
        with pytest.raises(LedgerError) as exc:
            ledger.ensure_available(product.pk, organization.pk, Decimal('0'))

        assert exc.value.code == 'INVALID_QUANTITY'

    def test_unknown_product(self, organization):
        with pytest.raises(ProductNotFound):
            ledger.ensure_available(424242, organization.pk, Decimal('1'))


class TestProductClean:
    """Tests for Product.clean()."""

    def test_relations_of_other_tenant(self, organization, other_organization):
        foreign_type = ProductType.objects.create(organization=other_organization, code='MERCE', name='Merce')
        foreign_warehouse = Warehouse.objects.create(organization=other_organization, code='EXT', name='Esterno')
        product = Product(
            organization=organization, code='DADO', name='Dado',
            product_type=foreign_type, default_warehouse=foreign_warehouse,
        )

        with pytest.raises(ValidationError) as exc:
            product.full_clean()

        assert 'product_type' in exc.value.message_dict
        assert 'default_warehouse' in exc.value.message_dict

    def test_same_tenant_is_valid(self, product):
        product.full_clean()


class TestOrmLedgerStore:
    """Tests for OrmLedgerStore.append()."""

    def test_every_record_field_is_stored(self, organization, product, warehouse, of_type):
        record = MovementRecord(
            tenant_id=organization.pk,
            product_id=product.pk,
            warehouse_id=warehouse.pk,
            quantity=Decimal('2.5000'),
            category=MovementCategory.SUPPLIER_RECEIPT,
            document_type_id=of_type.pk,
            source_document_number='OF-9',
            reason='rettifica inventario',
        )

        stored = OrmLedgerStore().append(record)

        assert stored.id is not None
        assert stored.created_at is not None
        assert replace(stored, id=None, created_at=None) == record
