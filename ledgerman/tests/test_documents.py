"""
Tests for the document save workflow.
"""

from datetime import date
from decimal import Decimal

import pytest

from ledgerman import ConfigurationError, LedgerError, LineInput, ledger
from ledgerman.models import (
    Document,
    DocumentLine,
    Installment,
    MovementCategory,
    PaymentCondition,
    PaymentDirection,
    Product,
    ProductType,
    StockMovement,
    Warehouse,
)


pytestmark = pytest.mark.django_db


class TestSaveDocument:
    """Tests for ledger.save_document()."""

    def test_lines_totals_and_movements(self, organization, product, second_product, of_type, new_year):
        document = ledger.save_document(
            organization, of_type, 'OF-1', new_year,
            [
                LineInput(product=product, quantity='10', unit_price='1.25', vat_rate='0.22'),
                LineInput(product=second_product, quantity='4', unit_price='0.10', vat_rate='0.22'),
                LineInput(description='Trasporto', quantity='1', unit_price='15', vat_rate='0.22'),
            ],
        )

        assert document.lines.count() == 3
        assert document.net_total == Decimal('27.90')
        assert document.vat_total == Decimal('6.14')
        assert document.gross_total == Decimal('34.04')

        document.refresh_from_db()
        assert document.gross_total == Decimal('34.04')

        movements = StockMovement.objects.filter(source_document=document)
        assert movements.count() == 2
        assert all(m.category == MovementCategory.SUPPLIER_RECEIPT for m in movements)
        assert ledger.current_stock(product.pk, organization.pk) == Decimal('10')
        assert ledger.current_stock(second_product.pk, organization.pk) == Decimal('4')

    def test_line_amounts_are_rounded(self, organization, product, ord_type, new_year):
        document = ledger.save_document(
            organization, ord_type, 'ORD-1', new_year,
            [LineInput(product=product, quantity='3', unit_price='0.3333', vat_rate='0.22')],
        )
        line = document.lines.get()

        assert line.net_amount == Decimal('1.00')
        assert line.vat_amount == Decimal('0.22')
        assert line.gross_amount == Decimal('1.22')

    def test_non_inventory_document_writes_no_movements(self, organization, product, ord_type, new_year):
        ledger.save_document(
            organization, ord_type, 'ORD-1', new_year,
            [LineInput(product=product, quantity='5', unit_price='1')],
        )

        assert StockMovement.objects.count() == 0

    def test_main_warehouse_is_last_fallback(self, organization, goods_type, second_warehouse,
                                             of_type, new_year):
        no_default = Product.objects.create(
            organization=organization, code='BULL', name='Bullone', product_type=goods_type,
        )
        document = ledger.save_document(
            organization, of_type, 'OF-1', new_year,
            [LineInput(product=no_default, quantity='2')],
            main_warehouse=second_warehouse,
        )

        movement = StockMovement.objects.get(source_document=document)
        assert movement.warehouse == second_warehouse

    def test_installments_created(self, organization, product, fai_type, condition_30_60_90, new_year):
        document = ledger.save_document(
            organization, fai_type, 'FAI-1', new_year,
            [LineInput(product=product, quantity='3', unit_price='100', vat_rate='0.22')],
            payment_condition=condition_30_60_90,
        )

        installments = list(document.installments.order_by('sequence_number'))
        assert [i.due_date for i in installments] == [
            date(2025, 1, 31),
            date(2025, 3, 2),
            date(2025, 4, 1),
        ]
        assert [i.amount for i in installments] == [Decimal('122.00')] * 3
        assert all(i.organization_id == organization.pk for i in installments)

    def test_no_condition_no_installments(self, organization, product, fai_type, new_year):
        document = ledger.save_document(
            organization, fai_type, 'FAI-1', new_year,
            [LineInput(product=product, quantity='1', unit_price='10')],
        )

        assert document.installments.count() == 0

    def test_rollback_on_invalid_line(self, organization, product, of_type, new_year):
        """The first line's movement must not survive the second line's failure."""
        with pytest.raises(LedgerError) as exc:
            ledger.save_document(
                organization, of_type, 'OF-1', new_year,
                [
                    LineInput(product=product, quantity='10'),
                    LineInput(product=product, quantity='dieci'),
                ],
            )

        assert exc.value.code == 'INVALID_QUANTITY'
        assert Document.objects.count() == 0
        assert DocumentLine.objects.count() == 0
        assert StockMovement.objects.count() == 0

    def test_rollback_on_missing_sign(self, organization, product, broken_type,
                                      condition_immediate, new_year):
        with pytest.raises(ConfigurationError):
            ledger.save_document(
                organization, broken_type, 'X-1', new_year,
                [LineInput(product=product, quantity='1', unit_price='5')],
                payment_condition=condition_immediate,
            )

        assert Document.objects.count() == 0
        assert Installment.objects.count() == 0

    def test_product_of_other_tenant(self, organization, other_organization, of_type, new_year):
        other_type = ProductType.objects.create(organization=other_organization, code='MERCE', name='Merce')
        foreign = Product.objects.create(
            organization=other_organization, code='EXT', name='Esterno', product_type=other_type,
        )

        with pytest.raises(LedgerError) as exc:
            ledger.save_document(
                organization, of_type, 'OF-1', new_year,
                [LineInput(product=foreign, quantity='1')],
            )

        assert exc.value.code == 'TENANT_MISMATCH'
        assert exc.value.data['field'] == 'product'
        assert Document.objects.count() == 0

    def test_default_warehouse_of_other_tenant(self, organization, other_organization, goods_type,
                                               of_type, new_year):
        foreign_warehouse = Warehouse.objects.create(organization=other_organization, code='EXT', name='Esterno')
        misplaced = Product.objects.create(
            organization=organization, code='DADO', name='Dado', product_type=goods_type,
            default_warehouse=foreign_warehouse,
        )

        with pytest.raises(LedgerError) as exc:
            ledger.save_document(
                organization, of_type, 'OF-1', new_year,
                [LineInput(product=misplaced, quantity='5')],
            )

        assert exc.value.code == 'TENANT_MISMATCH'
        assert exc.value.data['field'] == 'default_warehouse'
        assert Document.objects.count() == 0
        assert StockMovement.objects.count() == 0

    def test_tiny_total_over_many_dues(self, organization, product, fai_type, new_year):
        monthly = PaymentCondition.objects.create(
            organization=organization, name='24 rate quindicinali',
            days_to_first_due=15, gap_between_dues=15, number_of_dues=24,
        )

        document = ledger.save_document(
            organization, fai_type, 'FAI-1', new_year,
            [LineInput(product=product, quantity='1', unit_price='0.20')],
            payment_condition=monthly,
        )

        amounts = list(document.installments.order_by('sequence_number').values_list('amount', flat=True))
        assert len(amounts) == 24
        assert sum(amounts) == Decimal('0.20')
        assert all(amount >= 0 for amount in amounts)

    def test_document_type_of_other_tenant(self, organization, other_organization, of_type, new_year):
        with pytest.raises(LedgerError) as exc:
            ledger.save_document(other_organization, of_type, 'OF-1', new_year, [])

        assert exc.value.code == 'TENANT_MISMATCH'


class TestReplaceDocumentLines:
    """Tests for ledger.replace_document_lines()."""

    def test_offsets_and_new_movements(self, organization, product, second_warehouse,
                                       ddt_type, new_year):
        document = ledger.save_document(
            organization, ddt_type, 'DDT-1', new_year,
            [LineInput(product=product, quantity='4')],
        )
        original = StockMovement.objects.get(source_document=document)

        ledger.replace_document_lines(
            document,
            [LineInput(product=product, quantity='1', warehouse=second_warehouse)],
        )

        movements = list(StockMovement.objects.filter(source_document=document).order_by('id'))
        assert len(movements) == 3
        assert movements[0].pk == original.pk
        assert movements[0].quantity == Decimal('-4')
        assert movements[1].quantity == Decimal('4')
        assert movements[1].warehouse_id == product.default_warehouse_id
        assert movements[1].reason == 'Storno righe documento'
        assert movements[2].quantity == Decimal('-1')
        assert movements[2].warehouse == second_warehouse

        assert ledger.current_stock(product.pk, organization.pk) == Decimal('-1')
        assert ledger.current_stock(product.pk, organization.pk, product.default_warehouse_id) == Decimal('0')
        assert document.lines.count() == 1

    def test_replacing_twice_offsets_only_the_net(self, organization, product, ddt_type, new_year):
        document = ledger.save_document(
            organization, ddt_type, 'DDT-1', new_year,
            [LineInput(product=product, quantity='4')],
        )
        ledger.replace_document_lines(document, [LineInput(product=product, quantity='2')])
        ledger.replace_document_lines(document, [LineInput(product=product, quantity='3')])

        assert ledger.current_stock(product.pk, organization.pk) == Decimal('-3')
        assert StockMovement.objects.filter(source_document=document).count() == 5

    def test_empty_replacement_zeroes_the_document(self, organization, product, of_type, new_year):
        document = ledger.save_document(
            organization, of_type, 'OF-1', new_year,
            [LineInput(product=product, quantity='7', unit_price='2')],
        )

        document = ledger.replace_document_lines(document, [])

        assert ledger.current_stock(product.pk, organization.pk) == Decimal('0')
        assert document.gross_total == Decimal('0')
        assert document.lines.count() == 0

    def test_installments_regenerated_without_allocations(self, organization, product, fai_type,
                                                          condition_30_60_90, new_year):
        document = ledger.save_document(
            organization, fai_type, 'FAI-1', new_year,
            [LineInput(product=product, quantity='3', unit_price='100', vat_rate='0.22')],
            payment_condition=condition_30_60_90,
        )

        ledger.replace_document_lines(
            document,
            [LineInput(product=product, quantity='1', unit_price='100', vat_rate='0.22')],
        )

        amounts = list(document.installments.order_by('sequence_number').values_list('amount', flat=True))
        assert amounts == [Decimal('40.67'), Decimal('40.67'), Decimal('40.66')]

    def test_installments_kept_with_allocations(self, organization, product, fai_type,
                                                condition_30_60_90, new_year):
        document = ledger.save_document(
            organization, fai_type, 'FAI-1', new_year,
            [LineInput(product=product, quantity='3', unit_price='100', vat_rate='0.22')],
            payment_condition=condition_30_60_90,
        )
        first = document.installments.get(sequence_number=1)
        payment = ledger.register_payment(organization, Decimal('10'), new_year, PaymentDirection.INFLOW)
        ledger.allocate_payment(payment, {first.pk: Decimal('10')})

        ledger.replace_document_lines(
            document,
            [LineInput(product=product, quantity='1', unit_price='100', vat_rate='0.22')],
        )

        installments = document.installments.order_by('sequence_number')
        assert [i.amount for i in installments] == [Decimal('122.00')] * 3
        assert installments[0].pk == first.pk
