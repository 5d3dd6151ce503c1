"""
Pytest fixtures for Ledgerman tests.
"""

from datetime import date

import pytest

from ledgerman.adapters import reset_stores
from ledgerman.classifier import reset_classifier
from ledgerman.models import (
    DocumentDirection,
    DocumentTypeConfig,
    Organization,
    PaymentCondition,
    Product,
    ProductType,
    Warehouse,
)


@pytest.fixture(autouse=True)
def _fresh_caches():
    """Stores and classifier are process-wide; rebuild them per test."""
    reset_stores()
    reset_classifier()
    yield
    reset_stores()
    reset_classifier()


@pytest.fixture
def organization(db):
    """Create the tenant used by most tests."""
    return Organization.objects.create(name='Rossi S.r.l.')


@pytest.fixture
def other_organization(db):
    """Create a second tenant, for isolation tests."""
    return Organization.objects.create(name='Bianchi S.p.A.')


@pytest.fixture
def warehouse(organization):
    return Warehouse.objects.create(organization=organization, code='MAG1', name='Magazzino Centrale')


@pytest.fixture
def second_warehouse(organization):
    return Warehouse.objects.create(organization=organization, code='MAG2', name='Deposito Nord')


@pytest.fixture
def goods_type(organization):
    """Product type that manages stock."""
    return ProductType.objects.create(organization=organization, code='MERCE', name='Merce', manage_stock=True)


@pytest.fixture
def service_type(organization):
    """Product type that never moves stock."""
    return ProductType.objects.create(organization=organization, code='SERV', name='Servizi', manage_stock=False)


@pytest.fixture
def product(organization, goods_type, warehouse):
    """Stock-managed product with a default warehouse."""
    return Product.objects.create(
        organization=organization,
        code='VITE-M6',
        name='Vite M6',
        product_type=goods_type,
        default_warehouse=warehouse,
    )


@pytest.fixture
def second_product(organization, goods_type, warehouse):
    return Product.objects.create(
        organization=organization,
        code='DADO-M6',
        name='Dado M6',
        product_type=goods_type,
        default_warehouse=warehouse,
    )


@pytest.fixture
def service_product(organization, service_type):
    """Product whose type does not manage stock."""
    return Product.objects.create(
        organization=organization,
        code='MONT',
        name='Montaggio',
        product_type=service_type,
    )


def _doc_type(organization, code, **kwargs):
    defaults = {
        'description': code,
        'numerator_code': code,
        'direction': DocumentDirection.SALE,
        'inventory_movement': False,
        'operation_sign_stock': None,
        'valuation_impact': False,
        'operation_sign_valuation': None,
    }
    defaults.update(kwargs)
    return DocumentTypeConfig.objects.create(organization=organization, code=code, **defaults)


@pytest.fixture
def of_type(organization):
    """Supplier order: loads stock, increases costs."""
    return _doc_type(
        organization, 'OF',
        description='Ordine Fornitore',
        direction=DocumentDirection.PURCHASE,
        inventory_movement=True,
        operation_sign_stock=1,
        valuation_impact=True,
        operation_sign_valuation=1,
    )


@pytest.fixture
def ddt_type(organization):
    """Delivery note: unloads stock, no valuation."""
    return _doc_type(
        organization, 'DDT',
        description='DDT Vendita',
        inventory_movement=True,
        operation_sign_stock=-1,
    )


@pytest.fixture
def fai_type(organization):
    """Immediate invoice: unloads stock, increases revenues."""
    return _doc_type(
        organization, 'FAI',
        description='Fattura Immediata',
        inventory_movement=True,
        operation_sign_stock=-1,
        valuation_impact=True,
        operation_sign_valuation=1,
    )


@pytest.fixture
def ndc_type(organization):
    """Credit note: loads stock back, decreases revenues."""
    return _doc_type(
        organization, 'NDC',
        description='Nota di Credito',
        inventory_movement=True,
        operation_sign_stock=1,
        valuation_impact=True,
        operation_sign_valuation=-1,
    )


@pytest.fixture
def ord_type(organization):
    """Customer order: no stock, no valuation."""
    return _doc_type(organization, 'ORD', description='Ordine')


@pytest.fixture
def broken_type(organization):
    """Moves stock but has no sign. Bypasses clean() on purpose."""
    return _doc_type(organization, 'ROTTO', inventory_movement=True, operation_sign_stock=None)


@pytest.fixture
def condition_30_60_90(organization):
    return PaymentCondition.objects.create(
        organization=organization,
        name='30/60/90 gg',
        days_to_first_due=30,
        gap_between_dues=30,
        number_of_dues=3,
    )


@pytest.fixture
def condition_immediate(organization):
    return PaymentCondition.objects.create(
        organization=organization,
        name='Rimessa diretta',
        days_to_first_due=0,
        gap_between_dues=0,
        number_of_dues=1,
    )


@pytest.fixture
def new_year():
    return date(2025, 1, 1)
