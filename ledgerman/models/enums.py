"""
Enums for Ledgerman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementCategory(models.TextChoices):
    """
    Closed set of stock movement categories.

    Derived from (document type code, stock sign) by the classifier;
    never chosen by hand.
    """
    SUPPLIER_RECEIPT = 'supplier_receipt', _('Carico fornitore')
    CUSTOMER_RETURN = 'customer_return', _('Reso cliente')
    SUPPLIER_RETURN = 'supplier_return', _('Reso a fornitore')
    DELIVERY_ISSUE = 'delivery_issue', _('Scarico DDT')
    SALES_ISSUE = 'sales_issue', _('Scarico vendita')


class OperationSign(models.IntegerChoices):
    """Direction of a document type's effect on stock or valuation."""
    INCREASE = 1, _('Carico / incremento')    # +1
    DECREASE = -1, _('Scarico / decremento')  # -1


class DocumentDirection(models.TextChoices):
    """Whether a document type is on the sales or purchase side."""
    SALE = 'sale', _('Vendita')
    PURCHASE = 'purchase', _('Acquisto')
    INTERNAL = 'internal', _('Interno')


class EntityType(models.TextChoices):
    CLIENT = 'client', _('Cliente')
    SUPPLIER = 'supplier', _('Fornitore')
    BOTH = 'both', _('Cliente e fornitore')


class InstallmentStatus(models.TextChoices):
    """Installment payment status, derived from allocations, never stored."""
    PENDING = 'pending', _('Da pagare')
    PARTIAL = 'partial', _('Parzialmente pagata')
    PAID = 'paid', _('Pagata')


class PaymentDirection(models.TextChoices):
    INFLOW = 'inflow', _('Entrata')
    OUTFLOW = 'outflow', _('Uscita')
