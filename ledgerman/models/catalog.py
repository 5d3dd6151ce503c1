"""
Catalog models: ProductType decides whether a Product is stock-managed.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class ProductType(models.Model):
    """
    Classification of products.

    manage_stock=False marks services and other goods that never move stock.
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='product_types',
        verbose_name=_('Organizzazione'),
    )
    code = models.CharField(max_length=20, verbose_name=_('Codice'))
    name = models.CharField(max_length=100, verbose_name=_('Descrizione'))
    manage_stock = models.BooleanField(
        default=True,
        verbose_name=_('Gestisce magazzino'),
        help_text=_('Se False, i prodotti di questo tipo non generano movimenti.'),
    )

    class Meta:
        verbose_name = _('Tipo prodotto')
        verbose_name_plural = _('Tipi prodotto')
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(
                fields=['organization', 'code'],
                name='unique_product_type_code_per_organization',
            )
        ]

    def __str__(self) -> str:
        return self.name


class Product(models.Model):
    """
    Sellable/purchasable article.

    There is deliberately no stock column: on-hand quantity is always the
    sum of StockMovement rows (see ledgerman.services.queries).
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='products',
        verbose_name=_('Organizzazione'),
    )
    code = models.CharField(max_length=50, verbose_name=_('Codice'))
    name = models.CharField(max_length=255, verbose_name=_('Descrizione'))
    product_type = models.ForeignKey(
        ProductType,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Tipo prodotto'),
    )
    default_warehouse = models.ForeignKey(
        'ledgerman.Warehouse',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Magazzino predefinito'),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Prodotto')
        verbose_name_plural = _('Prodotti')
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(
                fields=['organization', 'code'],
                name='unique_product_code_per_organization',
            )
        ]

    def clean(self):
        super().clean()
        errors = {}
        if self.product_type_id and self.product_type.organization_id != self.organization_id:
            errors['product_type'] = _('Tipo prodotto di un\'altra organizzazione')
        if self.default_warehouse_id and self.default_warehouse.organization_id != self.organization_id:
            errors['default_warehouse'] = _('Magazzino di un\'altra organizzazione')
        if errors:
            raise ValidationError(errors)

    @property
    def manages_stock(self) -> bool:
        """Inherited from the product type; untyped products never move stock."""
        return bool(self.product_type and self.product_type.manage_stock)

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
