"""
StockMovement model — Immutable ledger of quantity changes.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import MovementCategory


class StockMovementQuerySet(models.QuerySet):

    def for_tenant(self, tenant_id):
        """Every ledger read starts here; there is no cross-tenant query."""
        return self.filter(organization_id=tenant_id)

    def at_warehouse(self, warehouse_id):
        if warehouse_id is None:
            return self
        return self.filter(warehouse_id=warehouse_id)


class StockMovement(models.Model):
    """
    Immutable record of a signed quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new movements with inverse quantity
    - Stock is SUM(quantity); there is no cached balance anywhere

    This is the ONLY model that changes stock.
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Organizzazione'),
    )
    product = models.ForeignKey(
        'ledgerman.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Prodotto'),
    )
    warehouse = models.ForeignKey(
        'ledgerman.Warehouse',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Magazzino'),
    )
    quantity = models.DecimalField(
        max_digits=18,
        decimal_places=4,
        verbose_name=_('Quantità'),
        help_text=_('Positivo = carico, Negativo = scarico'),
    )
    category = models.CharField(
        max_length=30,
        choices=MovementCategory.choices,
        verbose_name=_('Tipo movimento'),
    )
    document_type = models.ForeignKey(
        'ledgerman.DocumentTypeConfig',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Tipo documento'),
    )
    source_document = models.ForeignKey(
        'ledgerman.Document',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='stock_movements',
        verbose_name=_('Documento origine'),
    )
    # Denormalized for lookup
    source_document_number = models.CharField(
        max_length=50,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Numero documento'),
    )
    reason = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Causale'))
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Ora'))

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movimento di magazzino')
        verbose_name_plural = _('Movimenti di magazzino')
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['organization', 'product'], name='ledgerman_mov_org_prod_idx'),
            models.Index(fields=['organization', 'product', 'warehouse'], name='ledgerman_mov_org_prod_wh_idx'),
            models.Index(fields=['source_document'], name='ledgerman_mov_source_doc_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise LedgerError(
                'IMMUTABLE_MOVEMENT',
                'Movimenti immutabili. Per correggere, crea un nuovo movimento con quantità inversa.',
                movement_id=self.pk,
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise LedgerError(
            'IMMUTABLE_MOVEMENT',
            'Movimenti immutabili. Per stornare, crea un nuovo movimento con quantità inversa.',
            movement_id=self.pk,
        )

    def __str__(self) -> str:
        signal = '+' if self.quantity > 0 else ''
        return f"{signal}{self.quantity} | {self.get_category_display()} {self.source_document_number}"
