"""
Document and DocumentLine: the inputs that feed the ledger.

Numbering and rendering are handled elsewhere; here a document only
carries what the stock ledger and the installment generator need.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class Document(models.Model):
    """A saved business document (order, delivery note, invoice, credit note...)."""

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='documents',
        verbose_name=_('Organizzazione'),
    )
    document_type = models.ForeignKey(
        'ledgerman.DocumentTypeConfig',
        on_delete=models.PROTECT,
        related_name='documents',
        verbose_name=_('Tipo documento'),
    )
    number = models.CharField(max_length=50, verbose_name=_('Numero'))
    date = models.DateField(verbose_name=_('Data'))
    entity = models.ForeignKey(
        'ledgerman.Entity',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='documents',
        verbose_name=_('Anagrafica'),
    )
    main_warehouse = models.ForeignKey(
        'ledgerman.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Magazzino principale'),
    )
    payment_condition = models.ForeignKey(
        'ledgerman.PaymentCondition',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='documents',
        verbose_name=_('Condizione di pagamento'),
    )
    net_total = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal('0'), verbose_name=_('Imponibile'),
    )
    vat_total = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal('0'), verbose_name=_('IVA'),
    )
    gross_total = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal('0'), verbose_name=_('Totale'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Note'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Documento')
        verbose_name_plural = _('Documenti')
        ordering = ['-date', '-id']
        indexes = [
            models.Index(fields=['organization', 'date'], name='ledgerman_doc_org_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.document_type.code} {self.number}"


class DocumentLine(models.Model):
    """
    One row of a document.

    product=None is a free-text line; it never moves stock.
    """

    document = models.ForeignKey(
        Document,
        on_delete=models.CASCADE,
        related_name='lines',
        verbose_name=_('Documento'),
    )
    product = models.ForeignKey(
        'ledgerman.Product',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Prodotto'),
    )
    description = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Descrizione'))
    quantity = models.DecimalField(max_digits=18, decimal_places=4, verbose_name=_('Quantità'))
    unit_price = models.DecimalField(
        max_digits=14, decimal_places=4, default=Decimal('0'), verbose_name=_('Prezzo unitario'),
    )
    vat_rate = models.DecimalField(
        max_digits=5, decimal_places=4, default=Decimal('0'), verbose_name=_('Aliquota IVA'),
        help_text=_('Frazione: 0.22 per 22%'),
    )
    net_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    vat_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    gross_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    warehouse = models.ForeignKey(
        'ledgerman.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Magazzino'),
    )

    class Meta:
        verbose_name = _('Riga documento')
        verbose_name_plural = _('Righe documento')
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.description or self.product_id} x {self.quantity}"
