"""
DocumentTypeConfig model — per-tenant semantics of a document category.
"""

from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import DocumentDirection, OperationSign


class DocumentTypeConfig(models.Model):
    """
    Whether (and with which sign) a document category moves stock and valuation.

    Edited by tenant admins; read-only at document-save time.

    Flags:
    - inventory_movement: lines move stock; operation_sign_stock is required
    - valuation_impact: lines move costs/revenues; operation_sign_valuation is required

    The two signs are independent. A credit note, for example, loads stock
    (+1) while decreasing revenues (-1).
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='document_types',
        verbose_name=_('Organizzazione'),
    )
    code = models.CharField(
        max_length=20,
        validators=[
            RegexValidator(
                r'^[A-Z0-9_]{2,20}$',
                _('Codice: 2-20 caratteri tra lettere maiuscole, numeri e underscore'),
            )
        ],
        verbose_name=_('Codice'),
        help_text=_('Es: DDT, FAI, NDC, OF'),
    )
    description = models.CharField(max_length=200, verbose_name=_('Descrizione'))
    numerator_code = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Codice numeratore'),
    )
    direction = models.CharField(
        max_length=20,
        choices=DocumentDirection.choices,
        default=DocumentDirection.SALE,
        verbose_name=_('Direzione'),
    )
    inventory_movement = models.BooleanField(
        default=False,
        verbose_name=_('Movimenta magazzino'),
    )
    operation_sign_stock = models.SmallIntegerField(
        choices=OperationSign.choices,
        null=True,
        blank=True,
        verbose_name=_('Segno magazzino'),
    )
    valuation_impact = models.BooleanField(
        default=False,
        verbose_name=_('Impatto valorizzazione'),
    )
    operation_sign_valuation = models.SmallIntegerField(
        choices=OperationSign.choices,
        null=True,
        blank=True,
        verbose_name=_('Segno valorizzazione'),
    )
    active = models.BooleanField(default=True, verbose_name=_('Attivo'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Tipo documento')
        verbose_name_plural = _('Tipi documento')
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(
                fields=['organization', 'code'],
                name='unique_document_type_code_per_organization',
            ),
            models.CheckConstraint(
                condition=models.Q(operation_sign_stock__isnull=True)
                | models.Q(operation_sign_stock__in=[1, -1]),
                name='document_type_stock_sign_values',
            ),
            models.CheckConstraint(
                condition=models.Q(operation_sign_valuation__isnull=True)
                | models.Q(operation_sign_valuation__in=[1, -1]),
                name='document_type_valuation_sign_values',
            ),
        ]

    def clean(self):
        super().clean()
        errors = {}
        if self.inventory_movement and self.operation_sign_stock is None:
            errors['operation_sign_stock'] = _('Obbligatorio se il documento movimenta magazzino')
        if self.valuation_impact and self.operation_sign_valuation is None:
            errors['operation_sign_valuation'] = _('Obbligatorio se il documento ha impatto di valorizzazione')
        if errors:
            raise ValidationError(errors)

    def require_stock_sign(self) -> int:
        """
        Stock sign for an inventory-moving type.

        Raises:
            ConfigurationError('MISSING_STOCK_SIGN'): If the flag is on but the sign
                is unset. The sign is never guessed.
        """
        from ledgerman.exceptions import ConfigurationError

        if self.operation_sign_stock is None:
            raise ConfigurationError(
                'MISSING_STOCK_SIGN',
                document_type=self.code,
                document_type_id=self.pk,
            )
        return int(self.operation_sign_stock)

    @property
    def affects_valuation(self) -> bool:
        return bool(self.valuation_impact and self.operation_sign_valuation)

    def __str__(self) -> str:
        return f"{self.code} - {self.description}"
