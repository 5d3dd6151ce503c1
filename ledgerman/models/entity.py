"""
Entity model: customers and suppliers with Italian fiscal identifiers.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from ledgerman.fiscal import fiscal_code_validator, vat_number_validator
from ledgerman.models.enums import EntityType


class Entity(models.Model):
    """
    Customer and/or supplier.

    vat_number and fiscal_code are optional individually, but clean()
    requires at least one of them.
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='entities',
        verbose_name=_('Organizzazione'),
    )
    business_name = models.CharField(max_length=255, verbose_name=_('Ragione sociale'))
    entity_type = models.CharField(
        max_length=20,
        choices=EntityType.choices,
        default=EntityType.CLIENT,
        verbose_name=_('Tipo'),
    )
    vat_number = models.CharField(
        max_length=11,
        blank=True,
        default='',
        validators=[vat_number_validator],
        verbose_name=_('Partita IVA'),
    )
    fiscal_code = models.CharField(
        max_length=16,
        blank=True,
        default='',
        validators=[fiscal_code_validator],
        verbose_name=_('Codice fiscale'),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Anagrafica')
        verbose_name_plural = _('Anagrafiche')
        ordering = ['business_name']

    def clean(self):
        super().clean()
        if not self.vat_number.strip() and not self.fiscal_code.strip():
            raise ValidationError(
                _('Indicare almeno Partita IVA o Codice Fiscale'),
                code='identifier_required',
            )

    def __str__(self) -> str:
        return self.business_name
