"""
Organization and Warehouse models: tenant and physical stock locations.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Organization(models.Model):
    """
    Tenant. Every ledger row, document and configuration belongs to one.

    Request routing and membership live outside this app; here the
    organization is only the scoping key.
    """

    name = models.CharField(max_length=200, verbose_name=_('Ragione sociale'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Organizzazione')
        verbose_name_plural = _('Organizzazioni')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Warehouse(models.Model):
    """Where stock exists. Flat list per organization."""

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name='warehouses',
        verbose_name=_('Organizzazione'),
    )
    code = models.CharField(max_length=20, verbose_name=_('Codice'))
    name = models.CharField(max_length=100, verbose_name=_('Nome'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Magazzino')
        verbose_name_plural = _('Magazzini')
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(
                fields=['organization', 'code'],
                name='unique_warehouse_code_per_organization',
            )
        ]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
