"""
Payment models: conditions, installments (scadenze), payments and allocations.

Installment status is never stored: it is derived from the sum of the
allocations that point at it.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import InstallmentStatus, PaymentDirection


class PaymentCondition(models.Model):
    """
    How a document total is split into installments.

    Example: "30/60/90 fine mese" = days_to_first_due=30, gap_between_dues=30,
    number_of_dues=3, is_end_of_month=True.
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='payment_conditions',
        verbose_name=_('Organizzazione'),
    )
    name = models.CharField(max_length=100, verbose_name=_('Nome'))
    days_to_first_due = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(365)],
        verbose_name=_('Giorni alla prima scadenza'),
    )
    gap_between_dues = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(365)],
        verbose_name=_('Giorni tra le scadenze'),
    )
    number_of_dues = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(24)],
        verbose_name=_('Numero rate'),
    )
    is_end_of_month = models.BooleanField(default=False, verbose_name=_('Fine mese'))
    active = models.BooleanField(default=True, verbose_name=_('Attivo'))

    class Meta:
        verbose_name = _('Condizione di pagamento')
        verbose_name_plural = _('Condizioni di pagamento')
        ordering = ['name']

    def clean(self):
        super().clean()
        if self.number_of_dues and self.number_of_dues > 1 and not self.gap_between_dues:
            raise ValidationError({
                'gap_between_dues': _(
                    'Con più di una rata, i giorni tra le scadenze devono essere maggiori di 0'
                ),
            })

    def __str__(self) -> str:
        return self.name


class InstallmentQuerySet(models.QuerySet):

    def with_paid_amount(self):
        """Annotate paid_total to avoid N+1 when listing."""
        return self.annotate(
            paid_total=Coalesce(Sum('allocations__amount'), Decimal('0')),
        )


class Installment(models.Model):
    """
    One due date/amount derived from a document's payment condition.

    Created once at document-save time; immutable afterwards except through
    regeneration of a document without allocations.
    """

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='installments',
        verbose_name=_('Organizzazione'),
    )
    document = models.ForeignKey(
        'ledgerman.Document',
        on_delete=models.CASCADE,
        related_name='installments',
        verbose_name=_('Documento'),
    )
    sequence_number = models.PositiveSmallIntegerField(verbose_name=_('Rata'))
    due_date = models.DateField(db_index=True, verbose_name=_('Scadenza'))
    amount = models.DecimalField(max_digits=14, decimal_places=2, verbose_name=_('Importo'))
    created_at = models.DateTimeField(auto_now_add=True)

    objects = InstallmentQuerySet.as_manager()

    class Meta:
        verbose_name = _('Scadenza')
        verbose_name_plural = _('Scadenze')
        ordering = ['due_date', 'sequence_number']
        constraints = [
            models.UniqueConstraint(
                fields=['document', 'sequence_number'],
                name='unique_installment_sequence_per_document',
            )
        ]

    @property
    def paid_amount(self) -> Decimal:
        """Sum of allocations. Uses the paid_total annotation when present."""
        annotated = getattr(self, 'paid_total', None)
        if annotated is not None:
            return annotated
        return self.allocations.aggregate(
            t=Coalesce(Sum('amount'), Decimal('0'))
        )['t']

    @property
    def residual(self) -> Decimal:
        return self.amount - self.paid_amount

    @property
    def status(self) -> str:
        from ledgerman.schedule import installment_status
        return installment_status(self.amount, self.paid_amount)

    def __str__(self) -> str:
        return f"{self.document} #{self.sequence_number} {self.due_date} {self.amount}"


class Payment(models.Model):
    """Money actually received or paid; allocated onto installments."""

    organization = models.ForeignKey(
        'ledgerman.Organization',
        on_delete=models.CASCADE,
        related_name='payments',
        verbose_name=_('Organizzazione'),
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2, verbose_name=_('Importo'))
    date = models.DateField(verbose_name=_('Data'))
    direction = models.CharField(
        max_length=10,
        choices=PaymentDirection.choices,
        verbose_name=_('Direzione'),
    )
    reference = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Riferimento'))
    notes = models.CharField(max_length=500, blank=True, default='', verbose_name=_('Note'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Pagamento')
        verbose_name_plural = _('Pagamenti')
        ordering = ['-date', '-id']
        indexes = [
            models.Index(fields=['organization', 'date'], name='ledgerman_pay_org_date_idx'),
        ]

    @property
    def allocated_amount(self) -> Decimal:
        return self.allocations.aggregate(
            t=Coalesce(Sum('amount'), Decimal('0'))
        )['t']

    def __str__(self) -> str:
        return f"{self.get_direction_display()} {self.amount} ({self.date})"


class PaymentAllocation(models.Model):
    """Portion of a payment assigned to one installment."""

    payment = models.ForeignKey(
        Payment,
        on_delete=models.CASCADE,
        related_name='allocations',
        verbose_name=_('Pagamento'),
    )
    installment = models.ForeignKey(
        Installment,
        on_delete=models.CASCADE,
        related_name='allocations',
        verbose_name=_('Scadenza'),
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2, verbose_name=_('Importo'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Allocazione pagamento')
        verbose_name_plural = _('Allocazioni pagamento')
        constraints = [
            models.UniqueConstraint(
                fields=['payment', 'installment'],
                name='unique_allocation_per_payment_installment',
            )
        ]

    def __str__(self) -> str:
        return f"{self.payment_id} -> {self.installment_id}: {self.amount}"
