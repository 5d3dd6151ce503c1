"""
Installment schedule: payment condition -> due dates and amounts.

Pure computation: no database access. Persisting the result is the job of
LedgerInstallments.create_installments().

Example (30/60/90 on 2025-01-01, 300.00):
    #1 2025-01-31 100.00
    #2 2025-03-02 100.00
    #3 2025-04-01 100.00
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from ledgerman.conf import ledgerman_settings
from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import InstallmentStatus


@dataclass(frozen=True)
class ScheduledInstallment:
    sequence_number: int
    due_date: date
    amount: Decimal


def end_of_month(day: date) -> date:
    """Last calendar day of the month containing day."""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def _check_condition(condition) -> None:
    max_dues = ledgerman_settings.MAX_DUES
    n = condition.number_of_dues
    first = condition.days_to_first_due
    gap = condition.gap_between_dues

    problems = []
    if not isinstance(n, int) or not 1 <= n <= max_dues:
        problems.append('number_of_dues')
    if not isinstance(first, int) or first < 0:
        problems.append('days_to_first_due')
    if not isinstance(gap, int) or gap < 0:
        problems.append('gap_between_dues')
    elif isinstance(n, int) and n > 1 and gap == 0:
        problems.append('gap_between_dues')

    if problems:
        raise LedgerError(
            'INVALID_PAYMENT_CONDITION',
            fields=problems,
            number_of_dues=n,
            days_to_first_due=first,
            gap_between_dues=gap,
        )


def due_date_for(condition, document_date: date, sequence_number: int) -> date:
    """Due date of the 1-based installment sequence_number."""
    offset = condition.days_to_first_due
    if sequence_number > 1:
        offset += (sequence_number - 1) * condition.gap_between_dues
    due = document_date + timedelta(days=offset)
    if condition.is_end_of_month:
        due = end_of_month(due)
    return due


def split_amount(total: Decimal, parts: int) -> list[Decimal]:
    """
    Split total in parts equal shares; the last share absorbs the rounding
    residual so that sum(result) == total.
    """
    quantum = ledgerman_settings.amount_quantum
    rounding = ledgerman_settings.rounding_mode

    share = (total / parts).quantize(quantum, rounding=rounding)
    if share * (parts - 1) > total:
        # Rounding up would leave a negative last share
        share = (total / parts).quantize(quantum, rounding=ROUND_DOWN)
    last = total - share * (parts - 1)
    return [share] * (parts - 1) + [last]


def generate_schedule(condition, document_date: date, total_amount) -> list[ScheduledInstallment]:
    """
    Compute the installments of a document.

    Args:
        condition: Anything with days_to_first_due, gap_between_dues,
            number_of_dues and is_end_of_month (usually a PaymentCondition)
        document_date: Date the offsets start from
        total_amount: Decimal (or decimal string) to split

    Returns:
        Exactly condition.number_of_dues installments, ordered by sequence

    Raises:
        LedgerError('INVALID_PAYMENT_CONDITION'): Condition out of bounds
        LedgerError('INVALID_AMOUNT'): Total is negative or not a decimal
    """
    _check_condition(condition)

    if isinstance(total_amount, float):
        raise LedgerError('INVALID_AMOUNT', amount=total_amount)
    try:
        total = Decimal(total_amount)
    except (InvalidOperation, TypeError, ValueError):
        raise LedgerError('INVALID_AMOUNT', amount=total_amount)
    if not total.is_finite() or total < 0:
        raise LedgerError('INVALID_AMOUNT', amount=total_amount)

    amounts = split_amount(total, condition.number_of_dues)
    return [
        ScheduledInstallment(
            sequence_number=i,
            due_date=due_date_for(condition, document_date, i),
            amount=amount,
        )
        for i, amount in enumerate(amounts, start=1)
    ]


def installment_status(amount: Decimal, paid: Decimal) -> str:
    """PAID iff paid >= amount, PARTIAL iff 0 < paid < amount, else PENDING."""
    if paid >= amount:
        return InstallmentStatus.PAID
    if paid > 0:
        return InstallmentStatus.PARTIAL
    return InstallmentStatus.PENDING
