"""Recurrence schedule arithmetic for template transactions."""

from datetime import date, datetime, time
from typing import TypeVar

from dateutil.relativedelta import relativedelta

from flowtrack.domain.entities import RecurringInterval, Transaction

D = TypeVar("D", date, datetime)

INTERVAL_STEPS: dict[RecurringInterval, relativedelta] = {
    RecurringInterval.DAILY: relativedelta(days=1),
    RecurringInterval.WEEKLY: relativedelta(days=7),
    RecurringInterval.MONTHLY: relativedelta(months=1),
    RecurringInterval.YEARLY: relativedelta(years=1),
}


def next_date(start: D, interval: RecurringInterval) -> D:
    """Return the date one recurrence period after ``start``.

    Month and year steps that land on a day the target month does not have
    are clamped to its last day: Jan 31 + 1 month is Feb 28 (or 29), and
    Feb 29 + 1 year is Feb 28.
    """
    return start + INTERVAL_STEPS[RecurringInterval(interval)]


def first_due_date(start: date | datetime, interval: RecurringInterval) -> datetime:
    """Return the first scheduled run of a template whose effective date is ``start``."""
    if not isinstance(start, datetime):
        start = datetime.combine(start, time.min)
    return next_date(start, interval)


def is_due(transaction: Transaction, now: datetime) -> bool:
    """Check whether a template should be materialized at ``now``.

    A template that has never fired is always due. Non-recurring
    transactions are never due.
    """
    if not transaction.is_recurring:
        return False
    if transaction.last_processed is None:
        return True
    if transaction.next_recurring_date is None:
        return False
    return transaction.next_recurring_date <= now
