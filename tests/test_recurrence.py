"""Tests for recurrence schedule arithmetic."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from flowtrack.domain.entities import (
    RecurringInterval,
    Transaction,
    TransactionType,
)
from flowtrack.domain.recurrence import first_due_date, is_due, next_date


def _template(**overrides):
    fields = dict(
        id=1,
        user_id=1,
        account_id=1,
        type=TransactionType.EXPENSE,
        amount=Decimal("25"),
        date=date(2024, 1, 1),
        category="subscriptions",
        is_recurring=True,
        recurring_interval=RecurringInterval.WEEKLY,
        next_recurring_date=datetime(2024, 1, 8),
        last_processed=datetime(2024, 1, 1),
    )
    fields.update(overrides)
    return Transaction(**fields)


class TestNextDate:
    def test_daily(self):
        assert next_date(date(2024, 3, 10), RecurringInterval.DAILY) == date(2024, 3, 11)

    def test_weekly(self):
        assert next_date(date(2024, 3, 10), RecurringInterval.WEEKLY) == date(2024, 3, 17)

    def test_monthly(self):
        assert next_date(date(2024, 3, 10), RecurringInterval.MONTHLY) == date(2024, 4, 10)

    def test_yearly(self):
        assert next_date(date(2024, 3, 10), RecurringInterval.YEARLY) == date(2025, 3, 10)

    def test_keeps_time_of_day(self):
        start = datetime(2024, 3, 10, 14, 30)
        assert next_date(start, RecurringInterval.DAILY) == datetime(2024, 3, 11, 14, 30)

    def test_accepts_interval_value(self):
        assert next_date(date(2024, 3, 10), "MONTHLY") == date(2024, 4, 10)

    @pytest.mark.parametrize("interval", list(RecurringInterval))
    def test_two_periods_compose(self, interval):
        start = date(2024, 5, 14)
        twice = next_date(next_date(start, interval), interval)
        expected = {
            RecurringInterval.DAILY: date(2024, 5, 16),
            RecurringInterval.WEEKLY: date(2024, 5, 28),
            RecurringInterval.MONTHLY: date(2024, 7, 14),
            RecurringInterval.YEARLY: date(2026, 5, 14),
        }[interval]
        assert twice == expected

    def test_two_periods_from_month_end_keep_the_clamp(self):
        once = next_date(date(2024, 1, 31), RecurringInterval.MONTHLY)
        assert next_date(once, RecurringInterval.MONTHLY) == date(2024, 3, 29)

    def test_month_end_clamps(self):
        assert next_date(date(2024, 1, 31), RecurringInterval.MONTHLY) == date(2024, 2, 29)
        assert next_date(date(2023, 1, 31), RecurringInterval.MONTHLY) == date(2023, 2, 28)
        assert next_date(date(2024, 2, 29), RecurringInterval.YEARLY) == date(2025, 2, 28)


def test_first_due_date_from_date():
    assert first_due_date(date(2024, 1, 1), RecurringInterval.WEEKLY) == datetime(2024, 1, 8)


class TestIsDue:
    def test_never_processed_is_due(self):
        template = _template(last_processed=None, next_recurring_date=datetime(2030, 1, 1))
        assert is_due(template, datetime(2024, 1, 2))

    def test_due_at_scheduled_time(self):
        template = _template()
        assert is_due(template, datetime(2024, 1, 8))
        assert is_due(template, datetime(2024, 1, 8) + timedelta(hours=3))

    def test_not_due_before_schedule(self):
        assert not is_due(_template(), datetime(2024, 1, 7, 23, 59))

    def test_non_recurring_never_due(self):
        txn = _template(is_recurring=False, recurring_interval=None, last_processed=None)
        assert not is_due(txn, datetime(2024, 6, 1))
