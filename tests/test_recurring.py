"""Tests for materializing recurring transactions."""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

import flowtrack.domain.recurring as recurring_module
from flowtrack.domain.entities import TransactionStatus
from flowtrack.domain.errors import NotDueError, NotFoundError
from flowtrack.domain.recurring import (
    OCCURRENCE_SUFFIX,
    RecurringTransactionService,
    occurrence_description,
)


NOW = datetime(2024, 1, 10, 6, 0)


@pytest.fixture
def weekly_template(transaction_service, sample_account):
    """A weekly 25.00 expense that has never been processed (balance 975 after creation)."""
    transaction_id = transaction_service.create_transaction(
        user_id=sample_account.user_id,
        account_id=sample_account.id,
        type="EXPENSE",
        amount="25",
        category="subscriptions",
        date=date(2024, 1, 1),
        description="Streaming",
        recurring_interval="WEEKLY",
    )
    return transaction_service.get_transaction(transaction_id, sample_account.user_id)


def _balance(account_service, account):
    return account_service.get_account(account.id, account.user_id).balance


def test_occurrence_description():
    assert occurrence_description("Rent") == f"Rent {OCCURRENCE_SUFFIX}"
    assert occurrence_description(None) == OCCURRENCE_SUFFIX


def test_find_due_templates(recurring_service, weekly_template):
    due = recurring_service.find_due_templates(NOW)
    assert [t.id for t in due] == [weekly_template.id]


def test_materialize_creates_occurrence_and_advances(
    recurring_service, transaction_service, account_service, sample_account, weekly_template
):
    occurrence_id = recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)

    occurrence = transaction_service.get_transaction(occurrence_id, sample_account.user_id)
    assert not occurrence.is_recurring
    assert occurrence.recurring_interval is None
    assert occurrence.amount == Decimal("25")
    assert occurrence.date == NOW.date()
    assert occurrence.description == "Streaming (Recurring)"
    assert occurrence.status == TransactionStatus.COMPLETED

    template = transaction_service.get_transaction(weekly_template.id, sample_account.user_id)
    assert template.last_processed == NOW
    assert template.next_recurring_date == NOW + timedelta(days=7)

    assert _balance(account_service, sample_account) == Decimal("950")


def test_materialize_twice_raises_not_due(
    recurring_service, transaction_service, account_service, sample_account, weekly_template
):
    recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)

    with pytest.raises(NotDueError):
        recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)

    assert len(transaction_service.list_transactions(sample_account.user_id)) == 2
    assert _balance(account_service, sample_account) == Decimal("950")


def test_lost_race_writes_nothing(
    recurring_service, transaction_service, account_service, sample_account, weekly_template, monkeypatch
):
    """A run that passed the due check but lost the schedule update rolls back its occurrence."""
    recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)
    monkeypatch.setattr(recurring_module, "is_due", lambda template, now: True)

    with pytest.raises(NotDueError):
        recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)

    assert len(transaction_service.list_transactions(sample_account.user_id)) == 2
    assert _balance(account_service, sample_account) == Decimal("950")
    template = transaction_service.get_transaction(weekly_template.id, sample_account.user_id)
    assert template.last_processed == NOW


def test_second_handle_loses_race(
    temp_db, second_db, recurring_service, transaction_service, account_service, sample_account, weekly_template
):
    """Two runs see the same due template; only one occurrence is written."""
    other_run = RecurringTransactionService(second_db)
    assert [t.id for t in other_run.find_due_templates(NOW)] == [weekly_template.id]

    recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)
    with pytest.raises(NotDueError):
        other_run.materialize(weekly_template.id, sample_account.user_id, NOW)

    assert len(transaction_service.list_transactions(sample_account.user_id)) == 2
    assert _balance(account_service, sample_account) == Decimal("950")


def test_materialize_non_recurring(recurring_service, transaction_service, sample_account):
    transaction_id = transaction_service.create_transaction(
        user_id=sample_account.user_id,
        account_id=sample_account.id,
        type="EXPENSE",
        amount="5",
        category="coffee",
    )
    with pytest.raises(NotFoundError, match="not recurring"):
        recurring_service.materialize(transaction_id, sample_account.user_id, NOW)


def test_materialize_unknown(recurring_service, sample_account):
    with pytest.raises(NotFoundError):
        recurring_service.materialize(404, sample_account.user_id, NOW)


def test_process_due_transactions(recurring_service, account_service, sample_account, weekly_template):
    result = recurring_service.process_due_transactions(NOW)
    assert (result.processed, result.skipped, result.failed) == (1, 0, 0)

    # Nothing is due again until a week later
    result = recurring_service.process_due_transactions(NOW + timedelta(days=3))
    assert result.processed == 0

    result = recurring_service.process_due_transactions(NOW + timedelta(days=7))
    assert result.processed == 1
    assert _balance(account_service, sample_account) == Decimal("925")


def test_process_counts_failures_and_continues(
    recurring_service, transaction_service, sample_account, weekly_template, monkeypatch
):
    second_id = transaction_service.create_transaction(
        user_id=sample_account.user_id,
        account_id=sample_account.id,
        type="INCOME",
        amount="100",
        category="salary",
        date=date(2024, 1, 1),
        recurring_interval="MONTHLY",
    )
    original = recurring_service.materialize

    def flaky_materialize(template_id, user_id, now=None):
        if template_id == weekly_template.id:
            raise RuntimeError("disk full")
        return original(template_id, user_id, now)

    monkeypatch.setattr(recurring_service, "materialize", flaky_materialize)
    result = recurring_service.process_due_transactions(NOW)

    assert result.processed == 1
    assert result.failed == 1
    assert result.errors == [f"{weekly_template.id}: disk full"]
    second = transaction_service.get_transaction(second_id, sample_account.user_id)
    assert second.last_processed == NOW


def test_overdue_template_from_ten_days_ago(
    temp_db, recurring_service, transaction_service, sample_account, weekly_template
):
    last_run = NOW - timedelta(days=10)
    temp_db.advance_recurring_schedule(
        transaction_id=weekly_template.id,
        user_id=sample_account.user_id,
        processed_at=last_run,
        next_recurring_date=last_run + timedelta(days=7),
    )

    recurring_service.materialize(weekly_template.id, sample_account.user_id, NOW)

    template = transaction_service.get_transaction(weekly_template.id, sample_account.user_id)
    assert template.last_processed == NOW
    assert template.next_recurring_date == NOW + timedelta(days=7)
    occurrences = [t for t in transaction_service.list_transactions(sample_account.user_id) if not t.is_recurring]
    assert len(occurrences) == 1
    assert occurrences[0].account_id == sample_account.id
    assert occurrences[0].category == "subscriptions"
    assert occurrences[0].amount == Decimal("25")
