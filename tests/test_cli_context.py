"""Tests for CLI helpers: acting user, account resolution and date ranges."""

from datetime import date

import click
import pytest

from flowtrack.cli.context import require_user_or_exit, resolve_account_or_exit
from flowtrack.cli.date_filters import resolve_cli_date_range
from flowtrack.utils.date_parser import get_date_range


def _ctx(obj=None) -> click.Context:
    return click.Context(click.Command("test"), obj=obj)


def test_require_user(temp_db, sample_user):
    user = require_user_or_exit(_ctx({"db": temp_db, "user_id": sample_user.id}))
    assert user == sample_user


def test_require_user_missing(temp_db, capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        require_user_or_exit(_ctx({"db": temp_db}))

    assert excinfo.value.exit_code == 1
    assert "Unauthorized" in capsys.readouterr().err


def test_resolve_account_by_name_id_and_default(temp_db, account_service, sample_account):
    ctx = _ctx({"db": temp_db})
    user_id = sample_account.user_id

    assert resolve_account_or_exit(ctx, account_service, user_id, "Test Account") == sample_account.id
    assert resolve_account_or_exit(ctx, account_service, user_id, str(sample_account.id)) == sample_account.id
    assert resolve_account_or_exit(ctx, account_service, user_id, None) == sample_account.id


def test_resolve_unknown_account(temp_db, account_service, sample_account, capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_account_or_exit(_ctx({"db": temp_db}), account_service, sample_account.user_id, "Nope")
    assert "not found" in capsys.readouterr().err


def test_date_range_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_date_range_rejects_period_with_dates(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags={"last-year": True},
        )

    assert "cannot be combined" in capsys.readouterr().err


def test_date_range_from_period():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-month": False, "last-month": True},
    )
    assert (start, end) == get_date_range("last-month")


def test_date_range_explicit_and_open_ended():
    assert resolve_cli_date_range(
        _ctx(), start_date="2024-01-02", end_date=None, period_flags={}
    ) == (date(2024, 1, 2), None)
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period_flags={}) == (None, None)


def test_date_range_invalid_end_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), start_date=None, end_date="not-a-date", period_flags={})
    assert "Invalid end date" in capsys.readouterr().err
