"""Tests for CLI commands."""

from datetime import date
from decimal import Decimal

import pytest
from flowtrack.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db, sample_user):
    """Invoke the CLI against the temp database as the sample user."""

    def _invoke(*args, user=True):
        base = ["--db-path", temp_db.database_path]
        if user:
            base += ["--user", str(sample_user.id)]
        return cli_runner.invoke(cli, base + list(args))

    return _invoke


def _balance(temp_db, account):
    # Drop the fixture session so reads see what the CLI committed
    temp_db.disconnect()
    return temp_db.get_account(account.id, account.user_id).balance


def test_help_does_not_touch_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "jobs" in result.output


def test_user_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "user", "create", "Jane Doe", "jane@example.com"]
    )
    assert result.exit_code == 0
    assert "Created user 'Jane Doe'" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "user", "create", "Jane", "jane@example.com"]
    )
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "list"])
    assert "jane@example.com" in result.output


def test_missing_user_is_unauthorized(invoke):
    result = invoke("account", "list", user=False)
    assert result.exit_code == 1
    assert "Unauthorized" in result.output
    assert "FLOWTRACK_USER" in result.output


def test_user_from_environment(cli_runner, temp_db, sample_user, sample_account, monkeypatch):
    monkeypatch.setenv("FLOWTRACK_USER", str(sample_user.id))
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
    assert result.exit_code == 0
    assert "Test Account" in result.output


def test_unknown_user(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--user", "42", "account", "list"])
    assert result.exit_code == 1
    assert "User 42 not found" in result.output


class TestAccountCommands:
    def test_create_first_account_is_default(self, invoke):
        result = invoke("account", "create", "Checking", "--balance", "250")
        assert result.exit_code == 0
        assert "Created account 'Checking'" in result.output
        assert "Set as default account" in result.output

    def test_list_marks_default(self, invoke, sample_account):
        invoke("account", "create", "Savings", "--type", "savings")
        result = invoke("account", "list")

        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if "ID:" in line]
        assert lines[0].startswith("  ID:") and "Savings" in lines[0] and "SAVINGS" in lines[0]
        assert lines[1].startswith("* ID:") and "$    1,000.00" in lines[1]

    def test_set_default_by_name(self, invoke, sample_account):
        invoke("account", "create", "Savings")
        result = invoke("account", "set-default", "Savings")
        assert result.exit_code == 0
        assert "Default account is now 'Savings'" in result.output

    def test_invalid_balance(self, invoke):
        result = invoke("account", "create", "Broken", "--balance", "lots")
        assert result.exit_code == 1
        assert "Invalid amount" in result.output


class TestTransactionCommands:
    def test_add_uses_default_account(self, invoke, temp_db, sample_account):
        result = invoke("add", "--amount", "200", "--category", "groceries", "--date", "2024-01-15")

        assert result.exit_code == 0
        assert "Created transaction" in result.output
        assert "Test Account" in result.output
        assert "New balance: $800.00" in result.output
        assert _balance(temp_db, sample_account) == Decimal("800")

    def test_add_income_by_account_name(self, invoke, temp_db, sample_account):
        result = invoke(
            "add", "--account", "Test Account", "--type", "income", "--amount", "$50", "--category", "gift"
        )
        assert result.exit_code == 0
        assert _balance(temp_db, sample_account) == Decimal("1050")

    def test_add_recurring(self, invoke, sample_account):
        result = invoke(
            "add", "--amount", "15", "--category", "music", "--date", "2024-01-31", "--recurring", "MONTHLY"
        )
        assert result.exit_code == 0
        assert "Recurs: MONTHLY (next 2024-02-29)" in result.output

    def test_add_without_accounts(self, invoke):
        result = invoke("add", "--amount", "5", "--category", "coffee")
        assert result.exit_code == 1
        assert "No default account" in result.output

    def test_add_negative_amount(self, invoke, sample_account):
        result = invoke("add", "--amount", "-5", "--category", "coffee")
        assert result.exit_code == 1
        assert "negative" in result.output

    def test_add_bad_date(self, invoke, sample_account):
        result = invoke("add", "--amount", "5", "--category", "coffee", "--date", "someday")
        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_update_and_list(self, invoke, temp_db, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(
            user_id=sample_account.user_id,
            account_id=sample_account.id,
            type="EXPENSE",
            amount="200",
            category="groceries",
            date=date(2024, 1, 15),
        )

        result = invoke("transaction", "update", str(transaction_id), "--amount", "300")
        assert result.exit_code == 0
        assert f"Updated transaction {transaction_id}" in result.output
        assert _balance(temp_db, sample_account) == Decimal("700")

        result = invoke("transaction", "list", "--start-date", "2024-01-01", "--end-date", "2024-01-31")
        assert result.exit_code == 0
        assert "$     300.00" in result.output
        assert "groceries" in result.output

    def test_update_unknown(self, invoke, sample_account):
        result = invoke("transaction", "update", "999", "--amount", "1")
        assert result.exit_code == 1
        assert "Transaction 999 not found" in result.output

    def test_list_rejects_two_periods(self, invoke, sample_account):
        result = invoke("transaction", "list", "--this-month", "--last-year")
        assert result.exit_code == 1
        assert "Only one period option" in result.output

    def test_bulk_delete(self, invoke, temp_db, transaction_service, sample_account):
        ids = [
            transaction_service.create_transaction(
                user_id=sample_account.user_id,
                account_id=sample_account.id,
                type=type,
                amount=amount,
                category="misc",
            )
            for type, amount in [("EXPENSE", "50"), ("INCOME", "30")]
        ]

        result = invoke("transaction", "delete", *[str(i) for i in ids], "--yes")

        assert result.exit_code == 0
        assert "Deleted 2 transactions" in result.output
        assert _balance(temp_db, sample_account) == Decimal("1000")

    def test_delete_asks_for_confirmation(self, cli_runner, temp_db, sample_user, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(
            user_id=sample_user.id,
            account_id=sample_account.id,
            type="EXPENSE",
            amount="10",
            category="misc",
        )
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--user", str(sample_user.id), "transaction", "delete", str(transaction_id)],
            input="n\n",
        )
        assert "Deletion cancelled." in result.output
        assert _balance(temp_db, sample_account) == Decimal("990")


class TestBudgetAndStats:
    def test_budget_set_and_show(self, invoke, sample_account):
        invoke("add", "--amount", "25", "--category", "food")

        result = invoke("budget", "set", "100")
        assert result.exit_code == 0
        assert "Monthly budget set to $100.00" in result.output

        result = invoke("budget", "show")
        assert result.exit_code == 0
        assert "Spent:     $25.00" in result.output
        assert "Remaining: $75.00" in result.output
        assert "Used:      25.0%" in result.output

    def test_budget_show_without_budget(self, invoke, sample_account):
        result = invoke("budget", "show")
        assert result.exit_code == 0
        assert "No budget set." in result.output

    def test_stats_for_month(self, invoke, sample_account):
        for args in [
            ("--amount", "100", "--category", "food"),
            ("--amount", "50", "--category", "food"),
            ("--type", "INCOME", "--amount", "500", "--category", "salary"),
        ]:
            invoke("add", "--date", "2024-03-10", *args)

        result = invoke("stats", "--month", "2024-03")

        assert result.exit_code == 0
        assert "March 2024" in result.output
        assert "$         500.00" in result.output
        assert "food" in result.output
        assert "salary" not in result.output

    def test_stats_bad_month(self, invoke, sample_account):
        result = invoke("stats", "--month", "March")
        assert result.exit_code == 1
        assert "YYYY-MM" in result.output


class TestJobCommands:
    def test_process_recurring(self, invoke, temp_db, sample_account):
        invoke("add", "--amount", "10", "--category", "gym", "--recurring", "WEEKLY")

        result = invoke("jobs", "process-recurring", user=False)

        assert result.exit_code == 0
        assert "Recurring transactions: 1 processed, 0 skipped, 0 failed" in result.output
        assert _balance(temp_db, sample_account) == Decimal("980")

        result = invoke("jobs", "process-recurring", user=False)
        assert "0 processed" in result.output

    def test_check_budgets(self, invoke, sample_account):
        invoke("budget", "set", "100")
        invoke("add", "--amount", "90", "--category", "food")

        result = invoke("jobs", "check-budgets", user=False)
        assert result.exit_code == 0
        assert "Budget alerts: 1 processed" in result.output

        result = invoke("jobs", "check-budgets", user=False)
        assert "Budget alerts: 0 processed, 1 skipped" in result.output

    def test_monthly_report(self, invoke, sample_account):
        result = invoke("jobs", "monthly-report", "--month", "2024-03", user=False)
        assert result.exit_code == 0
        assert "Monthly reports: 1 processed, 0 skipped, 0 failed" in result.output
