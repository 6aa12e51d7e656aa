"""Transaction management commands."""

import click
from flowtrack.cli.context import require_user_or_exit, resolve_account_or_exit
from flowtrack.cli.date_filters import resolve_cli_date_range
from flowtrack.cli.error_handling import handle_domain_error
from flowtrack.domain.account import AccountService
from flowtrack.domain.entities import RecurringInterval, TransactionType
from flowtrack.domain.errors import DomainError
from flowtrack.domain.transaction import TransactionService
from flowtrack.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Filter to current month")
@click.option("--last-month", is_flag=True, help="Filter to previous month")
@click.option("--this-year", is_flag=True, help="Filter to current year")
@click.option("--last-year", is_flag=True, help="Filter to previous year")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Only show INCOME or EXPENSE",
)
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    txn_type: str | None,
):
    """View your transactions with optional filters."""
    current_user = require_user_or_exit(ctx)
    db = ctx.obj["db"]
    service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
            "last-year": last_year,
        },
    )

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), current_user.id, account)

    transactions = service.list_transactions(
        user_id=current_user.id,
        account_id=account_id,
        start_date=start,
        end_date=end,
        type=txn_type.upper() if txn_type else None,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':>5} | {'Date':10} | {'Type':7} | {'Amount':>12} | {'Category':15} | Description")
    click.echo("-" * 80)
    for txn in transactions:
        recurring = f" [{txn.recurring_interval.value}]" if txn.is_recurring else ""
        click.echo(
            f"{txn.id:>5} | {txn.date} | {txn.type.value:7} | ${txn.amount:>11,.2f} | "
            f"{txn.category:15} | {txn.description or ''}{recurring}"
        )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="New transaction type",
)
@click.option("--amount", help="New amount")
@click.option("--category", help="New category label")
@click.option("--date", help="New transaction date")
@click.option("--description", help="New description")
@click.option(
    "--recurring",
    type=click.Choice([i.value for i in RecurringInterval], case_sensitive=False),
    help="Make recurring with the given interval",
)
@click.option("--no-recurring", is_flag=True, help="Stop the transaction from recurring")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    txn_type: str | None,
    amount: str | None,
    category: str | None,
    date: str | None,
    description: str | None,
    recurring: str | None,
    no_recurring: bool,
) -> None:
    """Update a transaction; the balance is adjusted by the difference.

    Examples:
        flowtrack --user 1 transaction update 7 --amount 300
        flowtrack --user 1 transaction update 7 --type INCOME
    """
    current_user = require_user_or_exit(ctx)
    db = ctx.obj["db"]
    service = TransactionService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), current_user.id, account)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            user_id=current_user.id,
            account_id=account_id,
            type=txn_type.upper() if txn_type else None,
            amount=amount,
            date=txn_date,
            category=category,
            description=description,
            recurring_interval=recurring.upper() if recurring else None,
            clear_recurrence=no_recurring,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_ids", type=int, nargs=-1, required=True)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transactions(ctx, transaction_ids: tuple[int, ...], yes: bool) -> None:
    """Delete one or more transactions and reverse their balance effects.

    Examples:
        flowtrack --user 1 transaction delete 3 4 5 --yes
    """
    current_user = require_user_or_exit(ctx)
    service = TransactionService(ctx.obj["db"])

    if not yes and not click.confirm(f"Delete {len(transaction_ids)} transaction(s)?"):
        click.echo("Deletion cancelled.")
        return

    deleted = service.bulk_delete_transactions(list(transaction_ids), current_user.id)
    if deleted == 0:
        click.echo("Error: No matching transactions found", err=True)
        ctx.exit(1)
    click.echo(f"Deleted {deleted} transaction{'s' if deleted != 1 else ''}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
