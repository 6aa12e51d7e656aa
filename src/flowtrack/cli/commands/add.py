"""Add transaction command."""

import click
from flowtrack.cli.context import require_user_or_exit, resolve_account_or_exit
from flowtrack.cli.error_handling import handle_domain_error
from flowtrack.domain.account import AccountService
from flowtrack.domain.entities import RecurringInterval, TransactionType
from flowtrack.domain.errors import DomainError
from flowtrack.domain.transaction import TransactionService
from flowtrack.utils.date_parser import parse_date


@click.command("add")
@click.option("--account", help="Account name or ID (defaults to the default account)")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default=TransactionType.EXPENSE.value,
    show_default=True,
    help="Transaction type",
)
@click.option("--amount", required=True, help="Amount (e.g., 123.45); always positive")
@click.option("--category", required=True, help="Category label (e.g., groceries)")
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today",
)
@click.option("--description", help="Transaction description")
@click.option(
    "--recurring",
    type=click.Choice([i.value for i in RecurringInterval], case_sensitive=False),
    help="Make this a recurring transaction with the given interval",
)
@click.pass_context
def add_transaction(
    ctx,
    account: str | None,
    txn_type: str,
    amount: str,
    category: str,
    date: str | None,
    description: str | None,
    recurring: str | None,
):
    """Add a transaction and update the account balance.

    Examples:
        flowtrack --user 1 add --amount 42.50 --category groceries
        flowtrack --user 1 add --type INCOME --amount 5000 --category salary --recurring MONTHLY
    """
    current_user = require_user_or_exit(ctx)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    transaction_service = TransactionService(db)

    account_id = resolve_account_or_exit(ctx, account_service, current_user.id, account)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_id = transaction_service.create_transaction(
            user_id=current_user.id,
            account_id=account_id,
            type=txn_type.upper(),
            amount=amount,
            category=category,
            date=txn_date,
            description=description,
            recurring_interval=recurring.upper() if recurring else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.get_transaction(transaction_id, current_user.id)
    account_obj = account_service.get_account(account_id, current_user.id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  {txn.type.value.title()}: ${txn.amount:,.2f}")
    click.echo(f"  Category: {txn.category}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if txn.is_recurring:
        click.echo(f"  Recurs: {txn.recurring_interval.value} (next {txn.next_recurring_date:%Y-%m-%d})")
    click.echo(f"  New balance: ${account_obj.balance:,.2f}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
