"""Account management commands."""

import click
from flowtrack.cli.context import require_user_or_exit, resolve_account_or_exit
from flowtrack.cli.error_handling import handle_domain_error
from flowtrack.domain.account import AccountService
from flowtrack.domain.entities import AccountType
from flowtrack.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.CURRENT.value,
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.option("--default", "is_default", is_flag=True, help="Make this the default account")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str, is_default: bool):
    """Create a new account.

    The first account of a user always becomes the default account.

    Examples:
        flowtrack --user 1 account create "Checking" --balance 1000
        flowtrack --user 1 account create "Savings" --type SAVINGS --default
    """
    current_user = require_user_or_exit(ctx)
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(
            user_id=current_user.id,
            name=name,
            type=account_type.upper(),
            balance=balance,
            is_default=is_default,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    account = service.get_account(account_id, current_user.id)
    click.echo(f"Created account '{name}' (ID: {account_id})")
    if account.is_default:
        click.echo("Set as default account")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List your accounts."""
    current_user = require_user_or_exit(ctx)
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(current_user.id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        marker = "*" if acc.is_default else " "
        click.echo(
            f"{marker} ID: {acc.id:3d} | {acc.name:20s} | {acc.type.value:8s} | "
            f"${acc.balance:>12,.2f} | {acc.transaction_count} txns"
        )


@account_group.command("set-default")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def set_default(ctx, account: str) -> None:
    """Make an account the default account.

    ACCOUNT can be an account name or ID.
    """
    current_user = require_user_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, current_user.id, account)

    try:
        updated = service.set_default_account(account_id, current_user.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Default account is now '{updated.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
