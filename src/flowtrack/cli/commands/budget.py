"""Budget commands."""

import click
from flowtrack.cli.context import require_user_or_exit, resolve_account_or_exit
from flowtrack.cli.error_handling import handle_domain_error
from flowtrack.domain.account import AccountService
from flowtrack.domain.budget import BudgetService
from flowtrack.domain.errors import DomainError


@click.group()
def budget_group():
    """Manage your monthly budget."""
    pass


@budget_group.command("set")
@click.argument("amount")
@click.pass_context
def set_budget(ctx, amount: str):
    """Set the monthly budget amount.

    Examples:
        flowtrack --user 1 budget set 2500
    """
    current_user = require_user_or_exit(ctx)
    service = BudgetService(ctx.obj["db"])
    try:
        budget = service.update_budget(current_user.id, amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Monthly budget set to ${budget.amount:,.2f}")


@budget_group.command("show")
@click.option("--account", help="Account name or ID (defaults to the default account)")
@click.pass_context
def show_budget(ctx, account: str | None):
    """Show the budget and this month's spending."""
    current_user = require_user_or_exit(ctx)
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), current_user.id, account)

    current = BudgetService(db).get_current_budget(current_user.id, account_id)
    if current.budget is None:
        click.echo("No budget set.")
        return

    amount = current.budget.amount
    spent = current.current_expenses
    click.echo(f"Budget:    ${amount:,.2f}")
    click.echo(f"Spent:     ${spent:,.2f}")
    click.echo(f"Remaining: ${amount - spent:,.2f}")
    if amount > 0:
        click.echo(f"Used:      {spent / amount * 100:.1f}%")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
