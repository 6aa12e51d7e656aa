"""Monthly statistics command."""

import click
from flowtrack.cli.context import require_user_or_exit
from flowtrack.domain.statistics import MonthlyStatsService
from flowtrack.utils.date_parser import month_label, parse_month, utc_now


@click.command("stats")
@click.option("--month", help="Month as YYYY-MM (defaults to the current month)")
@click.pass_context
def show_stats(ctx, month: str | None):
    """Show income, expenses and spending by category for a month.

    Examples:
        flowtrack --user 1 stats
        flowtrack --user 1 stats --month 2024-03
    """
    current_user = require_user_or_exit(ctx)

    if month is None:
        now = utc_now()
        year, month_number = now.year, now.month
    else:
        try:
            year, month_number = parse_month(month)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    stats = MonthlyStatsService(ctx.obj["db"]).get_monthly_stats(current_user.id, year, month_number)

    click.echo(f"\n{month_label(year, month_number)}")
    click.echo("-" * 40)
    click.echo(f"{'Income':<20} ${stats.total_income:>15,.2f}")
    click.echo(f"{'Expenses':<20} ${stats.total_expenses:>15,.2f}")
    click.echo(f"{'Transactions':<20} {stats.transaction_count:>16d}")

    if stats.by_category:
        click.echo("\nExpenses by category:")
        for category, amount in sorted(stats.by_category.items(), key=lambda item: (-item[1], item[0])):
            click.echo(f"  {category:<18} ${amount:>15,.2f}")


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(show_stats)
