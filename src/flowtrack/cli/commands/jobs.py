"""Scheduled job commands.

These are the steps an external scheduler triggers: every few hours for
recurring transactions and budget alerts, once a month for reports.
"""

import click
from flowtrack.domain.budget import BudgetEvaluator
from flowtrack.domain.entities import JobResult
from flowtrack.domain.recurring import RecurringTransactionService
from flowtrack.domain.statistics import MonthlyReportService
from flowtrack.utils.date_parser import parse_month


def _report(ctx, label: str, result: JobResult) -> None:
    click.echo(
        f"{label}: {result.processed} processed, {result.skipped} skipped, {result.failed} failed"
    )
    for error in result.errors:
        click.echo(f"  {error}", err=True)
    if result.failed:
        ctx.exit(1)


@click.group()
def jobs_group():
    """Run scheduled jobs."""
    pass


@jobs_group.command("process-recurring")
@click.pass_context
def process_recurring(ctx):
    """Materialize every due recurring transaction."""
    service = RecurringTransactionService(ctx.obj["db"])
    _report(ctx, "Recurring transactions", service.process_due_transactions())


@jobs_group.command("check-budgets")
@click.pass_context
def check_budgets(ctx):
    """Send budget alerts to users at or above the alert threshold."""
    settings = ctx.obj["settings"]
    evaluator = BudgetEvaluator(
        ctx.obj["db"],
        settings.create_mailer(),
        threshold=settings.budget_alert_threshold,
    )
    _report(ctx, "Budget alerts", evaluator.check_budget_alerts())


@jobs_group.command("monthly-report")
@click.option("--month", help="Month as YYYY-MM (defaults to the previous month)")
@click.pass_context
def monthly_report(ctx, month: str | None):
    """Email every user their monthly report."""
    settings = ctx.obj["settings"]

    year = month_number = None
    if month is not None:
        try:
            year, month_number = parse_month(month)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    service = MonthlyReportService(
        ctx.obj["db"],
        settings.create_mailer(),
        settings.create_insight_generator(),
    )
    _report(ctx, "Monthly reports", service.send_monthly_reports(year=year, month=month_number))


def register_commands(cli):
    """Register job commands with main CLI."""
    cli.add_command(jobs_group, name="jobs")
