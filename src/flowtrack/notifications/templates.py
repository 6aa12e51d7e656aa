"""Plain-text bodies for budget alerts and monthly reports."""

from decimal import Decimal
from typing import Sequence

from flowtrack.domain.entities import BudgetAlert, MonthlyStats, User
from flowtrack.notifications.base import Message


def format_money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def budget_alert_message(user: User, alert: BudgetAlert) -> Message:
    """Build the alert sent when a user nears their monthly budget."""
    lines = [
        f"Hello {user.name},",
        "",
        f"You've used {alert.percentage_used:.1f}% of your monthly budget.",
        "",
        f"Budget Amount: {format_money(alert.budget_amount)}",
        f"Spent So Far:  {format_money(alert.total_expenses)}",
        f"Remaining:     {format_money(alert.remaining)}",
    ]
    return Message(
        to=user.email,
        subject=f"Budget Alert for {alert.account_name}",
        body="\n".join(lines),
    )


def monthly_report_message(
    user: User, stats: MonthlyStats, month_name: str, insights: Sequence[str]
) -> Message:
    """Build the monthly financial report."""
    lines = [
        f"Hello {user.name},",
        "",
        f"Here's your financial summary for {month_name}:",
        "",
        f"Total Income:   {format_money(stats.total_income)}",
        f"Total Expenses: {format_money(stats.total_expenses)}",
        f"Net:            {format_money(stats.total_income - stats.total_expenses)}",
        f"Transactions:   {stats.transaction_count}",
    ]

    if stats.by_category:
        lines += ["", "Expenses by Category:"]
        ranked = sorted(stats.by_category.items(), key=lambda item: (-item[1], item[0]))
        for category, amount in ranked:
            lines.append(f"  {category:<20} {format_money(amount):>12}")

    if insights:
        lines += ["", "Insights:"]
        lines += [f"  - {insight}" for insight in insights]

    return Message(
        to=user.email,
        subject=f"Your Monthly Financial Report - {month_name}",
        body="\n".join(lines),
    )
