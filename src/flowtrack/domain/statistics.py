"""Monthly statistics and monthly reports."""

import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from flowtrack.database.base import Database
from flowtrack.domain.entities import (
    JobResult,
    MonthlyStats,
    Transaction,
    TransactionType,
    User,
)
from flowtrack.insights.base import InsightGenerator, generate_insights_or_fallback
from flowtrack.notifications.base import Mailer
from flowtrack.notifications.templates import monthly_report_message
from flowtrack.utils.date_parser import month_label, month_range, previous_month, utc_now

logger = logging.getLogger(__name__)


def aggregate_monthly_stats(transactions: Iterable[Transaction]) -> MonthlyStats:
    """Fold transactions into totals and per-category expenses.

    Only expenses are broken down by category.
    """
    total_income = Decimal("0")
    total_expenses = Decimal("0")
    by_category: dict[str, Decimal] = defaultdict(Decimal)
    count = 0

    for txn in transactions:
        count += 1
        if txn.type == TransactionType.EXPENSE:
            total_expenses += txn.amount
            by_category[txn.category] += txn.amount
        else:
            total_income += txn.amount

    return MonthlyStats(
        total_income=total_income,
        total_expenses=total_expenses,
        by_category=dict(by_category),
        transaction_count=count,
    )


class MonthlyStatsService:
    """Service for computing a user's monthly statistics."""

    def __init__(self, db: Database):
        """Initialize statistics service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_monthly_stats(self, user_id: int, year: int, month: int) -> MonthlyStats:
        """Aggregate the user's transactions dated within the given month."""
        start, end = month_range(year, month)
        transactions = self.db.list_transactions(user_id=user_id, start_date=start, end_date=end)
        return aggregate_monthly_stats(transactions)


class MonthlyReportService:
    """Builds and sends the monthly report of each user."""

    def __init__(
        self,
        db: Database,
        mailer: Mailer,
        insight_generator: Optional[InsightGenerator] = None,
    ):
        """Initialize report service.

        Args:
            db: Database instance
            mailer: Transport for report messages
            insight_generator: Optional source of narrative insights
        """
        self.db = db
        self.mailer = mailer
        self.insight_generator = insight_generator
        self.stats_service = MonthlyStatsService(db)

    def send_report(self, user: User, year: int, month: int) -> bool:
        """Send one user's report for a month. Returns delivery success."""
        stats = self.stats_service.get_monthly_stats(user.id, year, month)
        label = month_label(year, month)
        insights = generate_insights_or_fallback(self.insight_generator, stats, label)

        delivered = self.mailer.send(monthly_report_message(user, stats, label, insights))
        if not delivered:
            logger.warning("Monthly report for user %s was not delivered", user.id)
        return delivered

    def send_monthly_reports(
        self, now: Optional[datetime] = None, year: Optional[int] = None, month: Optional[int] = None
    ) -> JobResult:
        """Send every user the report for a month.

        Defaults to the calendar month before ``now``.
        """
        now = now or utc_now()
        if year is None or month is None:
            year, month = previous_month(now)
        result = JobResult()

        for user in self.db.list_users():
            try:
                delivered = self.send_report(user, year, month)
            except Exception as e:
                logger.exception("Failed to build monthly report for user %s", user.id)
                result.failed += 1
                result.errors.append(f"{user.id}: {e}")
                continue
            if delivered:
                result.processed += 1
            else:
                result.failed += 1
                result.errors.append(f"{user.id}: not delivered")

        logger.info(
            "Monthly reports for %s: %d sent, %d failed",
            month_label(year, month), result.processed, result.failed,
        )
        return result
