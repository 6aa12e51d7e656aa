"""Budget domain service and budget alert evaluation."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from flowtrack.database.base import Database
from flowtrack.domain.entities import (
    Budget,
    BudgetAlert,
    CurrentBudget,
    JobResult,
    TransactionType,
)
from flowtrack.domain.errors import NotFoundError, user_not_found
from flowtrack.notifications.base import Mailer
from flowtrack.notifications.templates import budget_alert_message
from flowtrack.utils.amount_parser import parse_magnitude
from flowtrack.utils.date_parser import current_month_range, is_new_month, utc_now

logger = logging.getLogger(__name__)

DEFAULT_ALERT_THRESHOLD = Decimal("80")


class BudgetService:
    """Service for managing the single monthly budget of each user."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def update_budget(self, user_id: int, amount: Decimal | str | int) -> Budget:
        """Create or replace the user's monthly budget.

        Raises:
            NotFoundError: If the user does not exist
            InvalidAmountError: If the amount is not a non-negative number
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        budget_amount = parse_magnitude(amount)
        self.db.upsert_budget(user_id, budget_amount)
        return self.db.get_budget(user_id)

    def get_budget(self, user_id: int) -> Optional[Budget]:
        return self.db.get_budget(user_id)

    def get_current_budget(
        self, user_id: int, account_id: int, now: Optional[datetime] = None
    ) -> CurrentBudget:
        """Return the user's budget and this month's expenses on one account."""
        now = now or utc_now()
        start, end = current_month_range(now)
        expenses = self.db.sum_transactions(
            user_id=user_id,
            type=TransactionType.EXPENSE,
            start_date=start,
            end_date=end,
            account_id=account_id,
        )
        return CurrentBudget(budget=self.db.get_budget(user_id), current_expenses=expenses)


class BudgetEvaluator:
    """Sends at most one budget alert per user per calendar month.

    Budgets are measured against expenses on the user's default account in
    the current calendar month.
    """

    def __init__(
        self,
        db: Database,
        mailer: Mailer,
        threshold: Decimal = DEFAULT_ALERT_THRESHOLD,
    ):
        """Initialize budget evaluator.

        Args:
            db: Database instance
            mailer: Transport for alert messages
            threshold: Percentage of the budget at which to alert
        """
        self.db = db
        self.mailer = mailer
        self.threshold = Decimal(threshold)

    def should_alert(self, budget: Budget, percentage_used: Decimal, now: datetime) -> bool:
        """Check the threshold and that no alert went out this month yet."""
        if percentage_used < self.threshold:
            return False
        return budget.last_alert_sent is None or is_new_month(budget.last_alert_sent, now)

    def check_budget(self, budget: Budget, now: Optional[datetime] = None) -> Optional[BudgetAlert]:
        """Evaluate one budget and send an alert if warranted.

        Returns:
            The alert that was sent, or None
        """
        now = now or utc_now()

        default_account = self.db.get_default_account(budget.user_id)
        if default_account is None:
            logger.debug("User %s has no default account, skipping budget %s", budget.user_id, budget.id)
            return None
        if not budget.amount or budget.amount <= 0:
            logger.debug("Budget %s has no amount set, skipping", budget.id)
            return None

        start, end = current_month_range(now)
        total_expenses = self.db.sum_transactions(
            user_id=budget.user_id,
            type=TransactionType.EXPENSE,
            start_date=start,
            end_date=end,
            account_id=default_account.id,
        )
        percentage_used = total_expenses / budget.amount * 100

        if not self.should_alert(budget, percentage_used, now):
            return None

        user = self.db.get_user(budget.user_id)
        if user is None:
            raise NotFoundError(user_not_found(budget.user_id))

        alert = BudgetAlert(
            budget_id=budget.id,
            user_id=budget.user_id,
            account_name=default_account.name,
            budget_amount=budget.amount,
            total_expenses=total_expenses,
            percentage_used=percentage_used,
        )
        month_start = datetime(now.year, now.month, 1)
        if not self.db.claim_budget_alert(budget.id, now, month_start):
            logger.debug("Budget %s alert already sent this month by another run", budget.id)
            return None

        if not self.mailer.send(budget_alert_message(user, alert)):
            logger.warning("Budget alert for user %s was not delivered", budget.user_id)
        logger.info(
            "Budget alert for user %s: %.1f%% of %s used",
            budget.user_id, percentage_used, budget.amount,
        )
        return alert

    def check_budget_alerts(self, now: Optional[datetime] = None) -> JobResult:
        """Evaluate every budget, each as its own unit of work."""
        now = now or utc_now()
        result = JobResult()

        for budget in self.db.list_budgets():
            try:
                alert = self.check_budget(budget, now)
            except Exception as e:
                logger.exception("Failed to check budget %s", budget.id)
                result.failed += 1
                result.errors.append(f"{budget.id}: {e}")
                continue
            if alert is None:
                result.skipped += 1
            else:
                result.processed += 1

        return result
