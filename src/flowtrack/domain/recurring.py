"""Recurring transaction materialization."""

import logging
from datetime import datetime
from typing import Optional

from flowtrack.database.base import Database
from flowtrack.domain.balance import apply_balance_delta, signed_amount
from flowtrack.domain.entities import JobResult, Transaction, TransactionStatus
from flowtrack.domain.errors import (
    NotDueError,
    NotFoundError,
    ValidationError,
    missing_interval,
    not_recurring,
    template_not_due,
    transaction_not_found,
)
from flowtrack.domain.recurrence import is_due, next_date
from flowtrack.utils.date_parser import utc_now

logger = logging.getLogger(__name__)

OCCURRENCE_SUFFIX = "(Recurring)"


def occurrence_description(description: Optional[str]) -> str:
    """Mark a description as belonging to a generated occurrence."""
    if description:
        return f"{description} {OCCURRENCE_SUFFIX}"
    return OCCURRENCE_SUFFIX


class RecurringTransactionService:
    """Turns due recurring templates into concrete transactions."""

    def __init__(self, db: Database):
        """Initialize recurring transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def find_due_templates(self, now: Optional[datetime] = None) -> list[Transaction]:
        """Find the templates of all users that are due at ``now``."""
        now = now or utc_now()
        return self.db.find_due_recurring_transactions(now)

    def materialize(self, template_id: int, user_id: int, now: Optional[datetime] = None) -> int:
        """Create the occurrence of a due template and advance its schedule.

        The template is re-read and re-checked right before the write, and
        the schedule is advanced with a conditional update that only matches
        while the template is still due. Of two runs racing on one template,
        one commits and the other raises NotDueError with nothing written.

        Args:
            template_id: ID of the recurring template
            user_id: Owning user ID
            now: Processing time (defaults to current UTC time)

        Returns:
            ID of the created transaction

        Raises:
            NotFoundError: If the template doesn't exist or isn't recurring
            NotDueError: If the template is not due (or another run got there first)
        """
        now = now or utc_now()

        template = self.db.get_transaction(template_id, user_id)
        if template is None:
            raise NotFoundError(transaction_not_found(template_id))
        if not template.is_recurring:
            raise NotFoundError(not_recurring(template_id))
        if template.recurring_interval is None:
            raise ValidationError(missing_interval(template_id))
        if not is_due(template, now):
            raise NotDueError(template_not_due(template_id))

        with self.db.atomic():
            occurrence_id = self.db.create_transaction(
                user_id=template.user_id,
                account_id=template.account_id,
                type=template.type,
                amount=template.amount,
                date=now.date(),
                category=template.category,
                description=occurrence_description(template.description),
                status=TransactionStatus.COMPLETED,
                is_recurring=False,
            )
            apply_balance_delta(
                self.db, template.account_id, signed_amount(template.type, template.amount)
            )
            advanced = self.db.advance_recurring_schedule(
                transaction_id=template.id,
                user_id=template.user_id,
                processed_at=now,
                next_recurring_date=next_date(now, template.recurring_interval),
            )
            if not advanced:
                raise NotDueError(template_not_due(template_id))

        logger.info(
            "Materialized recurring transaction %s as %s for user %s",
            template_id, occurrence_id, user_id,
        )
        return occurrence_id

    def process_due_transactions(self, now: Optional[datetime] = None) -> JobResult:
        """Materialize every due template, each as its own unit of work.

        Templates that turn out not to be due (or vanished) are skipped; other
        failures are logged and counted so the remaining templates still run.
        Nothing is retried here, the next scheduled run picks up whatever is
        still due.
        """
        now = now or utc_now()
        result = JobResult()

        for template in self.find_due_templates(now):
            try:
                self.materialize(template.id, template.user_id, now)
            except (NotDueError, NotFoundError) as e:
                logger.info("Skipping recurring transaction %s: %s", template.id, e)
                result.skipped += 1
            except Exception as e:
                logger.exception("Failed to process recurring transaction %s", template.id)
                result.failed += 1
                result.errors.append(f"{template.id}: {e}")
            else:
                result.processed += 1

        logger.info(
            "Recurring run finished: %d processed, %d skipped, %d failed",
            result.processed, result.skipped, result.failed,
        )
        return result
