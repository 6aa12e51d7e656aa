"""Transaction domain service."""

import logging
from collections import defaultdict
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal
from flowtrack.database.base import Database
from flowtrack.domain.balance import apply_balance_delta, reversal_amount, signed_amount
from flowtrack.domain.entities import (
    RecurringInterval,
    Transaction as TransactionEntity,
    TransactionType,
)
from flowtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from flowtrack.domain.recurrence import first_due_date
from flowtrack.utils.amount_parser import parse_magnitude
from flowtrack.utils.date_parser import utc_now

logger = logging.getLogger(__name__)


def _coerce_type(value: TransactionType | str) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError(f"Unknown transaction type '{value}'")


def _coerce_interval(value: RecurringInterval | str) -> RecurringInterval:
    try:
        return RecurringInterval(value)
    except ValueError:
        raise ValidationError(f"Unknown recurring interval '{value}'")


class TransactionService:
    """Service for managing transactions and keeping balances in step with them."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        user_id: int,
        account_id: int,
        type: TransactionType | str,
        amount: Decimal | str | int,
        category: str,
        date: Optional[date] = None,
        description: Optional[str] = None,
        recurring_interval: Optional[RecurringInterval | str] = None,
    ) -> int:
        """Create a transaction and apply it to the account balance.

        Passing a recurring interval makes the transaction a recurring
        template; its first scheduled run is one interval after ``date``.

        Args:
            user_id: Owning user ID
            account_id: Account ID (must belong to the user)
            type: INCOME or EXPENSE
            amount: Non-negative amount
            category: Category label
            date: Effective date (defaults to today, UTC)
            description: Optional description
            recurring_interval: Optional DAILY, WEEKLY, MONTHLY or YEARLY

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the account doesn't exist or isn't the user's
            InvalidAmountError: If the amount is not a non-negative number
            ValidationError: If type, interval or category is invalid
        """
        account = self.db.get_account(account_id, user_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        txn_type = _coerce_type(type)
        txn_amount = parse_magnitude(amount)
        if not category or not category.strip():
            raise ValidationError("Category is required")
        txn_date = date if date is not None else utc_now().date()

        interval = None
        next_recurring_date = None
        if recurring_interval is not None:
            interval = _coerce_interval(recurring_interval)
            next_recurring_date = first_due_date(txn_date, interval)

        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                user_id=user_id,
                account_id=account_id,
                type=txn_type,
                amount=txn_amount,
                date=txn_date,
                category=category.strip(),
                description=description,
                is_recurring=interval is not None,
                recurring_interval=interval,
                next_recurring_date=next_recurring_date,
            )
            apply_balance_delta(self.db, account_id, signed_amount(txn_type, txn_amount))

        logger.info(
            "Created %s transaction %s of %s on account %s",
            txn_type.value, transaction_id, txn_amount, account_id,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int, user_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found or not owned by the user
        """
        return self.db.get_transaction(transaction_id, user_id)

    def require_transaction(self, transaction_id: int, user_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id, user_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        user_id: int,
        account_id: Optional[int] = None,
        type: Optional[TransactionType | str] = None,
        amount: Optional[Decimal | str | int] = None,
        date: Optional[date] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        recurring_interval: Optional[RecurringInterval | str] = None,
        clear_recurrence: bool = False,
    ) -> None:
        """Update transaction fields and reconcile the balance by delta.

        The balance is adjusted by the difference between the new and the old
        signed amount rather than being recomputed. Moving a transaction to
        another account reverses it on the old account and applies it to the
        new one.

        Raises:
            NotFoundError: If the transaction or the new account doesn't exist
            InvalidAmountError: If the new amount is invalid
            ValidationError: If both recurring_interval and clear_recurrence are given
        """
        original = self.require_transaction(transaction_id, user_id)

        if account_id is not None and self.db.get_account(account_id, user_id) is None:
            raise NotFoundError(account_not_found(account_id))
        if recurring_interval is not None and clear_recurrence:
            raise ValidationError("Cannot set both recurring_interval and clear_recurrence")

        new_type = _coerce_type(type) if type is not None else original.type
        new_amount = parse_magnitude(amount) if amount is not None else original.amount
        new_account_id = account_id if account_id is not None else original.account_id
        if category is not None and not category.strip():
            raise ValidationError("Category is required")

        interval = _coerce_interval(recurring_interval) if recurring_interval is not None else None
        next_recurring_date = None
        if not clear_recurrence and (interval is not None or (date is not None and original.is_recurring)):
            schedule_interval = interval or original.recurring_interval
            next_recurring_date = first_due_date(date or original.date, schedule_interval)

        old_signed = signed_amount(original.type, original.amount)
        new_signed = signed_amount(new_type, new_amount)

        with self.db.atomic():
            self.db.update_transaction(
                transaction_id=transaction_id,
                user_id=user_id,
                account_id=account_id,
                type=new_type if type is not None else None,
                amount=new_amount if amount is not None else None,
                date=date,
                category=category.strip() if category is not None else None,
                description=description,
                recurring_interval=interval,
                next_recurring_date=next_recurring_date,
                clear_recurrence=clear_recurrence,
            )
            if new_account_id == original.account_id:
                delta = new_signed - old_signed
                if delta:
                    apply_balance_delta(self.db, new_account_id, delta)
            else:
                apply_balance_delta(self.db, original.account_id, -old_signed)
                apply_balance_delta(self.db, new_account_id, new_signed)

        logger.info("Updated transaction %s", transaction_id)

    def bulk_delete_transactions(self, transaction_ids: Sequence[int], user_id: int) -> int:
        """Delete several transactions and reverse their balance effects.

        Reversals are summed per account and applied as one net delta per
        account, in the same atomic unit as the delete. IDs that don't
        belong to the user are ignored.

        Returns:
            Number of transactions deleted
        """
        transactions = self.db.get_transactions_by_ids(transaction_ids, user_id)
        if not transactions:
            return 0

        balance_changes: dict[int, Decimal] = defaultdict(Decimal)
        for txn in transactions:
            balance_changes[txn.account_id] += reversal_amount(txn)

        with self.db.atomic():
            deleted = self.db.delete_transactions([txn.id for txn in transactions], user_id)
            for account_id, change in balance_changes.items():
                if change:
                    apply_balance_delta(self.db, account_id, change)

        logger.info("Deleted %d transactions for user %s", deleted, user_id)
        return deleted

    def delete_transaction(self, transaction_id: int, user_id: int) -> None:
        """Delete one transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self.require_transaction(transaction_id, user_id)
        self.bulk_delete_transactions([transaction_id], user_id)

    def list_transactions(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType | str] = None,
    ) -> list[TransactionEntity]:
        """List the user's transactions with filters, newest first."""
        return self.db.list_transactions(
            user_id=user_id,
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            type=_coerce_type(type) if type is not None else None,
        )
