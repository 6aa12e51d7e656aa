"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Sequence
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid pulling services in through domain/__init__.py
from flowtrack.domain.entities import (
    Account,
    AccountType,
    Budget,
    RecurringInterval,
    Transaction,
    TransactionStatus,
    TransactionType,
    User,
)


class Database(ABC):
    """Abstract database interface for flowtrack.

    Every read and write of accounts and transactions is scoped by the owning
    user's ID. Writes commit immediately unless they run inside ``atomic()``,
    in which case they commit or roll back together when the block exits.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group the writes issued inside the block into one unit.

        The unit commits when the block exits normally and rolls back
        entirely if it raises. Nested blocks join the outermost unit.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(self, name: str, email: str) -> int:
        """Create a new user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: int,
        name: str,
        type: AccountType,
        balance: Decimal,
        is_default: bool,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, user_id: int) -> Optional[Account]:
        """Get account by ID, only if owned by the user."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: int) -> list[Account]:
        """List a user's accounts, newest first, with transaction counts."""
        pass

    @abstractmethod
    def get_default_account(self, user_id: int) -> Optional[Account]:
        """Get the user's default account."""
        pass

    @abstractmethod
    def clear_default_account(self, user_id: int) -> None:
        """Unset the default flag on all of the user's accounts."""
        pass

    @abstractmethod
    def set_default_account(self, account_id: int, user_id: int) -> None:
        """Set the default flag on one account."""
        pass

    @abstractmethod
    def increment_account_balance(self, account_id: int, delta: Decimal) -> bool:
        """Atomically add ``delta`` to the stored balance.

        Returns:
            True if the account exists and was updated
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: int,
        account_id: int,
        type: TransactionType,
        amount: Decimal,
        date: date,
        category: str,
        description: Optional[str] = None,
        status: TransactionStatus = TransactionStatus.COMPLETED,
        is_recurring: bool = False,
        recurring_interval: Optional[RecurringInterval] = None,
        next_recurring_date: Optional[datetime] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        """Get transaction by ID, only if owned by the user."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List a user's transactions with optional filters, newest first."""
        pass

    @abstractmethod
    def get_transactions_by_ids(self, transaction_ids: Sequence[int], user_id: int) -> list[Transaction]:
        """Get the subset of the given transactions owned by the user."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        user_id: int,
        account_id: Optional[int] = None,
        type: Optional[TransactionType] = None,
        amount: Optional[Decimal] = None,
        date: Optional[date] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        recurring_interval: Optional[RecurringInterval] = None,
        next_recurring_date: Optional[datetime] = None,
        clear_recurrence: bool = False,
    ) -> None:
        """Update transaction fields.

        Args:
            recurring_interval: If given, the transaction becomes recurring
            clear_recurrence: If True, the transaction stops being recurring
        """
        pass

    @abstractmethod
    def delete_transactions(self, transaction_ids: Sequence[int], user_id: int) -> int:
        """Delete the user's transactions with the given IDs. Returns count."""
        pass

    @abstractmethod
    def find_due_recurring_transactions(self, now: datetime) -> list[Transaction]:
        """Find recurring templates of all users that are due at ``now``."""
        pass

    @abstractmethod
    def advance_recurring_schedule(
        self,
        transaction_id: int,
        user_id: int,
        processed_at: datetime,
        next_recurring_date: datetime,
    ) -> bool:
        """Advance a template's schedule only while it is still due.

        Returns:
            True if the template was due and has been advanced
        """
        pass

    @abstractmethod
    def sum_transactions(
        self,
        user_id: int,
        type: TransactionType,
        start_date: date,
        end_date: date,
        account_id: Optional[int] = None,
    ) -> Decimal:
        """Sum transaction amounts of one type within an inclusive date range."""
        pass

    # Budget operations
    @abstractmethod
    def upsert_budget(self, user_id: int, amount: Decimal) -> int:
        """Create or update the user's budget. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(self, user_id: int) -> Optional[Budget]:
        """Get the user's budget."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List budgets of all users."""
        pass

    @abstractmethod
    def claim_budget_alert(self, budget_id: int, sent_at: datetime, month_start: datetime) -> bool:
        """Record an alert only while none was sent since ``month_start``.

        Returns:
            True if this caller claimed the alert and should send it
        """
        pass
