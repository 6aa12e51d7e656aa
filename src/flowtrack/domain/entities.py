"""Domain model entities for flowtrack.

These are pure data classes representing business concepts, independent of
database schema. Services receive and return these, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account."""

    CURRENT = "CURRENT"
    SAVINGS = "SAVINGS"


class TransactionType(str, Enum):
    """Direction of a transaction; the amount itself is always non-negative."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionStatus(str, Enum):
    """Transaction lifecycle status."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class RecurringInterval(str, Enum):
    """Recurrence period of a template transaction."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    user_id: int
    name: str
    type: AccountType
    balance: Decimal
    is_default: bool
    created_at: datetime
    transaction_count: int = 0


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    A transaction with ``is_recurring`` set is a template: it describes a
    schedule and is materialized into one-time transactions when due.
    """

    id: int
    user_id: int
    account_id: int
    type: TransactionType
    amount: Decimal
    date: date
    category: str
    description: Optional[str] = None
    status: TransactionStatus = TransactionStatus.COMPLETED
    is_recurring: bool = False
    recurring_interval: Optional[RecurringInterval] = None
    next_recurring_date: Optional[datetime] = None
    last_processed: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Budget:
    """Monthly budget of a user."""

    id: int
    user_id: int
    amount: Decimal
    last_alert_sent: Optional[datetime]
    created_at: datetime


@dataclass(frozen=True)
class MonthlyStats:
    """Aggregated figures for one user over one calendar month."""

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    by_category: dict[str, Decimal] = field(default_factory=dict)
    transaction_count: int = 0


@dataclass(frozen=True)
class CurrentBudget:
    """A budget together with the spending it is measured against."""

    budget: Optional[Budget]
    current_expenses: Decimal


@dataclass(frozen=True)
class BudgetAlert:
    """Figures reported when a budget crosses the alert threshold."""

    budget_id: int
    user_id: int
    account_name: str
    budget_amount: Decimal
    total_expenses: Decimal
    percentage_used: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.budget_amount - self.total_expenses


@dataclass
class JobResult:
    """Outcome counters of one scheduled job step."""

    processed: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
