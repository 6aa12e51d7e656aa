"""Domain layer for flowtrack application.

Services live in their own modules (flowtrack.domain.account,
flowtrack.domain.transaction, ...) and are imported from there; this package
only re-exports entities and errors so that importing it stays free of
database dependencies.
"""

from flowtrack.domain.entities import (
    Account,
    AccountType,
    Budget,
    MonthlyStats,
    RecurringInterval,
    Transaction,
    TransactionStatus,
    TransactionType,
    User,
)
from flowtrack.domain.errors import (
    ConflictError,
    DomainError,
    InvalidAmountError,
    NotDueError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "Account",
    "AccountType",
    "Budget",
    "MonthlyStats",
    "RecurringInterval",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "User",
    "ConflictError",
    "DomainError",
    "InvalidAmountError",
    "NotDueError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
]
