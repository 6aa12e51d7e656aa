"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class UnauthorizedError(DomainError):
    """No authenticated user in the current context."""


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is missing, unparsable or negative."""


class NotFoundError(DomainError):
    """Requested entity does not exist or is not owned by the caller."""


class NotDueError(DomainError):
    """Recurring template is not due for materialization."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def unauthorized() -> str:
    """Return message for a missing user context."""
    return "Unauthorized: no user selected"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def budget_not_found(user_id: int) -> str:
    """Return message for a user without a budget."""
    return f"No budget set for user {user_id}"


def template_not_due(transaction_id: int) -> str:
    """Return message for a recurring template that is not due."""
    return f"Recurring transaction {transaction_id} is not due"


def not_recurring(transaction_id: int) -> str:
    """Return message for a transaction that is not a recurring template."""
    return f"Transaction {transaction_id} is not recurring"


def missing_interval(transaction_id: int | None = None) -> str:
    """Return message for a recurring transaction without an interval."""
    if transaction_id is None:
        return "Recurring transactions require a recurring interval"
    return f"Recurring transaction {transaction_id} has no recurring interval"


def duplicate_email(email: str) -> str:
    """Return message for a duplicate user email."""
    return f"User with email '{email}' already exists"


def invalid_amount(value: object) -> str:
    """Return message for an unusable amount."""
    return f"Invalid amount '{value}'"
