"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so that the domain never sees ORM
rows or session state.
"""

from decimal import Decimal

from flowtrack.domain import entities as domain
from flowtrack.database.models import (
    Account as ORMAccount,
    Budget as ORMBudget,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def account_to_domain(orm_account: ORMAccount, transaction_count: int = 0) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        type=orm_account.type,
        balance=_to_decimal(orm_account.balance),
        is_default=orm_account.is_default,
        created_at=orm_account.created_at,
        transaction_count=transaction_count,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        type=orm_transaction.type,
        amount=_to_decimal(orm_transaction.amount),
        date=orm_transaction.date,
        category=orm_transaction.category,
        description=orm_transaction.description,
        status=orm_transaction.status,
        is_recurring=orm_transaction.is_recurring,
        recurring_interval=orm_transaction.recurring_interval,
        next_recurring_date=orm_transaction.next_recurring_date,
        last_processed=orm_transaction.last_processed,
        created_at=orm_transaction.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        user_id=orm_budget.user_id,
        amount=_to_decimal(orm_budget.amount),
        last_alert_sent=orm_budget.last_alert_sent,
        created_at=orm_budget.created_at,
    )
