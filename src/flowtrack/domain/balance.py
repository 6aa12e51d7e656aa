"""Account balance mutation.

Balances are never recomputed from the ledger. Every write that changes an
account's money applies one signed delta here, inside the same atomic unit as
the transaction rows that caused it.
"""

import logging
from decimal import Decimal

from flowtrack.database.base import Database
from flowtrack.domain.entities import Transaction, TransactionType
from flowtrack.domain.errors import NotFoundError, account_not_found

logger = logging.getLogger(__name__)


def signed_amount(type: TransactionType, amount: Decimal) -> Decimal:
    """Return the balance effect of a transaction: +amount for income, -amount for expense."""
    if type == TransactionType.INCOME:
        return amount
    return -amount


def reversal_amount(transaction: Transaction) -> Decimal:
    """Return the delta that undoes a transaction's balance effect."""
    return -signed_amount(transaction.type, transaction.amount)


def apply_balance_delta(db: Database, account_id: int, delta: Decimal) -> None:
    """Add a signed delta to an account's stored balance.

    Callers wrap this in ``db.atomic()`` together with the record write it
    belongs to. Storage errors propagate unchanged.

    Raises:
        NotFoundError: If the account does not exist
    """
    if not db.increment_account_balance(account_id, delta):
        raise NotFoundError(account_not_found(account_id))
    logger.debug("Applied balance delta %s to account %s", delta, account_id)
