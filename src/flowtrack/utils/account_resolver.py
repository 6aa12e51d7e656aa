"""Utility for resolving account names to IDs."""

from flowtrack.domain.account import AccountService
from flowtrack.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, user_id: int, account: str | int) -> int:
    """Resolve one of the user's accounts by name or ID.

    Args:
        account_service: AccountService instance
        user_id: Owning user ID
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If the user has no such account
    """
    if isinstance(account, int):
        return account_service.require_account(account, user_id).id

    # Numeric strings are IDs, anything else is a name
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None
    if account_id is not None:
        return account_service.require_account(account_id, user_id).id

    for acc in account_service.list_accounts(user_id):
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
