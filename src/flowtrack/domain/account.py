"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional
from flowtrack.database.base import Database
from flowtrack.domain.entities import Account as AccountEntity, AccountType
from flowtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    user_not_found,
)
from flowtrack.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts.

    Each user has exactly one default account. The first account a user
    creates becomes the default, and making another account the default
    clears the flag on the previous one.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: int,
        name: str,
        type: AccountType | str = AccountType.CURRENT,
        balance: Decimal | str | int = Decimal("0"),
        is_default: bool = False,
    ) -> int:
        """Create a new account.

        Args:
            user_id: Owning user ID
            name: Account name
            type: CURRENT or SAVINGS
            balance: Opening balance
            is_default: Make this the user's default account

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty or the type is unknown
            InvalidAmountError: If the opening balance is not a number
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        try:
            account_type = AccountType(type)
        except ValueError:
            raise ValidationError(f"Unknown account type '{type}'")
        opening_balance = parse_amount(balance)

        should_be_default = is_default or not self.db.list_accounts(user_id)

        with self.db.atomic():
            if should_be_default:
                self.db.clear_default_account(user_id)
            account_id = self.db.create_account(
                user_id=user_id,
                name=name.strip(),
                type=account_type,
                balance=opening_balance,
                is_default=should_be_default,
            )

        logger.info("Created account %s for user %s (default=%s)", account_id, user_id, should_be_default)
        return account_id

    def get_account(self, account_id: int, user_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found or not owned by the user
        """
        return self.db.get_account(account_id, user_id)

    def require_account(self, account_id: int, user_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id, user_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def get_default_account(self, user_id: int) -> Optional[AccountEntity]:
        return self.db.get_default_account(user_id)

    def list_accounts(self, user_id: int) -> list[AccountEntity]:
        """List the user's accounts, newest first, with transaction counts."""
        return self.db.list_accounts(user_id)

    def set_default_account(self, account_id: int, user_id: int) -> AccountEntity:
        """Make an account the user's default.

        Raises:
            NotFoundError: If the account does not exist or is not owned by the user
        """
        self.require_account(account_id, user_id)

        with self.db.atomic():
            self.db.clear_default_account(user_id)
            self.db.set_default_account(account_id, user_id)

        return self.require_account(account_id, user_id)
