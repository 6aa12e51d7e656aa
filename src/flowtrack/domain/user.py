"""User domain service."""

from typing import Optional
from flowtrack.database.base import Database
from flowtrack.domain.entities import User as UserEntity
from flowtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    duplicate_email,
    unauthorized,
    user_not_found,
)


class UserService:
    """Service for managing users.

    Identity is owned by an external provider; this service only keeps the
    name and email needed to address alerts and reports.
    """

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, name: str, email: str) -> int:
        """Create a user.

        Raises:
            ValidationError: If name or email is empty
            ConflictError: If the email is already registered
        """
        name = name.strip()
        email = email.strip()
        if not name or not email:
            raise ValidationError("User name and email are required")
        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_email(email))
        return self.db.create_user(name=name, email=email)

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        return self.db.get_user(user_id)

    def list_users(self) -> list[UserEntity]:
        return self.db.list_users()

    def require_user(self, user_id: Optional[int]) -> UserEntity:
        """Resolve the acting user.

        Raises:
            UnauthorizedError: If no user ID is present in context
            NotFoundError: If the user does not exist
        """
        if user_id is None:
            raise UnauthorizedError(unauthorized())
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user
