"""User domain service."""

from typing import Optional
from glrecon.database.base import Database
from glrecon.domain.entities import Role, User as UserEntity
from glrecon.domain.errors import ConflictError, ValidationError, duplicate_user_email


class UserService:
    """Service for managing workbench users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, email: str, name: str, role: Role = Role.JUNIOR) -> int:
        """Create a new user.

        Args:
            email: Unique e-mail address
            name: Display name
            role: Workbench role

        Returns:
            User ID

        Raises:
            ValidationError: If e-mail or name is blank
            ConflictError: If e-mail already exists
        """
        email = email.strip().lower()
        name = name.strip()
        if not email:
            raise ValidationError("User email is required")
        if not name:
            raise ValidationError("User name is required")

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_user_email(email))

        return self.db.create_user(email=email, name=name, role=Role(role))

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        """Get user by ID."""
        return self.db.get_user(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserEntity]:
        """Get user by e-mail address (case-insensitive)."""
        return self.db.get_user_by_email(email.strip().lower())

    def list_users(self) -> list[UserEntity]:
        """List all users."""
        return self.db.list_users()
