from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def set_reset_token(
        self, email: str, token_hash: str, expires_at: datetime
    ) -> int:
        """Store a reset token hash and expiry, replacing any pending one.

        Returns the number of rows affected.
        """
        pass

    @abstractmethod
    async def update_password_and_clear_reset(
        self,
        email: str,
        new_password_hash: str,
        expected_reset_token_hash: str,
        now: datetime,
    ) -> int:
        """Set a new password and clear the reset token in one conditional write.

        Only applies when the stored token hash still equals
        expected_reset_token_hash and has not expired at `now`.
        Returns the number of rows affected (0 or 1).
        """
        pass

    @abstractmethod
    async def clear_reset_token(
        self, email: str, expected_reset_token_hash: Optional[str] = None
    ) -> int:
        """Clear reset token fields, optionally only if the stored hash matches"""
        pass
