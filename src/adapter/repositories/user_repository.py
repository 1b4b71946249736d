from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def set_reset_token(
        self, email: str, token_hash: str, expires_at: datetime
    ) -> int:
        """Store reset token hash and expiry (last write wins)"""
        stmt = (
            update(User)
            .where(User.email == email)
            .values(reset_token_hash=token_hash, reset_token_expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(stmt)
        return result.rowcount

    async def update_password_and_clear_reset(
        self,
        email: str,
        new_password_hash: str,
        expected_reset_token_hash: str,
        now: datetime,
    ) -> int:
        """Conditional single-row write: token check, password change and token clear"""
        stmt = (
            update(User)
            .where(
                User.email == email,
                User.reset_token_hash == expected_reset_token_hash,
                User.reset_token_expires_at > now,
            )
            .values(
                password_hash=new_password_hash,
                reset_token_hash=None,
                reset_token_expires_at=None,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(stmt)
        return result.rowcount

    async def clear_reset_token(
        self, email: str, expected_reset_token_hash: Optional[str] = None
    ) -> int:
        """Clear reset token fields"""
        stmt = update(User).where(User.email == email)
        if expected_reset_token_hash is not None:
            stmt = stmt.where(User.reset_token_hash == expected_reset_token_hash)
        stmt = stmt.values(reset_token_hash=None, reset_token_expires_at=None).execution_options(
            synchronize_session=False
        )
        result = await self.session.exec(stmt)
        return result.rowcount
