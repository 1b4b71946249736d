"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import logging
from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.credentials import (
    hash_password,
    hash_reset_token,
    reset_token_matches,
    reset_token_unexpired,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import normalize_email
from src.domain.errors import ErrorCode
from .dtos import ConfirmPasswordResetResponse
from .password_policy import validate_password_strength

logger = logging.getLogger(__name__)


def _invalid_token() -> Result:
    return Return.err(
        Error(
            ErrorCode.INVALID_OR_EXPIRED_TOKEN,
            "Invalid or expired password reset token",
        )
    )


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Token must not be expired (valid strictly before expires_at)
    - Wrong, expired, consumed tokens and unknown emails are indistinguishable
    - New password must meet the strength policy
    - Password is hashed with bcrypt (cost factor 12)
    - Password update and token clearing are a single conditional write,
      so a token succeeds at most once even under concurrent requests
    - Existing session tokens stay valid until their own expiry
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, email: str, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            email: Account email from the reset link
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: Token wrong, expired, already used,
              or no such account
            - WEAK_PASSWORD: Password does not meet complexity requirements
        """
        email = normalize_email(email)

        async with self.uow:
            token_hash = hash_reset_token(token)
            now = self.clock()

            user = await self.uow.users.get_by_email(email)
            if not reset_token_matches(user, token_hash):
                return _invalid_token()

            if not reset_token_unexpired(user, now):
                # Expired tokens are cleared, unless replaced in the meantime
                await self.uow.users.clear_reset_token(email, token_hash)
                await self.uow.commit()
                return _invalid_token()

            strength = validate_password_strength(new_password)
            if strength.is_err():
                return Return.err(strength.error)

            password_hash = hash_password(new_password)

            rows = await self.uow.users.update_password_and_clear_reset(
                email, password_hash, token_hash, now
            )
            if rows != 1:
                logger.info("Password reset token for user %s was consumed concurrently", user.id)
                return _invalid_token()

            await self.uow.commit()

            logger.info("Password reset completed for user %s", user.id)

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
