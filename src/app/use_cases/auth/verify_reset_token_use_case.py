"""
Verify Reset Token Use Case

Read-only pre-check the client runs before showing the new-password form.
"""

from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.credentials import (
    hash_reset_token,
    reset_token_matches,
    reset_token_unexpired,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import normalize_email
from src.domain.errors import ErrorCode
from .dtos import VerifyResetTokenResponse


class VerifyResetTokenUseCase:
    """
    Use case for checking a password reset token without consuming it.

    Business Rules:
    - Token is matched by hashing and comparing with the stored hash
    - Valid only strictly before the stored expiry
    - Unknown email, wrong token and expired token give the same error
    - Never modifies the account
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, email: str, token: str) -> Result[VerifyResetTokenResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if not reset_token_matches(user, hash_reset_token(token)) or not reset_token_unexpired(
                user, self.clock()
            ):
                return Return.err(
                    Error(
                        ErrorCode.INVALID_OR_EXPIRED_TOKEN,
                        "Invalid or expired password reset token",
                    )
                )

            return Return.ok(
                VerifyResetTokenResponse(status="valid", message="Token is valid")
            )
