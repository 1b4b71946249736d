"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from urllib.parse import urlencode
from uuid import UUID

from libs.result import Result, Return
from src.app.services.credentials import generate_reset_token, hash_reset_token
from src.app.services.email_dispatcher import IEmailDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import normalize_email
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If the email is registered, a password reset link has been sent"

# schedule(func, *args) runs func(*args) after the response is sent
Scheduler = Callable[..., None]


def _generic_response() -> Result[RequestPasswordResetResponse]:
    return Return.ok(RequestPasswordResetResponse(status="sent", message=GENERIC_RESET_MESSAGE))


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure token (32 random bytes)
    - Store only the SHA-256 hash of the token, never the token
    - Token expires in 1 hour
    - A new request overwrites any pending token for the account
    - No email enumeration (same response for registered/unregistered emails)
    - Email goes out through the scheduler when one is given, so a slow mail
      server does not delay the response for registered addresses
    - Email delivery failure is logged and does not fail the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_dispatcher: IEmailDispatcher,
        frontend_url: str,
        token_ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utc_now,
        schedule: Optional[Scheduler] = None,
    ):
        self.uow = uow
        self.email_dispatcher = email_dispatcher
        self.frontend_url = frontend_url.rstrip("/")
        self.token_ttl = token_ttl
        self.clock = clock
        self.schedule = schedule

    def _build_reset_url(self, raw_token: str, email: str) -> str:
        query = urlencode({"token": raw_token, "email": email})
        return f"{self.frontend_url}/reset-password?{query}"

    async def send_reset_email(
        self, user_id: UUID, to_address: str, reset_url: str, recipient_name: str
    ) -> None:
        dispatch = await self.email_dispatcher.send_password_reset(
            to_address, reset_url, recipient_name
        )
        if dispatch.is_err():
            logger.warning(
                "Password reset email for user %s not delivered: %s",
                user_id,
                dispatch.error.message,
            )

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic reset response. Only persistence
            failures escape, as exceptions.
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                # Same response as a real request; nothing stored, nothing sent
                return _generic_response()

            raw_token = generate_reset_token()
            token_hash = hash_reset_token(raw_token)
            expires_at = self.clock() + self.token_ttl

            await self.uow.users.set_reset_token(user.email, token_hash, expires_at)
            await self.uow.commit()

            user_id = user.id
            recipient_email = user.email
            recipient_name = user.full_name

        logger.info("Password reset issued for user %s, expires at %s", user_id, expires_at)

        reset_url = self._build_reset_url(raw_token, recipient_email)
        if self.schedule is None:
            await self.send_reset_email(user_id, recipient_email, reset_url, recipient_name)
        else:
            self.schedule(self.send_reset_email, user_id, recipient_email, reset_url, recipient_name)

        return _generic_response()
