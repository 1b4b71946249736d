"""
Login Use Case

Handles credential verification and session token issuance.
"""

import logging

from libs.result import Error, Result, Return
from src.api.utils.jwt import SigningContext, issue_session_token
from src.app.services.credentials import burn_password_check, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import normalize_email
from src.domain.errors import ErrorCode
from .dtos import LoginResponse
from .register_dto import UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Unknown email and wrong password give the same error
    - Unknown email still costs one bcrypt check (no timing oracle)
    - Session token lifetime comes from the signing context (7 days)
    """

    def __init__(self, uow: UnitOfWork, signing_context: SigningContext):
        self.uow = uow
        self.signing_context = signing_context

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing token and user, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                burn_password_check()
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")
                )

            if not verify_password(password, user.password_hash):
                logger.info("Failed login for user %s", user.id)
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")
                )

            token = issue_session_token(self.signing_context, user.id)

            return Return.ok(LoginResponse(token=token, user=UserInfo.from_entity(user)))
