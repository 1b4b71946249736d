import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import SigningContext, verify_session_token
from src.app.services.email_dispatcher import IEmailDispatcher
from src.domain.base import utc_now
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_signing_context(request: Request) -> SigningContext:
    """Signing context built by create_app at startup"""
    return request.app.state.signing_context


def get_email_dispatcher(request: Request) -> IEmailDispatcher:
    return request.app.state.email_dispatcher


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_config(request: Request):
    return request.app.state.config


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    signing_context: SigningContext = Depends(get_signing_context),
) -> UUID:
    """
    Dependency to extract and verify the session token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header
        signing_context: Server signing material

    Returns:
        Id of the user the token was issued to

    Raises:
        ClientError: 401 if token is missing, malformed, tampered or expired.
        The client always sees the same error; the reason is only logged.
    """
    if credentials is None:
        raise ClientError(
            Error(ErrorCode.AUTHENTICATION_ERROR, "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = verify_session_token(signing_context, credentials.credentials)
    if result.is_err():
        logger.info("Rejected session token: %s", result.error.code.value)
        raise ClientError(
            Error(ErrorCode.AUTHENTICATION_ERROR, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return UUID(result.value)
