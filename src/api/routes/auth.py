from datetime import datetime, timedelta
from typing import Callable, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.api.utils.jwt import SigningContext
from src.app.services.email_dispatcher import IEmailDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    RequestPasswordResetResponse,
    VerifyResetTokenResponse,
    ConfirmPasswordResetResponse,
)
from src.app.use_cases.base_dto import CamelModel
from src.depends import (
    get_clock,
    get_config,
    get_email_dispatcher,
    get_signing_context,
    get_unit_of_work,
)
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/auth", tags=["Authentication"])

PHONE_PATTERN = r"^[6-9]\d{9}$"
PINCODE_PATTERN = r"^\d{6}$"


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    full_name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN, description="10-digit mobile number")
    door_number: Optional[str] = Field(None, max_length=50)
    building_name: Optional[str] = Field(None, max_length=255)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, pattern=PINCODE_PATTERN, description="6-digit pincode")


@router.post("/register", status_code=status.HTTP_200_OK, response_model=RegisterResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    signing_context: SigningContext = Depends(get_signing_context),
):
    """
    User Registration

    Creates a new account and returns a session token for it.

    Raises:
        - 400 Bad Request: Email already registered, weak password or invalid input
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        full_name=request.full_name,
        email=request.email,
        password=request.password,
        phone=request.phone,
        door_number=request.door_number,
        building_name=request.building_name,
        street=request.street,
        city=request.city,
        state=request.state,
        pincode=request.pincode,
    )

    use_case = RegisterUseCase(uow, signing_context)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                ErrorCode.DUPLICATE_RESOURCE: status.HTTP_400_BAD_REQUEST,
                ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
            },
        )

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    signing_context: SigningContext = Depends(get_signing_context),
):
    """
    User Login

    Verifies credentials and returns a 7-day session token.

    Raises:
        - 400 Bad Request: Invalid credentials (same for unknown email)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, signing_context)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(
            result.error, {ErrorCode.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST}
        )

    return result.value


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload
    """

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_dispatcher: IEmailDispatcher = Depends(get_email_dispatcher),
    clock: Callable[[], datetime] = Depends(get_clock),
    config=Depends(get_config),
):
    """
    Request Password Reset

    Issues a 1-hour reset token and emails a link carrying it.

    Security:
        - No email enumeration (same response for registered/unregistered emails)
        - Only the SHA-256 hash of the token is stored
        - Email is sent after the response, so timing does not depend on the mail server
        - Email delivery failures are logged, never reported

    Returns:
        - 200 OK: Always returns the generic success message
        - 400 Bad Request: Malformed email
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        email_dispatcher,
        frontend_url=config.FRONTEND_URL,
        token_ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
        clock=clock,
        schedule=background_tasks.add_task,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


class VerifyResetTokenRequest(BaseModel):
    """
    Verify reset token HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/verify-reset-token",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
)
async def verify_reset_token(
    request: VerifyResetTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Verify Reset Token

    Advisory pre-check before the client shows the new-password form.
    Does not consume the token.

    Raises:
        - 400 Bad Request: Invalid or expired token
    """
    use_case = VerifyResetTokenUseCase(uow, clock=clock)
    result = await use_case.execute(request.email, request.token)

    if result.is_err():
        raise_for_error(
            result.error, {ErrorCode.INVALID_OR_EXPIRED_TOKEN: status.HTTP_400_BAD_REQUEST}
        )

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="New password")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Confirm Password Reset

    Validates the reset token and sets the new password. The token is
    cleared in the same write, so it works once.

    Security:
        - Token must not be expired (1 hour window)
        - Wrong, expired and already-used tokens get the same error
        - Password must meet complexity requirements
        - Existing session tokens are not revoked

    Raises:
        - 400 Bad Request: Invalid or expired token, or weak password
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow, clock=clock)
    result = await use_case.execute(request.email, request.token, request.password)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                ErrorCode.INVALID_OR_EXPIRED_TOKEN: status.HTTP_400_BAD_REQUEST,
                ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
            },
        )

    return result.value
