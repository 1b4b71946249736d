"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel

from src.app.use_cases.base_dto import CamelModel
from .register_dto import UserInfo


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(CamelModel):
    """Response for user login use case"""

    token: str
    user: UserInfo


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str
