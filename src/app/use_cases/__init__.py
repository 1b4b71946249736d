"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and password reset flows
- profile/: Current user's profile
- bookings/: Delivery bookings
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    RegisterResponse,
    LoginUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
)
from .profile import (
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from .bookings import (
    CreateBookingUseCase,
    ListBookingsUseCase,
    GetBookingUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "RegisterResponse",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # Profile
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    # Bookings
    "CreateBookingUseCase",
    "ListBookingsUseCase",
    "GetBookingUseCase",
]
