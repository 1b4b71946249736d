"""
Profile Use Cases
"""

from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .dtos import ProfileResponse, UpdateProfileCommand

__all__ = [
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "ProfileResponse",
    "UpdateProfileCommand",
]
