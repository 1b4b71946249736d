"""
Profile Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.auth.register_dto import UserInfo
from src.app.use_cases.base_dto import CamelModel


class UpdateProfileCommand(BaseModel):
    """
    Profile changes. Fields left as None keep their current value.

    Full name and email are not editable.
    """

    phone: Optional[str] = None
    door_number: Optional[str] = None
    building_name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


class ProfileResponse(CamelModel):
    """Response for profile use cases"""

    user: UserInfo
