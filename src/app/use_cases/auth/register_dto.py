"""
Register Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterCommand: Input to use case (validated business intent)
- RegisterResponse: Output from use case (structured result)
"""

from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.base_dto import CamelModel
from src.domain.entities import User


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    full_name: str
    email: str
    password: str
    phone: Optional[str] = None
    door_number: Optional[str] = None
    building_name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


class UserInfo(CamelModel):
    """Public user information; never carries password or reset fields"""

    id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    door_number: Optional[str] = None
    building_name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    created_at: str

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            door_number=user.door_number,
            building_name=user.building_name,
            street=user.street,
            city=user.city,
            state=user.state,
            pincode=user.pincode,
            created_at=user.created_at.isoformat(),
        )


class RegisterResponse(CamelModel):
    """
    Register response - session token plus the created user

    Same shape as the login response so the client handles both alike.
    """

    token: str
    user: UserInfo
