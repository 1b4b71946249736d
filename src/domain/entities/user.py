"""
User Entity

Represents a customer account and its authentication material.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup; one address is one account whatever its case"""
    return email.strip().lower()


class User(SQLModel, table=True):
    """
    User entity - a customer who books deliveries.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12), never in clear
    - At most one outstanding password reset per account; a new request
      overwrites the previous one
    - reset_token_hash and reset_token_expires_at are both set or both null
    - Reset token stored only as its SHA-256 hex digest
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    full_name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Default pickup address
    door_number: Optional[str] = Field(default=None, max_length=50)
    building_name: Optional[str] = Field(default=None, max_length=255)
    street: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    pincode: Optional[str] = Field(default=None, max_length=6)

    # Password reset
    reset_token_hash: Optional[str] = Field(default=None, max_length=64)  # SHA-256 hex
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
