"""
Booking Entity

A pickup-and-deliver request placed by a user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import BookingStatus


class Booking(SQLModel, table=True):
    """
    Booking entity - one delivery request.

    Business Rules:
    - Owned by exactly one user; only the owner can read it
    - tracking_code is unique and generated server-side
    - New bookings start as Pending
    """

    __tablename__ = "bookings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    tracking_code: str = Field(unique=True, index=True, max_length=32)
    status: BookingStatus = Field(default=BookingStatus.pending)

    # Sender / pickup
    pickup_name: str = Field(max_length=255)
    pickup_phone: str = Field(max_length=20)
    pickup_door_number: str = Field(max_length=50)
    pickup_building_name: Optional[str] = Field(default=None, max_length=255)
    pickup_street: str = Field(max_length=255)
    pickup_city: str = Field(max_length=100)
    pickup_state: str = Field(max_length=100)
    pickup_pincode: str = Field(max_length=6)

    # Receiver / dropoff
    dropoff_name: str = Field(max_length=255)
    dropoff_phone: str = Field(max_length=20)
    dropoff_door_number: str = Field(max_length=50)
    dropoff_building_name: Optional[str] = Field(default=None, max_length=255)
    dropoff_street: str = Field(max_length=255)
    dropoff_city: str = Field(max_length=100)
    dropoff_state: str = Field(max_length=100)
    dropoff_pincode: str = Field(max_length=6)

    # Package
    package_contents: Optional[str] = Field(default=None, max_length=1000)
    package_type: str = Field(max_length=100)
    vehicle_type: str = Field(max_length=32)
    service_type: Optional[str] = Field(default=None, max_length=100)
    pickup_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_booking_user_created", "user_id", "created_at"),)
