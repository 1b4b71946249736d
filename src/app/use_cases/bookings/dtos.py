"""
Booking Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.base_dto import CamelModel
from src.domain.entities import Booking


class CreateBookingCommand(BaseModel):
    """
    Create booking command - validated booking intent

    Sender fields map to the pickup side, receiver fields to the dropoff side.
    """

    sender_name: str
    sender_phone: str
    pickup_door_number: str
    pickup_building_name: Optional[str] = None
    pickup_street: str
    pickup_city: str
    pickup_state: str
    pickup_pincode: str

    receiver_name: str
    receiver_phone: str
    delivery_door_number: str
    delivery_building_name: Optional[str] = None
    delivery_street: str
    delivery_city: str
    delivery_state: str
    delivery_pincode: str

    description: Optional[str] = None
    package_type: str
    vehicle_type: str
    service_type: Optional[str] = None
    pickup_date: datetime


class BookingInfo(CamelModel):
    """Booking as returned to the owner"""

    id: str
    tracking_code: str
    status: str

    pickup_name: str
    pickup_phone: str
    pickup_door_number: str
    pickup_building_name: Optional[str] = None
    pickup_street: str
    pickup_city: str
    pickup_state: str
    pickup_pincode: str

    dropoff_name: str
    dropoff_phone: str
    dropoff_door_number: str
    dropoff_building_name: Optional[str] = None
    dropoff_street: str
    dropoff_city: str
    dropoff_state: str
    dropoff_pincode: str

    package_contents: Optional[str] = None
    package_type: str
    vehicle_type: str
    service_type: Optional[str] = None
    pickup_at: str
    created_at: str

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingInfo":
        return cls(
            id=str(booking.id),
            tracking_code=booking.tracking_code,
            status=booking.status.value,
            pickup_name=booking.pickup_name,
            pickup_phone=booking.pickup_phone,
            pickup_door_number=booking.pickup_door_number,
            pickup_building_name=booking.pickup_building_name,
            pickup_street=booking.pickup_street,
            pickup_city=booking.pickup_city,
            pickup_state=booking.pickup_state,
            pickup_pincode=booking.pickup_pincode,
            dropoff_name=booking.dropoff_name,
            dropoff_phone=booking.dropoff_phone,
            dropoff_door_number=booking.dropoff_door_number,
            dropoff_building_name=booking.dropoff_building_name,
            dropoff_street=booking.dropoff_street,
            dropoff_city=booking.dropoff_city,
            dropoff_state=booking.dropoff_state,
            dropoff_pincode=booking.dropoff_pincode,
            package_contents=booking.package_contents,
            package_type=booking.package_type,
            vehicle_type=booking.vehicle_type,
            service_type=booking.service_type,
            pickup_at=booking.pickup_at.isoformat(),
            created_at=booking.created_at.isoformat(),
        )


class BookingResponse(CamelModel):
    """Response for single booking use cases"""

    booking: BookingInfo


class BookingListResponse(CamelModel):
    """Response for list bookings use case"""

    bookings: List[BookingInfo]
