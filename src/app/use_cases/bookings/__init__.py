"""
Booking Use Cases
"""

from .create_booking_use_case import CreateBookingUseCase, make_tracking_code
from .list_bookings_use_case import ListBookingsUseCase
from .get_booking_use_case import GetBookingUseCase
from .dtos import (
    BookingInfo,
    BookingListResponse,
    BookingResponse,
    CreateBookingCommand,
)

__all__ = [
    "CreateBookingUseCase",
    "ListBookingsUseCase",
    "GetBookingUseCase",
    "make_tracking_code",
    "CreateBookingCommand",
    "BookingInfo",
    "BookingResponse",
    "BookingListResponse",
]
