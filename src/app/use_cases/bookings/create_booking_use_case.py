"""
Create Booking Use Case

Records a new delivery request for the authenticated user.
"""

import logging
import secrets
import string
import time
from datetime import UTC, datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Booking, BookingStatus
from .dtos import BookingInfo, BookingResponse, CreateBookingCommand

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(number: int) -> str:
    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
        if number == 0:
            return "".join(reversed(digits))


def make_tracking_code() -> str:
    """RC + base-36 millisecond timestamp + 5 random base-36 characters"""
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"RC{timestamp}{suffix}"


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class CreateBookingUseCase:
    """
    Use case for placing a booking.

    Business Rules:
    - Booking belongs to the authenticated user
    - Tracking code generated server-side
    - Status starts as Pending
    - Empty optional strings are stored as null
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, command: CreateBookingCommand
    ) -> Result[BookingResponse]:
        async with self.uow:
            booking = Booking(
                user_id=user_id,
                tracking_code=make_tracking_code(),
                status=BookingStatus.pending,
                pickup_name=command.sender_name,
                pickup_phone=command.sender_phone,
                pickup_door_number=command.pickup_door_number,
                pickup_building_name=command.pickup_building_name or None,
                pickup_street=command.pickup_street,
                pickup_city=command.pickup_city,
                pickup_state=command.pickup_state,
                pickup_pincode=command.pickup_pincode,
                dropoff_name=command.receiver_name,
                dropoff_phone=command.receiver_phone,
                dropoff_door_number=command.delivery_door_number,
                dropoff_building_name=command.delivery_building_name or None,
                dropoff_street=command.delivery_street,
                dropoff_city=command.delivery_city,
                dropoff_state=command.delivery_state,
                dropoff_pincode=command.delivery_pincode,
                package_contents=command.description or None,
                package_type=command.package_type,
                vehicle_type=command.vehicle_type,
                service_type=command.service_type or None,
                pickup_at=_as_naive_utc(command.pickup_date),
            )
            booking = await self.uow.bookings.create(booking)
            await self.uow.commit()

            logger.info("Booking %s created for user %s", booking.tracking_code, user_id)

            return Return.ok(BookingResponse(booking=BookingInfo.from_entity(booking)))
