from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from .dtos import BookingInfo, BookingResponse


class GetBookingUseCase:
    """
    Load one booking.

    Another user's booking is reported as not found.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, booking_id: UUID) -> Result[BookingResponse]:
        async with self.uow:
            booking = await self.uow.bookings.get_for_user(booking_id, user_id)
            if booking is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Booking not found"))

            return Return.ok(BookingResponse(booking=BookingInfo.from_entity(booking)))
