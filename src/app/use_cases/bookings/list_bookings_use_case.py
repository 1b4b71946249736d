from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import BookingInfo, BookingListResponse


class ListBookingsUseCase:
    """List the authenticated user's bookings, newest first."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[BookingListResponse]:
        async with self.uow:
            bookings = await self.uow.bookings.list_by_user_id(user_id)
            return Return.ok(
                BookingListResponse(bookings=[BookingInfo.from_entity(b) for b in bookings])
            )
