from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.booking_repository import IBookingRepository
from src.domain.entities import Booking


class BookingRepository(IBookingRepository):
    """Booking repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, booking: Booking) -> Booking:
        """Create a new booking"""
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def get_for_user(self, booking_id: UUID, user_id: UUID) -> Optional[Booking]:
        """Get a booking by ID scoped to its owner"""
        stmt = select(Booking).where(Booking.id == booking_id, Booking.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_user_id(self, user_id: UUID) -> List[Booking]:
        """List bookings for a user, newest first"""
        stmt = (
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
