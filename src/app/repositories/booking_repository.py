from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Booking


class IBookingRepository(ABC):
    """Booking repository interface - application layer"""

    @abstractmethod
    async def create(self, booking: Booking) -> Booking:
        """Create a new booking"""
        pass

    @abstractmethod
    async def get_for_user(self, booking_id: UUID, user_id: UUID) -> Optional[Booking]:
        """Get a booking by ID, only if owned by the user"""
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: UUID) -> List[Booking]:
        """List a user's bookings, newest first"""
        pass
