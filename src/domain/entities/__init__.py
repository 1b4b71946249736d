"""
RedCap Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import BookingStatus, VehicleType

# Export all entities
from .user import User, normalize_email
from .booking import Booking

__all__ = [
    # Enums
    "BookingStatus",
    "VehicleType",
    # Entities
    "User",
    "Booking",
    # Helpers
    "normalize_email",
]
