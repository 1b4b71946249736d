"""
RedCap Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class BookingStatus(str, Enum):
    """Delivery booking status"""

    pending = "Pending"
    accepted = "Accepted"
    assigned = "Assigned"
    in_transit = "In Transit"
    out_for_delivery = "Out for Delivery"
    delivered = "Delivered"
    cancelled = "Cancelled"


class VehicleType(str, Enum):
    """Vehicle classes offered for pickup"""

    bike = "bike"
    auto = "auto"
    mini_truck = "mini-truck"
    truck = "truck"
