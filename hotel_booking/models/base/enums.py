"""
Database enums shared by models and schemas.
"""

import enum


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    ACTIVE = "active"
    CANCEL = "cancel"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]


class AvailabilityStatus(str, enum.Enum):
    """Room availability summary for a single day."""
    AVAILABLE = "available"
    FULLY_BOOKED = "fully_booked"
