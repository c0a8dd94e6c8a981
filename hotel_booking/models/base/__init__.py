from hotel_booking.models.base.base_model import BaseModel
from hotel_booking.models.base.enums import AvailabilityStatus, BookingStatus
from hotel_booking.models.base.mixins import TimestampMixin, UUIDMixin, utc_now

__all__ = [
    "BaseModel",
    "AvailabilityStatus",
    "BookingStatus",
    "TimestampMixin",
    "UUIDMixin",
    "utc_now",
]
