from hotel_booking.services.booking.availability_service import (
    AvailabilityResult,
    AvailabilityService,
    RangeAvailabilityResult,
)
from hotel_booking.services.booking.booking_service import BookingService, MultiBookingResult

__all__ = [
    "AvailabilityResult",
    "AvailabilityService",
    "BookingService",
    "MultiBookingResult",
    "RangeAvailabilityResult",
]
