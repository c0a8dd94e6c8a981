from hotel_booking.repositories.booking.booking_repository import (
    BookingFilters,
    BookingRepository,
    NewBooking,
)

__all__ = ["BookingFilters", "BookingRepository", "NewBooking"]
