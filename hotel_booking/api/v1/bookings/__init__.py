from hotel_booking.api.v1.bookings.bookings import router

__all__ = ["router"]
