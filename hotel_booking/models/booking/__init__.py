from hotel_booking.models.booking.booking import Booking

__all__ = ["Booking"]
