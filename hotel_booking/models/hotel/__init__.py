from hotel_booking.models.hotel.hotel import Hotel

__all__ = ["Hotel"]
