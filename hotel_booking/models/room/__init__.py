from hotel_booking.models.room.room import Room

__all__ = ["Room"]
