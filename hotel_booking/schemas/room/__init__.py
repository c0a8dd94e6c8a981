from hotel_booking.schemas.room.room_availability import (
    CurrentAvailability,
    NightAvailability,
    RoomAvailabilityRange,
)

__all__ = ["CurrentAvailability", "NightAvailability", "RoomAvailabilityRange"]
