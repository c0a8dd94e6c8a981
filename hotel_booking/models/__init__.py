"""ORM models for the hotel booking service."""

from hotel_booking.models.hotel.hotel import Hotel
from hotel_booking.models.room.room import Room
from hotel_booking.models.booking.booking import Booking

__all__ = ["Hotel", "Room", "Booking"]
