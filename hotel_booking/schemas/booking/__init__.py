from hotel_booking.schemas.booking.booking_base import (
    AvailabilityResponse,
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    HotelSummary,
    MultiBookingResponse,
    RoomSummary,
)

__all__ = [
    "AvailabilityResponse",
    "BookingCreate",
    "BookingResponse",
    "BookingUpdate",
    "HotelSummary",
    "MultiBookingResponse",
    "RoomSummary",
]
