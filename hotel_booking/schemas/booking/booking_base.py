"""
Booking request and response schemas.

Request schemas only describe shape and types. Business rules (positive
price, no past dates, batch size) are enforced by the booking service so
that every caller gets the same errors.
"""

from __future__ import annotations

from datetime import date as Date
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_serializer

from hotel_booking.models.base import BookingStatus
from hotel_booking.schemas.common.base import BaseSchema

__all__ = [
    "HotelSummary",
    "RoomSummary",
    "BookingCreate",
    "BookingUpdate",
    "BookingResponse",
    "MultiBookingResponse",
    "AvailabilityResponse",
]


class HotelSummary(BaseSchema):
    id: UUID
    name_th: str
    name_en: str


class RoomSummary(BaseSchema):
    id: UUID
    name_th: str
    name_en: str
    total_rooms: Optional[int] = None


class BookingCreate(BaseSchema):
    """
    Body of ``POST /bookings``.

    Exactly one of ``date`` (single night) or ``dates`` (several nights,
    all-or-nothing) must be given.
    """

    user_id: UUID = Field(..., description="Guest making the booking")
    hotel_id: UUID = Field(..., description="Hotel of the room")
    room_id: UUID = Field(..., description="Room type to book")
    date: Optional[Date] = Field(default=None, description="Single night to book")
    dates: Optional[List[Date]] = Field(default=None, description="Several nights to book")
    price: Decimal = Field(..., max_digits=10, decimal_places=2, description="Price per night")
    note: Optional[str] = Field(default=None, max_length=1000)


class BookingUpdate(BaseSchema):
    """
    Body of ``PUT /bookings/{booking_id}``.

    Only fields present in the body are applied.
    """

    price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    note: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[str] = Field(default=None, description="active or cancel")
    room_id: Optional[UUID] = None
    date: Optional[Date] = None


class BookingResponse(BaseSchema):
    id: UUID
    user_id: UUID
    hotel_id: UUID
    room_id: UUID
    date: Date
    price: Decimal
    note: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    updated_at: datetime
    hotel: Optional[HotelSummary] = None
    room: Optional[RoomSummary] = None

    @field_serializer("price")
    def serialize_price(self, value: Decimal) -> float:
        return float(value)


class MultiBookingResponse(BaseSchema):
    """Result of a multi-date booking."""

    bookings: List[BookingResponse]
    count: int
    dates: List[Date]


class AvailabilityResponse(BaseSchema):
    """Availability of one room on one date."""

    room_id: UUID
    date: Date
    is_available: bool
    total_rooms: int
    current_bookings: int
    available_rooms: int
