"""
Room availability schemas for the room-level views.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List
from uuid import UUID

from pydantic import Field

from hotel_booking.models.base import AvailabilityStatus
from hotel_booking.schemas.common.base import BaseSchema

__all__ = [
    "NightAvailability",
    "RoomAvailabilityRange",
    "CurrentAvailability",
]


class NightAvailability(BaseSchema):
    date: Date
    total_rooms: int
    current_bookings: int
    available_rooms: int
    is_available: bool


class RoomAvailabilityRange(BaseSchema):
    """Availability of a room across a stay."""

    room_id: UUID
    hotel_id: UUID
    check_in: Date
    check_out: Date
    total_rooms: int
    is_available: bool = Field(..., description="Every night has a free room")
    available_rooms: int = Field(..., description="Fewest free rooms over the stay")
    nights: List[NightAvailability]


class CurrentAvailability(BaseSchema):
    """Availability of a room today."""

    room_id: UUID
    hotel_id: UUID
    date: Date
    total_rooms: int
    current_bookings: int
    available_rooms: int
    status: AvailabilityStatus
