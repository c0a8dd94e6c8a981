"""Helpers shared by the test modules."""
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID


@dataclass
class Catalogue:
    """
    Ids of the seeded rows.

    Plain ids rather than ORM objects: a rolled back transaction expires
    loaded objects, and expired attributes cannot be lazy-loaded in async code.
    """

    hotel_id: UUID
    other_hotel_id: UUID
    double_room_id: UUID  # total_rooms = 2
    single_room_id: UUID  # total_rooms = 1
    unconfigured_room_id: UUID  # total_rooms = NULL
    empty_room_id: UUID  # total_rooms = 0
    other_hotel_room_id: UUID  # total_rooms = 3


def days_ahead(days: int) -> date:
    return date.today() + timedelta(days=days)
