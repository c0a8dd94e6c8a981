# hotel_booking/models/room/room.py
"""
Room model.

A room row describes a room type of a hotel; ``total_rooms`` is how many
physical rooms of that type can be occupied on any single date.
"""

from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_booking.models.base import BaseModel, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from hotel_booking.models.hotel.hotel import Hotel

__all__ = ["Room"]


class Room(BaseModel, UUIDMixin, TimestampMixin):
    """
    Room type within a hotel.

    ``total_rooms`` may be NULL or 0 for rooms whose inventory has not been
    configured yet; availability cannot be computed for those.
    """

    __tablename__ = "rooms"

    hotel_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name_th: Mapped[str] = mapped_column(String(255), nullable=False)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)

    total_rooms: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Maximum concurrent active bookings per date",
    )

    hotel: Mapped["Hotel"] = relationship(
        "Hotel",
        back_populates="rooms",
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint(
            "total_rooms IS NULL OR total_rooms >= 0",
            name="ck_room_total_rooms_non_negative",
        ),
    )
