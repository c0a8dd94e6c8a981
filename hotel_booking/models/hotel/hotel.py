"""
Hotel model.

Hotels are owned by the catalogue side of the platform; the booking service
only reads them to label bookings.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_booking.models.base import BaseModel, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from hotel_booking.models.room.room import Room

__all__ = ["Hotel"]


class Hotel(BaseModel, UUIDMixin, TimestampMixin):
    """Hotel with bilingual display names."""

    __tablename__ = "hotels"

    name_th: Mapped[str] = mapped_column(String(255), nullable=False)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="hotel",
        lazy="raise",
    )
