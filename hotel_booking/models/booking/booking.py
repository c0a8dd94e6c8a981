"""
Booking model.

One row reserves one room of a room type for one calendar date. Capacity is
not stored per row: a (room, date) pair is full when the number of ``active``
rows reaches the room's ``total_rooms``.
"""

from datetime import date as Date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_booking.models.base import BaseModel, BookingStatus, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from hotel_booking.models.hotel.hotel import Hotel
    from hotel_booking.models.room.room import Room

__all__ = ["Booking"]


class Booking(BaseModel, UUIDMixin, TimestampMixin):
    """
    Single-night booking of a room.

    Attributes:
        user_id: Guest who owns the booking (users live in the auth service)
        hotel_id: Hotel of the booked room
        room_id: Booked room type
        date: Night being booked
        price: Price charged for the night
        note: Free-text note from the guest
        status: ``active`` or ``cancel``
    """

    __tablename__ = "bookings"

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        comment="Guest making the booking",
    )
    hotel_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("hotels.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
    )
    date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=BookingStatus.ACTIVE,
    )

    hotel: Mapped["Hotel"] = relationship("Hotel", lazy="raise")
    room: Mapped["Room"] = relationship("Room", lazy="raise")

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_booking_price_positive"),
        CheckConstraint(
            "status IN ('active', 'cancel')",
            name="ck_booking_status",
        ),
        Index("ix_bookings_room_date_status", "room_id", "date", "status"),
    )
