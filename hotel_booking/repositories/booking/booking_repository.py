"""
Booking repository.

Holds every query the booking engine needs, including the capacity-gated
insert: a single ``INSERT ... SELECT`` that only produces a row while the
room still has fewer active bookings on that date than ``total_rooms``.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID, uuid4

from sqlalchemy import func, insert, literal, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.config.logging import get_logger
from hotel_booking.models.base import BookingStatus, utc_now
from hotel_booking.models.booking.booking import Booking
from hotel_booking.models.room.room import Room
from hotel_booking.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)

_INSERT_COLUMNS = (
    "id",
    "user_id",
    "hotel_id",
    "room_id",
    "date",
    "price",
    "note",
    "status",
    "created_at",
    "updated_at",
)


@dataclass
class NewBooking:
    """Values for one booking row about to be inserted."""

    user_id: UUID
    room_id: UUID
    date: date
    price: Decimal
    note: Optional[str] = None


@dataclass
class BookingFilters:
    """Optional equality filters for booking listings."""

    user_id: Optional[UUID] = None
    hotel_id: Optional[UUID] = None
    room_id: Optional[UUID] = None
    date: Optional[date] = None
    status: Optional[BookingStatus] = None

    def conditions(self) -> List[Any]:
        conditions = []
        if self.user_id is not None:
            conditions.append(Booking.user_id == self.user_id)
        if self.hotel_id is not None:
            conditions.append(Booking.hotel_id == self.hotel_id)
        if self.room_id is not None:
            conditions.append(Booking.room_id == self.room_id)
        if self.date is not None:
            conditions.append(Booking.date == self.date)
        if self.status is not None:
            conditions.append(Booking.status == self.status)
        return conditions


class BookingRepository(BaseRepository[Booking]):
    """Data access for bookings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Booking, db)

    # ==================== Capacity ====================

    @staticmethod
    def _active_count_query(
        room_id: UUID,
        booking_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ):
        stmt = select(func.count(Booking.id)).where(
            Booking.room_id == room_id,
            Booking.date == booking_date,
            Booking.status == BookingStatus.ACTIVE,
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(Booking.id != exclude_booking_id)
        return stmt

    async def count_active(
        self,
        room_id: UUID,
        booking_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> int:
        """Count active bookings of a room on one date."""
        try:
            result = await self.db.execute(
                self._active_count_query(room_id, booking_date, exclude_booking_id)
            )
            return result.scalar_one()
        except SQLAlchemyError as e:
            self._raise_database_error("count_active", e, room_id=room_id, date=booking_date)

    async def count_active_by_dates(
        self,
        room_id: UUID,
        dates: Iterable[date],
    ) -> Dict[date, int]:
        """Active booking counts for several dates of a room; missing dates count 0."""
        dates = list(dates)
        try:
            result = await self.db.execute(
                select(Booking.date, func.count(Booking.id))
                .where(
                    Booking.room_id == room_id,
                    Booking.date.in_(dates),
                    Booking.status == BookingStatus.ACTIVE,
                )
                .group_by(Booking.date)
            )
        except SQLAlchemyError as e:
            self._raise_database_error("count_active_by_dates", e, room_id=room_id)

        counts = {booking_date: 0 for booking_date in dates}
        counts.update({row[0]: row[1] for row in result.all()})
        return counts

    async def insert_if_capacity(self, record: NewBooking) -> Optional[UUID]:
        """
        Insert one active booking if the room still has a free slot that date.

        The row is selected from ``rooms`` under the condition
        ``total_rooms > active_count``, so the check and the write are one
        statement. Returns the new booking id, or None when the slot was taken.
        """
        table = Booking.__table__
        booking_id = uuid4()
        now = utc_now()

        def bind(column: str, value: Any):
            return literal(value, type_=table.c[column].type)

        active_count = (
            self._active_count_query(record.room_id, record.date)
            .correlate(None)
            .scalar_subquery()
        )
        gate = select(
            bind("id", booking_id),
            bind("user_id", record.user_id),
            Room.hotel_id,
            Room.id,
            bind("date", record.date),
            bind("price", record.price),
            bind("note", record.note),
            bind("status", BookingStatus.ACTIVE),
            bind("created_at", now),
            bind("updated_at", now),
        ).where(
            Room.id == record.room_id,
            Room.total_rooms.is_not(None),
            Room.total_rooms > active_count,
        )

        try:
            result = await self.db.execute(
                insert(table).from_select(list(_INSERT_COLUMNS), gate)
            )
        except SQLAlchemyError as e:
            self._raise_database_error(
                "insert_if_capacity", e, room_id=record.room_id, date=record.date
            )

        if result.rowcount != 1:
            logger.debug(
                "Capacity gate refused insert",
                extra={"room_id": str(record.room_id), "date": record.date.isoformat()},
            )
            return None
        return booking_id

    async def insert_many_if_capacity(
        self,
        records: Sequence[NewBooking],
    ) -> Tuple[List[UUID], List[date]]:
        """
        Run the gated insert for every record.

        Returns the inserted ids and the dates whose insert was refused. The
        caller owns the transaction and must roll back when any date was refused.
        """
        inserted: List[UUID] = []
        refused: List[date] = []
        for record in records:
            booking_id = await self.insert_if_capacity(record)
            if booking_id is None:
                refused.append(record.date)
            else:
                inserted.append(booking_id)
        return inserted, refused

    # ==================== Reads ====================

    async def find_by_id(self, booking_id: UUID) -> Optional[Booking]:
        """Fetch a booking with its hotel and room loaded."""
        try:
            result = await self.db.execute(
                select(Booking)
                .options(selectinload(Booking.hotel), selectinload(Booking.room))
                .where(Booking.id == booking_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self._raise_database_error("find_by_id", e, booking_id=booking_id)

    async def find_many_by_ids(self, booking_ids: Sequence[UUID]) -> List[Booking]:
        """Fetch bookings by id, ordered by date."""
        if not booking_ids:
            return []
        try:
            result = await self.db.execute(
                select(Booking)
                .options(selectinload(Booking.hotel), selectinload(Booking.room))
                .where(Booking.id.in_(list(booking_ids)))
                .order_by(Booking.date.asc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self._raise_database_error("find_many_by_ids", e)

    async def find_filtered(
        self,
        filters: BookingFilters,
        page: int,
        limit: int,
    ) -> Tuple[List[Booking], int]:
        """Page of bookings matching ``filters``, newest first, plus the total count."""
        conditions = filters.conditions()
        return await self._paginate(
            conditions,
            (Booking.created_at.desc(), Booking.id.desc()),
            page,
            limit,
            "find_filtered",
        )

    async def find_by_date_range(
        self,
        start_date: date,
        end_date: date,
        page: int,
        limit: int,
    ) -> Tuple[List[Booking], int]:
        """Page of bookings whose date lies in ``[start_date, end_date]``, by date."""
        conditions = [Booking.date >= start_date, Booking.date <= end_date]
        return await self._paginate(
            conditions,
            (Booking.date.asc(), Booking.created_at.asc(), Booking.id.asc()),
            page,
            limit,
            "find_by_date_range",
        )

    async def _paginate(
        self,
        conditions: List[Any],
        order_by: Tuple[Any, ...],
        page: int,
        limit: int,
        operation: str,
    ) -> Tuple[List[Booking], int]:
        try:
            total = (
                await self.db.execute(
                    select(func.count(Booking.id)).where(*conditions)
                )
            ).scalar_one()

            result = await self.db.execute(
                select(Booking)
                .options(selectinload(Booking.hotel), selectinload(Booking.room))
                .where(*conditions)
                .order_by(*order_by)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            return list(result.scalars().all()), total
        except SQLAlchemyError as e:
            self._raise_database_error(operation, e)

    # ==================== Writes ====================

    async def update_fields(self, booking: Booking, fields: Dict[str, Any]) -> Booking:
        """Apply ``fields`` to a loaded booking and flush."""
        for name, value in fields.items():
            setattr(booking, name, value)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            self._raise_database_error("update_fields", e, booking_id=booking.id)
        return booking

    async def delete(self, booking: Booking) -> None:
        try:
            await self.db.delete(booking)
            await self.db.flush()
        except SQLAlchemyError as e:
            self._raise_database_error("delete", e, booking_id=booking.id)
