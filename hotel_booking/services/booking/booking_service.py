"""
Booking service: creation, modification and queries of room bookings.

Every write that consumes capacity follows the same protocol inside one
transaction: lock the room row, count active bookings, then write through
the capacity-gated insert. Multi-date creation validates every date before
inserting any, and rolls back all rows if a late insert is refused.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.config.settings import settings
from hotel_booking.core.exceptions import (
    BookingNotFoundError,
    RoomFullyBookedError,
    RoomNotFoundError,
    ValidationError,
)
from hotel_booking.core.pagination import PaginatedResult
from hotel_booking.models.base import BookingStatus
from hotel_booking.models.booking.booking import Booking
from hotel_booking.repositories.booking.booking_repository import (
    BookingFilters,
    BookingRepository,
    NewBooking,
)
from hotel_booking.repositories.room.room_repository import RoomCapacity, RoomRepository
from hotel_booking.services.base.base_service import BaseService, track_performance
from hotel_booking.services.booking.availability_service import AvailabilityService

UPDATABLE_FIELDS = frozenset({"price", "note", "status", "room_id", "date"})


@dataclass
class MultiBookingResult:
    bookings: List[Booking] = field(default_factory=list)
    dates: List[date] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.bookings)


class BookingService(BaseService[BookingRepository]):
    """
    Service for room bookings.

    Owns the transaction boundary of every booking write; repositories only
    flush.
    """

    def __init__(self, db_session: AsyncSession):
        super().__init__(BookingRepository(db_session), db_session)
        self.rooms = RoomRepository(db_session)
        self.availability = AvailabilityService(db_session)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_booking_dates(self, dates: Sequence[date]) -> None:
        if not dates:
            raise ValidationError(
                "At least one date is required",
                field_errors={"dates": ["At least one date is required"]},
            )
        if len(dates) > settings.BOOKING_MAX_DATES:
            raise ValidationError(
                f"Cannot book more than {settings.BOOKING_MAX_DATES} dates at once",
                field_errors={"dates": [f"at most {settings.BOOKING_MAX_DATES} dates allowed"]},
            )
        for booking_date in dates:
            self._validate_not_past(booking_date, "dates")
        if len(set(dates)) != len(dates):
            raise ValidationError(
                "Duplicate dates are not allowed",
                field_errors={"dates": ["contains duplicate dates"]},
            )

    def _validate_booking_update(self, fields: Dict[str, Any]) -> None:
        if not fields:
            raise ValidationError("No fields to update")

        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                "Unknown fields in update",
                field_errors={name: ["field cannot be updated"] for name in sorted(unknown)},
            )
        if "price" in fields:
            self._validate_price(fields["price"])
        if "status" in fields and fields["status"] not in BookingStatus.values():
            raise ValidationError(
                "Invalid status",
                field_errors={"status": [f"must be one of: {', '.join(BookingStatus.values())}"]},
            )
        if "room_id" in fields and fields["room_id"] is None:
            raise ValidationError(
                "room_id cannot be empty",
                field_errors={"room_id": ["This field cannot be null"]},
            )
        if "date" in fields:
            self._validate_not_past(fields["date"], "date")

    @staticmethod
    def _validate_hotel(capacity: RoomCapacity, hotel_id: UUID) -> None:
        if capacity.hotel_id != hotel_id:
            raise ValidationError(
                "Room does not belong to the given hotel",
                field_errors={"hotel_id": [f"room {capacity.room_id} belongs to another hotel"]},
            )

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    async def _refused(self, capacity: RoomCapacity, dates: Sequence[date]) -> RoomFullyBookedError:
        """Build the error for dates the gated insert refused, with fresh counts."""
        results = await self.availability.evaluate_dates(capacity, dates)
        return RoomFullyBookedError(capacity.room_id, [r.as_conflict() for r in results])

    @track_performance("create_booking")
    async def create_booking(
        self,
        user_id: UUID,
        hotel_id: UUID,
        room_id: UUID,
        booking_date: date,
        price: Decimal,
        note: Optional[str] = None,
    ) -> Booking:
        """
        Book one night of a room.

        Raises:
            ValidationError: Non-positive price, past date or hotel mismatch
            RoomNotFoundError / CapacityUnknownError: Room cannot be booked
            RoomFullyBookedError: No free room left on that date
        """
        self._validate_price(price)
        self._validate_not_past(booking_date)

        async with self.transaction():
            capacity = await self.availability.get_capacity(room_id, lock=True)
            self._validate_hotel(capacity, hotel_id)

            result = await self.availability.evaluate(capacity, booking_date)
            if not result.is_available:
                self._logger.warning(
                    "Booking refused: room fully booked",
                    extra=self._context(room_id=room_id, booking_date=booking_date),
                )
                raise RoomFullyBookedError(room_id, [result.as_conflict()])

            booking_id = await self.repository.insert_if_capacity(
                NewBooking(
                    user_id=user_id,
                    room_id=room_id,
                    date=booking_date,
                    price=price,
                    note=note,
                )
            )
            if booking_id is None:
                self._logger.warning(
                    "Booking refused by capacity gate",
                    extra=self._context(room_id=room_id, booking_date=booking_date),
                )
                raise await self._refused(capacity, [booking_date])

        self._logger.info(
            "Booking created",
            extra=self._context(
                booking_id=booking_id,
                room_id=room_id,
                user_id=user_id,
                booking_date=booking_date,
            ),
        )
        return await self.get_booking_by_id(booking_id)

    @track_performance("create_multiple_bookings")
    async def create_multiple_bookings(
        self,
        user_id: UUID,
        hotel_id: UUID,
        room_id: UUID,
        dates: List[date],
        price: Decimal,
        note: Optional[str] = None,
    ) -> MultiBookingResult:
        """
        Book several nights of a room, all or nothing.

        Every date is checked before anything is written. If any date is full
        the error lists every conflicting date and no row is created.
        """
        self._validate_price(price)
        self._validate_booking_dates(dates)

        async with self.transaction():
            capacity = await self.availability.get_capacity(room_id, lock=True)
            self._validate_hotel(capacity, hotel_id)

            results = await self.availability.evaluate_dates(capacity, dates)
            conflicts = [result for result in results if not result.is_available]
            if conflicts:
                self._logger.warning(
                    f"Multi-date booking refused: {len(conflicts)} date(s) fully booked",
                    extra=self._context(
                        room_id=room_id,
                        conflicts=",".join(c.date.isoformat() for c in conflicts),
                    ),
                )
                raise RoomFullyBookedError(room_id, [c.as_conflict() for c in conflicts])

            booking_ids, refused = await self.repository.insert_many_if_capacity(
                [
                    NewBooking(
                        user_id=user_id,
                        room_id=room_id,
                        date=booking_date,
                        price=price,
                        note=note,
                    )
                    for booking_date in dates
                ]
            )
            if refused:
                self._logger.warning(
                    "Multi-date booking rolled back: capacity gate refused insert",
                    extra=self._context(
                        room_id=room_id,
                        refused=",".join(d.isoformat() for d in refused),
                    ),
                )
                raise await self._refused(capacity, refused)

        self._logger.info(
            f"Created {len(booking_ids)} bookings",
            extra=self._context(room_id=room_id, user_id=user_id),
        )
        bookings = await self.repository.find_many_by_ids(booking_ids)
        return MultiBookingResult(bookings=bookings, dates=sorted(dates))

    # -------------------------------------------------------------------------
    # Modification
    # -------------------------------------------------------------------------

    @track_performance("update_booking")
    async def update_booking(self, booking_id: UUID, fields: Dict[str, Any]) -> Booking:
        """
        Update price, note, status, room or date of a booking.

        Moving the booking to another room or date, or re-activating a
        cancelled booking, re-checks availability with the booking itself
        excluded from the count.
        """
        self._validate_booking_update(fields)
        changes = dict(fields)
        if "status" in changes:
            changes["status"] = BookingStatus(changes["status"])

        async with self.transaction():
            booking = await self.repository.find_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            target_room = changes.get("room_id", booking.room_id)
            target_date = changes.get("date", booking.date)
            target_status = changes.get("status", booking.status)

            moves = "room_id" in changes or "date" in changes
            reactivates = booking.status == BookingStatus.CANCEL and target_status == BookingStatus.ACTIVE
            needs_check = target_status == BookingStatus.ACTIVE and (moves or reactivates)

            if needs_check:
                capacity = await self.availability.get_capacity(target_room, lock=True)
                result = await self.availability.evaluate(
                    capacity, target_date, exclude_booking_id=booking.id
                )
                if not result.is_available:
                    self._logger.warning(
                        "Booking update refused: room fully booked",
                        extra=self._context(
                            booking_id=booking_id,
                            room_id=target_room,
                            booking_date=target_date,
                        ),
                    )
                    raise RoomFullyBookedError(target_room, [result.as_conflict()])
            elif "room_id" in changes:
                capacity = await self.rooms.get_room_capacity(target_room)
                if capacity is None:
                    raise RoomNotFoundError(target_room)

            if "room_id" in changes:
                changes["hotel_id"] = capacity.hotel_id

            await self.repository.update_fields(booking, changes)

        self._logger.info(
            "Booking updated",
            extra=self._context(booking_id=booking_id, fields=",".join(sorted(fields))),
        )
        return await self.get_booking_by_id(booking_id)

    @track_performance("cancel_booking")
    async def cancel_booking(self, booking_id: UUID) -> Booking:
        """Cancel a booking. Cancelling an already cancelled booking is a no-op."""
        async with self.transaction():
            booking = await self.repository.find_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            if booking.status == BookingStatus.CANCEL:
                self._logger.info(
                    "Booking already cancelled",
                    extra=self._context(booking_id=booking_id),
                )
                return booking

            await self.repository.update_fields(booking, {"status": BookingStatus.CANCEL})

        self._logger.info("Booking cancelled", extra=self._context(booking_id=booking_id))
        return await self.get_booking_by_id(booking_id)

    @track_performance("delete_booking")
    async def delete_booking(self, booking_id: UUID) -> Booking:
        """Permanently delete a booking and return the removed record."""
        async with self.transaction():
            booking = await self.repository.find_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            await self.repository.delete(booking)

        self._logger.info(
            "Booking deleted",
            extra=self._context(booking_id=booking_id, room_id=booking.room_id),
        )
        return booking

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_booking_by_id(self, booking_id: UUID) -> Booking:
        booking = await self.repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    async def get_all_bookings(
        self,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
        user_id: Optional[UUID] = None,
        booking_date: Optional[date] = None,
        status: Optional[str] = None,
        hotel_id: Optional[UUID] = None,
    ) -> PaginatedResult[Booking]:
        """List bookings, newest first, with optional equality filters."""
        self._validate_pagination(page, limit)
        if status is not None and status not in BookingStatus.values():
            raise ValidationError(
                "Invalid status",
                field_errors={"status": [f"must be one of: {', '.join(BookingStatus.values())}"]},
            )

        filters = BookingFilters(
            user_id=user_id,
            hotel_id=hotel_id,
            date=booking_date,
            status=BookingStatus(status) if status is not None else None,
        )
        items, total = await self.repository.find_filtered(filters, page, limit)
        return PaginatedResult(items=items, total=total, page=page, limit=limit)

    async def get_bookings_by_user_id(
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult[Booking]:
        self._validate_pagination(page, limit)
        items, total = await self.repository.find_filtered(
            BookingFilters(user_id=user_id), page, limit
        )
        return PaginatedResult(items=items, total=total, page=page, limit=limit)

    async def get_bookings_by_date_range(
        self,
        start_date: date,
        end_date: date,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult[Booking]:
        """Bookings whose night falls within ``[start_date, end_date]``, by date."""
        self._validate_pagination(page, limit)
        if start_date > end_date:
            raise ValidationError(
                "Start date must be before or equal to end date",
                field_errors={"end_date": ["must be on or after start_date"]},
            )
        items, total = await self.repository.find_by_date_range(start_date, end_date, page, limit)
        return PaginatedResult(items=items, total=total, page=page, limit=limit)
