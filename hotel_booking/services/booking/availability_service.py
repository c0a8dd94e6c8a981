"""
Availability service.

Answers "how many rooms of this type are still free on this date" by
counting active bookings against the room's ``total_rooms``. Nothing here
writes; the booking service calls ``get_capacity(lock=True)`` when the answer is
about to be acted upon.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.config.settings import settings
from hotel_booking.core.exceptions import (
    CapacityUnknownError,
    RoomNotFoundError,
    ValidationError,
)
from hotel_booking.models.base import AvailabilityStatus
from hotel_booking.repositories.booking.booking_repository import BookingRepository
from hotel_booking.repositories.room.room_repository import RoomCapacity, RoomRepository
from hotel_booking.services.base.base_service import BaseService, track_performance


@dataclass
class AvailabilityResult:
    """Availability of one room type on one date."""

    room_id: UUID
    hotel_id: UUID
    date: date
    total_rooms: int
    current_bookings: int

    @property
    def available_rooms(self) -> int:
        return self.total_rooms - self.current_bookings

    @property
    def is_available(self) -> bool:
        return self.available_rooms > 0

    @property
    def status(self) -> AvailabilityStatus:
        return AvailabilityStatus.AVAILABLE if self.is_available else AvailabilityStatus.FULLY_BOOKED

    def as_conflict(self) -> dict:
        return {
            "date": self.date,
            "total_rooms": self.total_rooms,
            "current_bookings": self.current_bookings,
        }


@dataclass
class RangeAvailabilityResult:
    """Per-night availability over ``[check_in, check_out)``."""

    room_id: UUID
    hotel_id: UUID
    check_in: date
    check_out: date
    total_rooms: int
    nights: List[AvailabilityResult] = field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return all(night.is_available for night in self.nights)

    @property
    def available_rooms(self) -> int:
        return min((night.available_rooms for night in self.nights), default=0)


class AvailabilityService(BaseService[BookingRepository]):
    """Read-side capacity checks for rooms."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(BookingRepository(db_session), db_session)
        self.rooms = RoomRepository(db_session)

    async def get_capacity(self, room_id: UUID, lock: bool = False) -> RoomCapacity:
        """
        Load a room's inventory, failing when the room is missing or unconfigured.

        With ``lock`` the room row stays locked until the caller's transaction
        ends, which serialises capacity-consuming writes for that room.
        """
        if lock:
            capacity = await self.rooms.lock_room(room_id)
        else:
            capacity = await self.rooms.get_room_capacity(room_id)

        if capacity is None:
            raise RoomNotFoundError(room_id)
        if not capacity.is_configured:
            self._logger.warning(
                "Availability requested for room without inventory",
                extra=self._context(room_id=room_id),
            )
            raise CapacityUnknownError(room_id)
        return capacity

    async def evaluate(
        self,
        capacity: RoomCapacity,
        booking_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> AvailabilityResult:
        current = await self.repository.count_active(
            capacity.room_id, booking_date, exclude_booking_id
        )
        return AvailabilityResult(
            room_id=capacity.room_id,
            hotel_id=capacity.hotel_id,
            date=booking_date,
            total_rooms=capacity.total_rooms,
            current_bookings=current,
        )

    async def evaluate_dates(
        self,
        capacity: RoomCapacity,
        dates: Iterable[date],
    ) -> List[AvailabilityResult]:
        """Evaluate several dates with one grouped count, in the order given."""
        dates = list(dates)
        counts = await self.repository.count_active_by_dates(capacity.room_id, dates)
        return [
            AvailabilityResult(
                room_id=capacity.room_id,
                hotel_id=capacity.hotel_id,
                date=booking_date,
                total_rooms=capacity.total_rooms,
                current_bookings=counts[booking_date],
            )
            for booking_date in dates
        ]

    @track_performance("check_availability")
    async def check_availability(
        self,
        room_id: UUID,
        booking_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> AvailabilityResult:
        """
        Check whether ``room_id`` has a free room on ``booking_date``.

        Args:
            room_id: Room type to check
            booking_date: Night to check
            exclude_booking_id: Booking to leave out of the count (used by updates)

        Raises:
            RoomNotFoundError: Room does not exist
            CapacityUnknownError: Room has no ``total_rooms`` configured
        """
        capacity = await self.get_capacity(room_id)
        return await self.evaluate(capacity, booking_date, exclude_booking_id)

    @track_performance("check_availability_range")
    async def check_availability_range(
        self,
        room_id: UUID,
        check_in: date,
        check_out: date,
    ) -> RangeAvailabilityResult:
        """
        Availability of every night of a stay.

        Nights run from ``check_in`` up to but excluding ``check_out``; a
        same-day range checks the single night of ``check_in``.
        """
        if check_out < check_in:
            raise ValidationError(
                "check_out must not be before check_in",
                field_errors={"check_out": ["must be on or after check_in"]},
            )

        night_count = max((check_out - check_in).days, 1)
        if night_count > settings.BOOKING_MAX_DATES:
            raise ValidationError(
                f"Cannot check more than {settings.BOOKING_MAX_DATES} nights at once",
                field_errors={"check_out": [f"range exceeds {settings.BOOKING_MAX_DATES} nights"]},
            )

        capacity = await self.get_capacity(room_id)
        nights = await self.evaluate_dates(
            capacity,
            (check_in + timedelta(days=offset) for offset in range(night_count)),
        )
        return RangeAvailabilityResult(
            room_id=capacity.room_id,
            hotel_id=capacity.hotel_id,
            check_in=check_in,
            check_out=check_out,
            total_rooms=capacity.total_rooms,
            nights=nights,
        )

    async def get_current_availability(self, room_id: UUID) -> AvailabilityResult:
        """Availability of ``room_id`` for today."""
        return await self.check_availability(room_id, date.today())
