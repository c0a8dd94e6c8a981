import uuid
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.core.exceptions import (
    BookingNotFoundError,
    CapacityUnknownError,
    RoomFullyBookedError,
    RoomNotFoundError,
    ValidationError,
)
from hotel_booking.models.base import BookingStatus
from hotel_booking.repositories.booking.booking_repository import BookingRepository, NewBooking
from hotel_booking.services.booking.availability_service import AvailabilityService
from hotel_booking.services.booking.booking_service import BookingService
from tests.utils import Catalogue, days_ahead

USER_ID = uuid.uuid4()
OTHER_USER_ID = uuid.uuid4()


@pytest.fixture
def service(db_session: AsyncSession) -> BookingService:
    return BookingService(db_session)


@pytest.fixture
def availability(db_session: AsyncSession) -> AvailabilityService:
    return AvailabilityService(db_session)


async def _book(service: BookingService, catalogue: Catalogue, room_id=None, days: int = 5, **kwargs):
    values = {
        "user_id": USER_ID,
        "hotel_id": catalogue.hotel_id,
        "room_id": room_id or catalogue.double_room_id,
        "booking_date": days_ahead(days),
        "price": Decimal("1000.00"),
    }
    values.update(kwargs)
    return await service.create_booking(**values)


# ==================== create_booking ====================


async def test_create_then_fetch_round_trip(service: BookingService, catalogue: Catalogue):
    """A created booking reads back active with the submitted values."""
    created = await _book(service, catalogue, price=Decimal("1500.50"), note="late arrival")

    fetched = await service.get_booking_by_id(created.id)

    assert fetched.status == BookingStatus.ACTIVE
    assert fetched.price == Decimal("1500.50")
    assert fetched.date == days_ahead(5)
    assert fetched.note == "late arrival"
    assert fetched.user_id == USER_ID
    assert fetched.hotel_id == catalogue.hotel_id
    assert fetched.hotel.name_en == "Test Hotel"
    assert fetched.room.total_rooms == 2


async def test_third_booking_of_a_two_room_type_is_refused(service: BookingService, catalogue: Catalogue):
    await _book(service, catalogue)
    await _book(service, catalogue)

    with pytest.raises(RoomFullyBookedError) as exc_info:
        await _book(service, catalogue)

    assert exc_info.value.conflicts == [
        {"date": days_ahead(5).isoformat(), "total_rooms": 2, "current_bookings": 2}
    ]
    assert "Total rooms: 2, Current bookings: 2" in exc_info.value.message


async def test_active_count_never_exceeds_total_rooms(
    service: BookingService,
    availability: AvailabilityService,
    catalogue: Catalogue,
):
    accepted = 0
    for _ in range(5):
        try:
            await _book(service, catalogue, days=8)
            accepted += 1
        except RoomFullyBookedError:
            pass

    result = await availability.check_availability(catalogue.double_room_id, days_ahead(8))
    assert accepted == 2
    assert result.current_bookings == 2


@pytest.mark.parametrize("price", [Decimal("0"), Decimal("-10.00")])
async def test_create_rejects_non_positive_price(service: BookingService, catalogue: Catalogue, price):
    with pytest.raises(ValidationError, match="Price must be greater than 0"):
        await _book(service, catalogue, price=price)


async def test_create_rejects_past_date(service: BookingService, catalogue: Catalogue):
    with pytest.raises(ValidationError, match="past"):
        await _book(service, catalogue, days=-1)


async def test_create_rejects_room_of_another_hotel(service: BookingService, catalogue: Catalogue):
    with pytest.raises(ValidationError, match="does not belong"):
        await _book(service, catalogue, room_id=catalogue.other_hotel_room_id)


async def test_create_for_unknown_room(service: BookingService, catalogue: Catalogue):
    with pytest.raises(RoomNotFoundError):
        await _book(service, catalogue, room_id=uuid.uuid4())


async def test_create_for_room_without_inventory(service: BookingService, catalogue: Catalogue):
    with pytest.raises(CapacityUnknownError):
        await _book(service, catalogue, room_id=catalogue.unconfigured_room_id)


async def test_capacity_gate_refuses_when_slot_was_taken_after_the_check(
    service: BookingService,
    availability: AvailabilityService,
    catalogue: Catalogue,
    monkeypatch,
):
    """A stale availability read cannot push a room over capacity."""
    await _book(service, catalogue, room_id=catalogue.single_room_id)

    original = service.availability.evaluate

    async def stale_evaluate(capacity, booking_date, exclude_booking_id=None):
        result = await original(capacity, booking_date, exclude_booking_id)
        result.current_bookings = 0
        return result

    monkeypatch.setattr(service.availability, "evaluate", stale_evaluate)

    with pytest.raises(RoomFullyBookedError) as exc_info:
        await _book(service, catalogue, room_id=catalogue.single_room_id)

    assert exc_info.value.conflicts[0]["current_bookings"] == 1
    result = await availability.check_availability(catalogue.single_room_id, days_ahead(5))
    assert result.current_bookings == 1


async def test_repository_gate_returns_none_for_full_room(
    db_session: AsyncSession,
    service: BookingService,
    catalogue: Catalogue,
):
    await _book(service, catalogue, room_id=catalogue.single_room_id)
    repository = BookingRepository(db_session)
    record = NewBooking(
        user_id=USER_ID,
        room_id=catalogue.single_room_id,
        date=days_ahead(5),
        price=Decimal("100.00"),
    )

    assert await repository.insert_if_capacity(record) is None
    inserted, refused = await repository.insert_many_if_capacity([record])
    assert inserted == []
    assert refused == [days_ahead(5)]
    await db_session.rollback()


# ==================== create_multiple_bookings ====================


async def test_multiple_bookings_create_one_row_per_date(service: BookingService, catalogue: Catalogue):
    dates = [days_ahead(12), days_ahead(10), days_ahead(11)]

    result = await service.create_multiple_bookings(
        user_id=USER_ID,
        hotel_id=catalogue.hotel_id,
        room_id=catalogue.double_room_id,
        dates=dates,
        price=Decimal("500.00"),
        note="family trip",
    )

    assert result.count == 3
    assert result.dates == sorted(dates)
    assert [booking.date for booking in result.bookings] == sorted(dates)
    assert all(booking.status == BookingStatus.ACTIVE for booking in result.bookings)
    assert all(booking.note == "family trip" for booking in result.bookings)


async def test_multiple_bookings_are_all_or_nothing(
    service: BookingService,
    availability: AvailabilityService,
    catalogue: Catalogue,
):
    await _book(service, catalogue, room_id=catalogue.single_room_id, days=3)

    with pytest.raises(RoomFullyBookedError) as exc_info:
        await service.create_multiple_bookings(
            user_id=OTHER_USER_ID,
            hotel_id=catalogue.hotel_id,
            room_id=catalogue.single_room_id,
            dates=[days_ahead(2), days_ahead(3)],
            price=Decimal("500.00"),
        )

    assert [c["date"] for c in exc_info.value.conflicts] == [days_ahead(3).isoformat()]
    free_night = await availability.check_availability(catalogue.single_room_id, days_ahead(2))
    assert free_night.current_bookings == 0


async def test_multiple_bookings_report_every_conflict(service: BookingService, catalogue: Catalogue):
    await _book(service, catalogue, room_id=catalogue.single_room_id, days=3)
    await _book(service, catalogue, room_id=catalogue.single_room_id, days=5)

    with pytest.raises(RoomFullyBookedError, match="these dates") as exc_info:
        await service.create_multiple_bookings(
            user_id=USER_ID,
            hotel_id=catalogue.hotel_id,
            room_id=catalogue.single_room_id,
            dates=[days_ahead(3), days_ahead(4), days_ahead(5)],
            price=Decimal("500.00"),
        )

    assert [c["date"] for c in exc_info.value.conflicts] == [
        days_ahead(3).isoformat(),
        days_ahead(5).isoformat(),
    ]


async def test_multiple_bookings_roll_back_when_gate_refuses_late(
    service: BookingService,
    availability: AvailabilityService,
    catalogue: Catalogue,
    monkeypatch,
):
    """If a slot disappears between validation and insert, no row survives."""
    await _book(service, catalogue, room_id=catalogue.single_room_id, days=3)

    original = service.availability.evaluate_dates
    calls = []

    async def stale_first_read(capacity, dates):
        results = await original(capacity, dates)
        if not calls:
            for result in results:
                result.current_bookings = 0
        calls.append(dates)
        return results

    monkeypatch.setattr(service.availability, "evaluate_dates", stale_first_read)

    with pytest.raises(RoomFullyBookedError) as exc_info:
        await service.create_multiple_bookings(
            user_id=OTHER_USER_ID,
            hotel_id=catalogue.hotel_id,
            room_id=catalogue.single_room_id,
            dates=[days_ahead(2), days_ahead(3)],
            price=Decimal("500.00"),
        )

    assert exc_info.value.conflicts == [
        {"date": days_ahead(3).isoformat(), "total_rooms": 1, "current_bookings": 1}
    ]
    free_night = await availability.check_availability(catalogue.single_room_id, days_ahead(2))
    assert free_night.current_bookings == 0


@pytest.mark.parametrize(
    "dates, message",
    [
        ([], "At least one date"),
        ([days_ahead(1 + i) for i in range(31)], "more than 30 dates"),
        ([days_ahead(2), days_ahead(2)], "Duplicate dates"),
        ([days_ahead(2), days_ahead(-2)], "past"),
    ],
)
async def test_multiple_bookings_validation(service: BookingService, catalogue: Catalogue, dates, message):
    with pytest.raises(ValidationError, match=message):
        await service.create_multiple_bookings(
            user_id=USER_ID,
            hotel_id=catalogue.hotel_id,
            room_id=catalogue.double_room_id,
            dates=dates,
            price=Decimal("500.00"),
        )


# ==================== update_booking ====================


async def test_update_to_own_date_does_not_count_itself(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue, room_id=catalogue.single_room_id, days=4)

    updated = await service.update_booking(booking.id, {"date": days_ahead(4)})

    assert updated.date == days_ahead(4)
    assert updated.status == BookingStatus.ACTIVE


async def test_update_to_full_date_is_refused(service: BookingService, catalogue: Catalogue):
    await _book(service, catalogue, room_id=catalogue.single_room_id, days=4)
    booking = await _book(service, catalogue, room_id=catalogue.single_room_id, days=6)
    booking_id = booking.id

    with pytest.raises(RoomFullyBookedError):
        await service.update_booking(booking_id, {"date": days_ahead(4)})

    unchanged = await service.get_booking_by_id(booking_id)
    assert unchanged.date == days_ahead(6)


async def test_update_room_moves_booking_to_the_room_hotel(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue)

    updated = await service.update_booking(booking.id, {"room_id": catalogue.other_hotel_room_id})

    assert updated.room_id == catalogue.other_hotel_room_id
    assert updated.hotel_id == catalogue.other_hotel_id
    assert updated.room.name_en == "Suite"


async def test_update_price_and_note(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue)

    updated = await service.update_booking(booking.id, {"price": Decimal("1200.00"), "note": "sea view"})

    assert updated.price == Decimal("1200.00")
    assert updated.note == "sea view"


async def test_reactivation_is_checked_against_capacity(service: BookingService, catalogue: Catalogue):
    first = await _book(service, catalogue, room_id=catalogue.single_room_id, days=9)
    first_id = first.id
    await service.cancel_booking(first_id)
    await _book(service, catalogue, room_id=catalogue.single_room_id, days=9)

    with pytest.raises(RoomFullyBookedError):
        await service.update_booking(first_id, {"status": "active"})

    assert (await service.get_booking_by_id(first_id)).status == BookingStatus.CANCEL


async def test_reactivation_succeeds_when_a_room_is_free(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue, room_id=catalogue.single_room_id, days=9)
    await service.cancel_booking(booking.id)

    updated = await service.update_booking(booking.id, {"status": "active"})

    assert updated.status == BookingStatus.ACTIVE


@pytest.mark.parametrize(
    "fields, message",
    [
        ({}, "No fields to update"),
        ({"price": Decimal("0")}, "Price must be greater than 0"),
        ({"status": "confirmed"}, "Invalid status"),
        ({"date": days_ahead(-3)}, "past"),
        ({"room_id": None}, "room_id cannot be empty"),
    ],
)
async def test_update_validation(service: BookingService, catalogue: Catalogue, fields, message):
    booking = await _book(service, catalogue)

    with pytest.raises(ValidationError, match=message):
        await service.update_booking(booking.id, fields)


async def test_update_unknown_booking(service: BookingService, catalogue: Catalogue):
    with pytest.raises(BookingNotFoundError):
        await service.update_booking(uuid.uuid4(), {"note": "x"})


async def test_update_to_unknown_room(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue)

    with pytest.raises(RoomNotFoundError):
        await service.update_booking(booking.id, {"room_id": uuid.uuid4()})


# ==================== cancel / delete ====================


async def test_cancel_frees_a_room(
    service: BookingService,
    availability: AvailabilityService,
    catalogue: Catalogue,
):
    booking = await _book(service, catalogue)
    await _book(service, catalogue)
    before = await availability.check_availability(catalogue.double_room_id, days_ahead(5))

    cancelled = await service.cancel_booking(booking.id)
    after = await availability.check_availability(catalogue.double_room_id, days_ahead(5))

    assert cancelled.status == BookingStatus.CANCEL
    assert after.current_bookings == before.current_bookings - 1


async def test_cancel_is_idempotent(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue)
    first = await service.cancel_booking(booking.id)
    updated_at = first.updated_at

    second = await service.cancel_booking(booking.id)

    assert second.status == BookingStatus.CANCEL
    assert second.updated_at == updated_at


async def test_cancel_unknown_booking(service: BookingService, catalogue: Catalogue):
    with pytest.raises(BookingNotFoundError):
        await service.cancel_booking(uuid.uuid4())


async def test_delete_returns_removed_record(service: BookingService, catalogue: Catalogue):
    booking = await _book(service, catalogue, note="to remove")
    booking_id = booking.id

    deleted = await service.delete_booking(booking_id)

    assert deleted.id == booking_id
    assert deleted.note == "to remove"
    with pytest.raises(BookingNotFoundError):
        await service.get_booking_by_id(booking_id)


async def test_delete_unknown_booking(service: BookingService, catalogue: Catalogue):
    with pytest.raises(BookingNotFoundError):
        await service.delete_booking(uuid.uuid4())


# ==================== queries ====================


async def test_get_all_bookings_filters_and_paginates(service: BookingService, catalogue: Catalogue):
    first = await _book(service, catalogue, days=2)
    await _book(service, catalogue, days=3)
    latest = await _book(service, catalogue, days=4)
    await _book(service, catalogue, days=4, user_id=OTHER_USER_ID)
    await service.cancel_booking(first.id)

    page = await service.get_all_bookings(page=1, limit=2, user_id=USER_ID)

    assert page.total == 3
    assert page.total_pages == 2
    assert page.has_next is True
    assert page.has_prev is False
    assert page.items[0].id == latest.id

    cancelled = await service.get_all_bookings(status="cancel")
    assert [booking.id for booking in cancelled.items] == [first.id]

    on_date = await service.get_all_bookings(booking_date=days_ahead(4))
    assert on_date.total == 2

    other_hotel = await service.get_all_bookings(hotel_id=catalogue.other_hotel_id)
    assert other_hotel.total == 0


async def test_get_all_bookings_rejects_unknown_status(service: BookingService, catalogue: Catalogue):
    with pytest.raises(ValidationError, match="Invalid status"):
        await service.get_all_bookings(status="confirmed")


async def test_get_bookings_by_user_id(service: BookingService, catalogue: Catalogue):
    await _book(service, catalogue, days=2)
    await _book(service, catalogue, days=3, user_id=OTHER_USER_ID)

    result = await service.get_bookings_by_user_id(OTHER_USER_ID)

    assert result.total == 1
    assert result.items[0].user_id == OTHER_USER_ID


async def test_get_bookings_by_date_range_is_inclusive_and_ordered(
    service: BookingService,
    catalogue: Catalogue,
):
    for days in (7, 3, 5, 9):
        await _book(service, catalogue, days=days)

    result = await service.get_bookings_by_date_range(days_ahead(3), days_ahead(7))

    assert [booking.date for booking in result.items] == [days_ahead(3), days_ahead(5), days_ahead(7)]
    assert result.total == 3


async def test_get_bookings_by_date_range_rejects_inverted_range(
    service: BookingService,
    catalogue: Catalogue,
):
    with pytest.raises(ValidationError):
        await service.get_bookings_by_date_range(days_ahead(7), days_ahead(3))
