import uuid
from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.pool import StaticPool

from hotel_booking.db.init_db import init_db
from hotel_booking.db.session import build_engine, build_session_factory
from hotel_booking.models.hotel.hotel import Hotel
from hotel_booking.models.room.room import Room
from hotel_booking.repositories.booking.booking_repository import BookingRepository, NewBooking
from tests.utils import days_ahead


@pytest.mark.parametrize(
    "url, shared",
    [
        ("sqlite+aiosqlite:///:memory:", True),
        ("sqlite+aiosqlite://", True),
        ("sqlite+aiosqlite:///./bookings.db", False),
    ],
)
async def test_only_in_memory_sqlite_shares_one_connection(url, shared):
    engine = build_engine(url)
    try:
        assert isinstance(engine.sync_engine.pool, StaticPool) is shared
    finally:
        await engine.dispose()


async def test_file_sqlite_rollback_does_not_discard_other_sessions_writes(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    session_factory = build_session_factory(engine)
    try:
        await init_db(engine)
        async with session_factory() as setup:
            hotel = Hotel(name_th="โรงแรม", name_en="Hotel")
            setup.add(hotel)
            await setup.flush()
            room = Room(hotel_id=hotel.id, name_th="ห้อง", name_en="Room", total_rooms=2)
            setup.add(room)
            await setup.commit()
            room_id = room.id

        booking_date = days_ahead(5)
        async with session_factory() as writer, session_factory() as reader:
            booking_id = await BookingRepository(writer).insert_if_capacity(
                NewBooking(
                    user_id=uuid.uuid4(),
                    room_id=room_id,
                    date=booking_date,
                    price=Decimal("500.00"),
                )
            )
            assert booking_id is not None

            await reader.execute(select(Room.id))
            await reader.rollback()
            await writer.commit()

        async with session_factory() as check:
            assert await BookingRepository(check).count_active(room_id, booking_date) == 1
    finally:
        await engine.dispose()
