"""
Shared pytest fixtures: an in-memory database per test, seeded hotels and
rooms, and an HTTP client bound to the application.
"""

from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from hotel_booking.db.init_db import drop_db, init_db
from hotel_booking.db.session import build_engine, build_session_factory, get_db
from hotel_booking.main import create_app
from hotel_booking.models.hotel.hotel import Hotel
from hotel_booking.models.room.room import Room
from tests.utils import Catalogue

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    test_engine = build_engine(TEST_DATABASE_URL)
    await init_db(test_engine)
    yield test_engine
    await drop_db(test_engine)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def catalogue(db_session: AsyncSession) -> Catalogue:
    hotel = Hotel(name_th="โรงแรมทดสอบ", name_en="Test Hotel")
    other_hotel = Hotel(name_th="โรงแรมอื่น", name_en="Other Hotel")
    db_session.add_all([hotel, other_hotel])
    await db_session.flush()

    double_room = Room(hotel_id=hotel.id, name_th="ห้องคู่", name_en="Double", total_rooms=2)
    single_room = Room(hotel_id=hotel.id, name_th="ห้องเดี่ยว", name_en="Single", total_rooms=1)
    unconfigured_room = Room(hotel_id=hotel.id, name_th="ห้องใหม่", name_en="New", total_rooms=None)
    empty_room = Room(hotel_id=hotel.id, name_th="ห้องปิด", name_en="Closed", total_rooms=0)
    other_hotel_room = Room(
        hotel_id=other_hotel.id, name_th="ห้องสวีท", name_en="Suite", total_rooms=3
    )
    db_session.add_all([double_room, single_room, unconfigured_room, empty_room, other_hotel_room])
    await db_session.commit()

    return Catalogue(
        hotel_id=hotel.id,
        other_hotel_id=other_hotel.id,
        double_room_id=double_room.id,
        single_room_id=single_room.id,
        unconfigured_room_id=unconfigured_room.id,
        empty_room_id=empty_room.id,
        other_hotel_room_id=other_hotel_room.id,
    )


@pytest_asyncio.fixture
async def client(session_factory, catalogue: Catalogue) -> AsyncIterator[AsyncClient]:
    app = create_app()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
