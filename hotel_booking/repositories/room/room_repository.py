"""
Room repository.

Rooms are read-only from the booking side. The only write-adjacent operation
is taking a row lock on a room, which serialises concurrent bookings of the
same room type.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.models.room.room import Room
from hotel_booking.repositories.base.base_repository import BaseRepository


@dataclass(frozen=True)
class RoomCapacity:
    """Inventory snapshot of a room type."""

    room_id: UUID
    hotel_id: UUID
    total_rooms: Optional[int]
    name_th: str
    name_en: str

    @property
    def is_configured(self) -> bool:
        return self.total_rooms is not None and self.total_rooms > 0


class RoomRepository(BaseRepository[Room]):
    """Data access for rooms."""

    def __init__(self, db: AsyncSession):
        super().__init__(Room, db)

    async def get_room_capacity(
        self,
        room_id: UUID,
        for_update: bool = False,
    ) -> Optional[RoomCapacity]:
        """
        Fetch a room's inventory.

        With ``for_update`` the room row stays locked until the current
        transaction ends. Backends without row locks (SQLite) ignore it and
        rely on their single-writer model instead.
        """
        stmt = select(
            Room.id,
            Room.hotel_id,
            Room.total_rooms,
            Room.name_th,
            Room.name_en,
        ).where(Room.id == room_id)
        if for_update:
            stmt = stmt.with_for_update()

        try:
            row = (await self.db.execute(stmt)).one_or_none()
        except SQLAlchemyError as e:
            self._raise_database_error("get_room_capacity", e, room_id=room_id)

        if row is None:
            return None
        return RoomCapacity(
            room_id=row.id,
            hotel_id=row.hotel_id,
            total_rooms=row.total_rooms,
            name_th=row.name_th,
            name_en=row.name_en,
        )

    async def lock_room(self, room_id: UUID) -> Optional[RoomCapacity]:
        """Lock the room row for the rest of the transaction and return its inventory."""
        return await self.get_room_capacity(room_id, for_update=True)
