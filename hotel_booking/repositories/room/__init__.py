from hotel_booking.repositories.room.room_repository import RoomCapacity, RoomRepository

__all__ = ["RoomCapacity", "RoomRepository"]
