from hotel_booking.api.v1.rooms.rooms import router

__all__ = ["router"]
