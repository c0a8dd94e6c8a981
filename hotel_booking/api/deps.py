# hotel_booking/api/deps.py
"""
Shared FastAPI dependencies.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hotel_booking.api import deps

    @router.get("/bookings/{booking_id}")
    async def get_booking(service = Depends(deps.get_booking_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.services.booking.availability_service import AvailabilityService
from hotel_booking.services.booking.booking_service import BookingService

__all__ = ["get_db", "get_booking_service", "get_availability_service"]


# --- Services ------------------------------------------------------------------

def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(db)  # service = Depends(deps.get_booking_service)


def get_availability_service(db: AsyncSession = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)
