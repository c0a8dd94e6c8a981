"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel booking service
"""
from fastapi import APIRouter

from hotel_booking.api.v1.bookings import router as bookings_router
from hotel_booking.api.v1.rooms import router as rooms_router

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(bookings_router, tags=["Booking Management"])
router.include_router(rooms_router, tags=["Room Availability"])
