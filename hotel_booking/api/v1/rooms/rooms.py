"""
Room availability endpoints.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from hotel_booking.api.deps import get_availability_service
from hotel_booking.schemas.common import ErrorResponse, SuccessResponse
from hotel_booking.schemas.room import CurrentAvailability, RoomAvailabilityRange
from hotel_booking.services.booking.availability_service import AvailabilityService

router = APIRouter(
    prefix="/rooms",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)


@router.get(
    "/{room_id}/availability",
    response_model=SuccessResponse[RoomAvailabilityRange],
    summary="Check room availability for a stay",
)
async def check_availability_range(
    room_id: UUID,
    check_in: date = Query(...),
    check_out: date = Query(...),
    service: AvailabilityService = Depends(get_availability_service),
) -> SuccessResponse[RoomAvailabilityRange]:
    result = await service.check_availability_range(room_id, check_in, check_out)
    message = (
        "Room is available for the whole stay"
        if result.is_available
        else "Room is fully booked on at least one night"
    )
    return SuccessResponse[RoomAvailabilityRange].create(
        message, RoomAvailabilityRange.model_validate(result)
    )


@router.get(
    "/{room_id}/availability/current",
    response_model=SuccessResponse[CurrentAvailability],
    summary="Room availability for today",
)
async def current_availability(
    room_id: UUID,
    service: AvailabilityService = Depends(get_availability_service),
) -> SuccessResponse[CurrentAvailability]:
    result = await service.get_current_availability(room_id)
    return SuccessResponse[CurrentAvailability].create(
        "Current availability retrieved successfully",
        CurrentAvailability.model_validate(result),
    )
