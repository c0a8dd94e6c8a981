"""
Booking endpoints.

Static sub-paths (``/user``, ``/date-range``, ``/room``) are declared before
``/{booking_id}`` so they are matched first.
"""

from datetime import date
from typing import Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hotel_booking.api.deps import get_availability_service, get_booking_service
from hotel_booking.config.settings import settings
from hotel_booking.core.exceptions import ValidationError
from hotel_booking.schemas.booking import (
    AvailabilityResponse,
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    MultiBookingResponse,
)
from hotel_booking.schemas.common import ErrorResponse, PaginatedResponse, PaginationMeta, SuccessResponse
from hotel_booking.services.booking.availability_service import AvailabilityService
from hotel_booking.services.booking.booking_service import BookingService

router = APIRouter(
    prefix="/bookings",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)


def _page(result) -> PaginatedResponse[BookingResponse]:
    return PaginatedResponse[BookingResponse](
        data=[BookingResponse.model_validate(item) for item in result.items],
        pagination=PaginationMeta.from_result(result),
    )


@router.get(
    "",
    response_model=PaginatedResponse[BookingResponse],
    summary="List bookings",
)
async def list_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    user_id: Optional[UUID] = Query(None),
    booking_date: Optional[date] = Query(None, alias="date"),
    booking_status: Optional[str] = Query(None, alias="status"),
    hotel_id: Optional[UUID] = Query(None),
    service: BookingService = Depends(get_booking_service),
) -> PaginatedResponse[BookingResponse]:
    result = await service.get_all_bookings(
        page=page,
        limit=limit,
        user_id=user_id,
        booking_date=booking_date,
        status=booking_status,
        hotel_id=hotel_id,
    )
    return _page(result)


@router.get(
    "/user/{user_id}",
    response_model=PaginatedResponse[BookingResponse],
    summary="List bookings of a user",
)
async def list_user_bookings(
    user_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: BookingService = Depends(get_booking_service),
) -> PaginatedResponse[BookingResponse]:
    result = await service.get_bookings_by_user_id(user_id, page=page, limit=limit)
    return _page(result)


@router.get(
    "/date-range",
    response_model=PaginatedResponse[BookingResponse],
    summary="List bookings within a date range",
)
async def list_bookings_by_date_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: BookingService = Depends(get_booking_service),
) -> PaginatedResponse[BookingResponse]:
    result = await service.get_bookings_by_date_range(start_date, end_date, page=page, limit=limit)
    return _page(result)


@router.get(
    "/room/{room_id}/availability",
    response_model=SuccessResponse[AvailabilityResponse],
    summary="Check room availability for a date",
)
async def check_room_availability(
    room_id: UUID,
    booking_date: date = Query(..., alias="date"),
    service: AvailabilityService = Depends(get_availability_service),
) -> SuccessResponse[AvailabilityResponse]:
    result = await service.check_availability(room_id, booking_date)
    message = "Room is available" if result.is_available else "Room is fully booked"
    return SuccessResponse[AvailabilityResponse].create(
        message, AvailabilityResponse.model_validate(result)
    )


@router.get(
    "/{booking_id}",
    response_model=SuccessResponse[BookingResponse],
    summary="Get booking",
)
async def get_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
) -> SuccessResponse[BookingResponse]:
    booking = await service.get_booking_by_id(booking_id)
    return SuccessResponse[BookingResponse].create(
        "Booking retrieved successfully", BookingResponse.model_validate(booking)
    )


@router.post(
    "",
    response_model=SuccessResponse[Union[BookingResponse, MultiBookingResponse]],
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking for one date or several dates",
)
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Create a booking.

    Send ``date`` for a single night or ``dates`` for several nights. A
    multi-date request either books every night or none of them.
    """
    if payload.date is not None and payload.dates is not None:
        raise ValidationError(
            "Provide either 'date' or 'dates', not both",
            field_errors={"dates": ["cannot be combined with date"]},
        )

    if payload.dates is not None:
        result = await service.create_multiple_bookings(
            user_id=payload.user_id,
            hotel_id=payload.hotel_id,
            room_id=payload.room_id,
            dates=payload.dates,
            price=payload.price,
            note=payload.note,
        )
        return SuccessResponse[MultiBookingResponse].create(
            f"Successfully created {result.count} bookings",
            MultiBookingResponse(
                bookings=[BookingResponse.model_validate(b) for b in result.bookings],
                count=result.count,
                dates=result.dates,
            ),
        )

    if payload.date is None:
        raise ValidationError(
            "Either 'date' or 'dates' is required",
            field_errors={"date": ["This field is required"]},
        )

    booking = await service.create_booking(
        user_id=payload.user_id,
        hotel_id=payload.hotel_id,
        room_id=payload.room_id,
        booking_date=payload.date,
        price=payload.price,
        note=payload.note,
    )
    return SuccessResponse[BookingResponse].create(
        "Booking created successfully", BookingResponse.model_validate(booking)
    )


@router.put(
    "/{booking_id}",
    response_model=SuccessResponse[BookingResponse],
    summary="Update booking",
)
async def update_booking(
    booking_id: UUID,
    payload: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
) -> SuccessResponse[BookingResponse]:
    booking = await service.update_booking(booking_id, payload.model_dump(exclude_unset=True))
    return SuccessResponse[BookingResponse].create(
        "Booking updated successfully", BookingResponse.model_validate(booking)
    )


@router.patch(
    "/{booking_id}/cancel",
    response_model=SuccessResponse[BookingResponse],
    summary="Cancel booking",
)
async def cancel_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
) -> SuccessResponse[BookingResponse]:
    booking = await service.cancel_booking(booking_id)
    return SuccessResponse[BookingResponse].create(
        "Booking cancelled successfully", BookingResponse.model_validate(booking)
    )


@router.delete(
    "/{booking_id}",
    response_model=SuccessResponse[BookingResponse],
    summary="Delete booking",
)
async def delete_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
) -> SuccessResponse[BookingResponse]:
    booking = await service.delete_booking(booking_id)
    return SuccessResponse[BookingResponse].create(
        "Booking deleted successfully", BookingResponse.model_validate(booking)
    )
