from hotel_booking.schemas.common.base import BaseSchema
from hotel_booking.schemas.common.pagination import PaginatedResponse, PaginationMeta
from hotel_booking.schemas.common.response import ErrorResponse, SuccessResponse

__all__ = [
    "BaseSchema",
    "PaginatedResponse",
    "PaginationMeta",
    "ErrorResponse",
    "SuccessResponse",
]
