"""
Pagination schemas for page-based list responses.
"""

from __future__ import annotations

from typing import Generic, List, TypeVar

from pydantic import Field

from hotel_booking.core.pagination import PaginatedResult
from hotel_booking.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "PaginationMeta",
    "PaginatedResponse",
]


class PaginationMeta(BaseSchema):
    """Pagination block returned next to every list."""

    current_page: int = Field(..., ge=1, alias="currentPage")
    total_pages: int = Field(..., ge=0, alias="totalPages")
    total_items: int = Field(..., ge=0, alias="totalItems")
    items_per_page: int = Field(..., ge=1, alias="itemsPerPage")
    has_next_page: bool = Field(..., alias="hasNextPage")
    has_prev_page: bool = Field(..., alias="hasPrevPage")

    @classmethod
    def from_result(cls, result: PaginatedResult) -> "PaginationMeta":
        return cls(
            current_page=result.page,
            total_pages=result.total_pages,
            total_items=result.total,
            items_per_page=result.limit,
            has_next_page=result.has_next,
            has_prev_page=result.has_prev,
        )


class PaginatedResponse(BaseSchema, Generic[T]):
    """List response with pagination metadata."""

    success: bool = Field(default=True, description="Success flag")
    data: List[T] = Field(default_factory=list, description="Items on this page")
    pagination: PaginationMeta
