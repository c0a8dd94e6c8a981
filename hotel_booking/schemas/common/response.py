"""
Standard API response wrappers for success and error bodies.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import Field

from hotel_booking.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")
    data: Union[T, None] = Field(default=None, description="Response data")

    @classmethod
    def create(
        cls,
        message: str,
        data: Union[T, None] = None,
    ):
        """Create success response."""
        return cls(success=True, message=message, data=data)


class ErrorResponse(BaseSchema):
    """Standard error response (documented on routes, rendered by the exception handlers)."""

    success: bool = Field(default=False, description="Success flag")
    message: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(default=None, description="Application error code")
    details: Dict[str, Any] = Field(default_factory=dict, description="Error context")
    errors: Optional[List[str]] = Field(
        default=None,
        description="Per-field validation messages",
    )
