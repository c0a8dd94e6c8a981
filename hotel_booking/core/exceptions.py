"""
Custom Exceptions for the Hotel Booking Application

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Booking errors
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULLY_BOOKED = "ROOM_FULLY_BOOKED"
    CAPACITY_UNKNOWN = "CAPACITY_UNKNOWN"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API error envelope"""
        return {
            "success": False,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400
    ):
        self.field_errors = field_errors or {}
        details = {"field_errors": self.field_errors} if self.field_errors else {}
        super().__init__(message, error_code, details, status_code)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.field_errors:
            payload["errors"] = [
                f"{field}: {error}"
                for field, errors in self.field_errors.items()
                for error in errors
            ]
        return payload


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, error_code, details, 404)


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when a room is not found"""

    def __init__(self, room_id: Optional[Any] = None, message: Optional[str] = None):
        super().__init__(
            "Room",
            str(room_id) if room_id is not None else None,
            message,
            ErrorCode.ROOM_NOT_FOUND,
        )


class BookingNotFoundError(ResourceNotFoundError):
    """Exception raised when a booking is not found"""

    def __init__(self, booking_id: Optional[Any] = None, message: Optional[str] = None):
        super().__init__(
            "Booking",
            str(booking_id) if booking_id is not None else None,
            message,
            ErrorCode.BOOKING_NOT_FOUND,
        )


# ========================================
# Booking Exceptions
# ========================================

class BookingError(BaseAppException):
    """Base class for booking-related exceptions"""

    def __init__(
        self,
        message: str = "Booking operation failed",
        error_code: ErrorCode = ErrorCode.ROOM_FULLY_BOOKED,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 409
    ):
        super().__init__(message, error_code, details, status_code)


class CapacityUnknownError(BookingError):
    """Raised when a room exists but has no configured inventory"""

    def __init__(self, room_id: Any):
        super().__init__(
            "Room total count not set - cannot check availability",
            ErrorCode.CAPACITY_UNKNOWN,
            {"room_id": str(room_id)},
        )


class RoomFullyBookedError(BookingError):
    """
    Raised when one or more requested dates have no free slot left.

    ``conflicts`` holds one entry per refused date so the caller can explain
    every conflict without a follow-up query.
    """

    def __init__(self, room_id: Any, conflicts: List[Dict[str, Any]]):
        self.room_id = room_id
        self.conflicts = [
            {
                "date": _iso(item["date"]),
                "total_rooms": item["total_rooms"],
                "current_bookings": item["current_bookings"],
            }
            for item in conflicts
        ]

        if len(self.conflicts) == 1:
            item = self.conflicts[0]
            message = (
                f"Room is fully booked for {item['date']}. "
                f"Total rooms: {item['total_rooms']}, Current bookings: {item['current_bookings']}"
            )
        else:
            summary = ", ".join(
                f"{item['date']} (Total: {item['total_rooms']}, Current: {item['current_bookings']})"
                for item in self.conflicts
            )
            message = f"Room is fully booked for these dates: {summary}"

        super().__init__(
            message,
            ErrorCode.ROOM_FULLY_BOOKED,
            {"room_id": str(room_id), "conflicts": self.conflicts},
        )


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised for unexpected store failures"""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, ErrorCode.DATABASE_ERROR, details, 500)


# ========================================
# Utility Functions
# ========================================

def _iso(value: Any) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'RoomNotFoundError',
    'BookingNotFoundError',
    'BookingError',
    'CapacityUnknownError',
    'RoomFullyBookedError',
    'DatabaseError',
]
