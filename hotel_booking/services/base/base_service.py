"""
Base service class providing common functionality for all services.
"""

import time
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from functools import wraps
from typing import Any, AsyncIterator, Generic, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.config.logging import get_logger
from hotel_booking.config.settings import settings
from hotel_booking.core.exceptions import DatabaseError, ValidationError
from hotel_booking.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)

TRepo = TypeVar("TRepo", bound=BaseRepository)


def track_performance(operation_name: str):
    """Decorator to track async operation performance."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.debug(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {e}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error": type(e).__name__,
                    },
                )
                raise
            duration = time.perf_counter() - start_time
            logger.debug(
                f"Operation '{operation_name}' completed in {duration:.3f}s",
                extra={"operation": operation_name, "duration_seconds": duration},
            )
            return result
        return wrapper
    return decorator


class BaseService(Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction scope with rollback on failure
    - Validation helpers shared by booking operations
    """

    def __init__(self, repository: TRepo, db_session: AsyncSession):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: Async database session
        """
        self.repository: TRepo = repository
        self.db: AsyncSession = db_session
        self._logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Commit on success, roll back on any failure.

        Usage:
            async with self.transaction():
                await self.repository.insert_if_capacity(record)
        """
        try:
            yield self.db
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self._logger.error(f"Transaction rollback: {e}", exc_info=True)
            raise DatabaseError("Transaction failed") from e
        except Exception:
            await self.db.rollback()
            raise

    # -------------------------------------------------------------------------
    # Validation helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_price(price: Optional[Decimal]) -> None:
        if price is None or price <= 0:
            raise ValidationError(
                "Price must be greater than 0",
                field_errors={"price": ["Price must be greater than 0"]},
            )

    @staticmethod
    def _validate_not_past(value: Optional[date], field: str = "date") -> None:
        if value is None:
            raise ValidationError(
                f"{field} is required",
                field_errors={field: ["This field is required"]},
            )
        if value < date.today():
            raise ValidationError(
                "Cannot book dates in the past",
                field_errors={field: [f"{value.isoformat()} is in the past"]},
            )

    @staticmethod
    def _validate_pagination(page: int, limit: int) -> None:
        errors = {}
        if page < 1:
            errors["page"] = ["Page must be at least 1"]
        if limit < 1 or limit > settings.MAX_PAGE_SIZE:
            errors["limit"] = [f"Limit must be between 1 and {settings.MAX_PAGE_SIZE}"]
        if errors:
            raise ValidationError("Invalid pagination parameters", field_errors=errors)

    @staticmethod
    def _context(**values: Any) -> dict:
        """Stringify ids and dates for log ``extra``."""
        return {
            key: value.isoformat() if isinstance(value, date) else str(value)
            for key, value in values.items()
            if value is not None
        }
