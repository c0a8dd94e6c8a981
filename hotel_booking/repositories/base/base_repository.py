"""
Base repository with shared session handling and error translation.

Repositories never commit; the owning service decides the transaction
boundary so that check-then-write sequences stay in one transaction.
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.config.logging import get_logger
from hotel_booking.core.exceptions import DatabaseError
from hotel_booking.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic async repository bound to one model and one session.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    def _raise_database_error(self, operation: str, error: Exception, **context: Any) -> None:
        """Log a store failure and re-raise it as ``DatabaseError``."""
        logger.error(
            f"{self.model.__name__} repository {operation} failed: {error}",
            extra={"operation": operation, **{k: str(v) for k, v in context.items()}},
        )
        raise DatabaseError(
            f"Database operation failed: {operation}",
            details={"model": self.model.__name__},
        ) from error
