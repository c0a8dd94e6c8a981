"""
Base model configuration for SQLAlchemy ORM.
"""

from hotel_booking.db.base import Base


class BaseModel(Base):
    """
    Abstract base model with common methods.
    """

    __abstract__ = True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
