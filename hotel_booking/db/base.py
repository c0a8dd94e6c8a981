"""SQLAlchemy Base class for all models."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def import_models() -> None:
    """
    Import all models to register them with SQLAlchemy.

    Must run before ``Base.metadata.create_all`` so every table is known.
    """
    import hotel_booking.models  # noqa: F401
