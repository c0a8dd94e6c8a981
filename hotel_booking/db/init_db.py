# hotel_booking/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from hotel_booking.config.logging import get_logger
from hotel_booking.db.base import Base, import_models

logger = get_logger(__name__)


def _resolve(bind: Optional[AsyncEngine]) -> AsyncEngine:
    if bind is not None:
        return bind
    from hotel_booking.db.session import engine
    return engine


async def init_db(bind: Optional[AsyncEngine] = None) -> None:
    """
    Initialize the database by creating all missing tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    import_models()
    try:
        async with _resolve(bind).begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


async def drop_db(bind: Optional[AsyncEngine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Use with caution.
    Only for development/testing purposes.
    """
    import_models()
    try:
        async with _resolve(bind).begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("All database tables dropped")
    except Exception as e:
        logger.error(f"Error dropping database: {e}")
        raise
