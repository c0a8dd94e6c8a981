"""Database session management."""
from typing import AsyncGenerator

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from hotel_booking.config.logging import get_logger
from hotel_booking.config.settings import settings

logger = get_logger(__name__)


def _is_sqlite_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:") or url.query.get("mode") == "memory"


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for ``database_url``.

    In-memory SQLite gets a single shared connection (StaticPool) so the
    database survives across sessions. File-backed SQLite keeps the default
    pool so each session owns its connection and transaction. Other
    backends get a sized pool.
    """
    url = make_url(database_url)
    engine_kwargs = {'echo': echo, 'pool_pre_ping': True}

    if url.get_backend_name() == "sqlite":
        engine_kwargs['connect_args'] = {"check_same_thread": False}
        if _is_sqlite_memory(url):
            engine_kwargs['poolclass'] = StaticPool
    else:
        engine_kwargs.update({
            'pool_size': settings.DB_POOL_SIZE,
            'max_overflow': settings.DB_POOL_OVERFLOW,
            'pool_recycle': settings.DB_POOL_RECYCLE,
            'connect_args': settings.DB_CONNECT_ARGS,
        })

    return create_async_engine(url, **engine_kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(settings.get_database_url(), echo=settings.DB_ECHO)

SessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        async def read_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with SessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {str(e)}")
            await session.rollback()
            raise
