"""SQLAlchemy 2.x database setup using asyncpg.

This module defines the async engine and session factory but does not
hard-code any connection credentials. An empty ``DB_URL`` leaves the engine
unset, and every session request then fails with ``DatabaseUnavailableError``.
"""

from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings


UNAVAILABLE_MESSAGE = "Database connection not initialized"

# Raised while opening or losing a connection, as opposed to query errors
CONNECTION_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
)


class DatabaseUnavailableError(Exception):
    """Raised when the backing store is not configured or cannot be reached."""

    def __init__(self, message: str = UNAVAILABLE_MESSAGE):
        super().__init__(message)


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine, applying pool sizing only where it is supported."""
    kwargs: dict = {"echo": echo}
    if make_url(url).get_backend_name() == "postgresql":
        kwargs.update(
            pool_size=settings.db.pool_size,
            max_overflow=settings.db.max_overflow,
            pool_pre_ping=True,
        )
    return create_async_engine(url, **kwargs)


engine: AsyncEngine | None = (
    build_engine(settings.db.url, echo=settings.db.echo) if settings.db.url else None
)

AsyncSessionMaker = (
    async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
    if engine is not None
    else None
)


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI-friendly async session dependency.

    Usage:
        async def endpoint(session: AsyncSession = Depends(get_session)):
            ...
    """

    if AsyncSessionMaker is None:
        raise DatabaseUnavailableError()

    async with AsyncSessionMaker() as session:
        yield session


async def dispose_engine() -> None:
    """Release pooled connections (called on application shutdown)."""
    if engine is not None:
        await engine.dispose()
