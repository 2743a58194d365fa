"""Async SQLAlchemy engine and session factory.

When DATABASE_URL is configured, provides:
- async engine (PostgreSQL via asyncpg, or any SQLAlchemy async driver)
- async session factory for request-scoped sessions
- lifespan hook that creates the schema on startup and disposes on shutdown

When DATABASE_URL is None, engine and session factory are None and the
app runs on the in-memory user repository.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from demo_user.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all table models."""


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    kwargs: dict[str, Any] = {"echo": echo}
    # SQLite drivers use a pool class that rejects sizing arguments.
    if not database_url.startswith("sqlite"):
        kwargs.update(pool_size=5, max_overflow=10)
    return create_async_engine(database_url, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# --- Engine and session factory (None when no DATABASE_URL) ---

if SETTINGS.database_url:
    engine: AsyncEngine | None = build_engine(
        SETTINGS.database_url, echo=SETTINGS.is_dev
    )
    async_session_factory: async_sessionmaker[AsyncSession] | None = (
        build_session_factory(engine)
    )
else:
    engine = None
    async_session_factory = None


async def create_schema(bind: AsyncEngine) -> None:
    """Create any missing tables.  There are no migrations."""
    import demo_user.db.tables  # noqa: F401  registers tables on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Open a session that commits on success and rolls back on exception."""
    if async_session_factory is None:
        raise RuntimeError(
            "DATABASE_URL is not configured, cannot create database session"
        )
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def lifespan_db():
    """Startup/shutdown hook for the database engine."""
    if engine is None:
        logger.info("No DATABASE_URL configured, using in-memory user repository")
        yield
        return

    try:
        await create_schema(engine)
        logger.info("Database engine ready: %s", engine.url.render_as_string())
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")
