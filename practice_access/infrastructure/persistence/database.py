"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (see migrations/versions).

Engine and session factory are created lazily on first use (session_scope,
get_db, get_db_transactional) so import does not trigger Settings validation.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from practice_access.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    pool_size = settings.db_pool_size if settings.db_pool_size is not None else 10
    max_overflow = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 20
    )
    command_timeout = (
        settings.db_command_timeout
        if settings.db_command_timeout is not None
        else 30
    )
    connect_args: dict[str, Any] = {}
    if "asyncpg" in settings.database_url:
        connect_args["command_timeout"] = command_timeout
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=3600,
        connect_args=connect_args,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )
    logger.info("Database engine created (pool_size=%d)", pool_size)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


async def dispose_engine() -> None:
    """Close pooled connections (called on shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


@asynccontextmanager
async def session_scope(*, transactional: bool = False) -> AsyncIterator[AsyncSession]:
    """Session for callers outside request dependencies (edge check, probes, scripts).

    With transactional=True the block runs in a transaction that commits on
    success and rolls back on exception.
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        if transactional:
            async with session.begin():
                yield session
        else:
            yield session


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    """
    async with session_scope() as session:
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """Database session dependency for write operations (POST, PUT, PATCH, DELETE)."""
    async with session_scope(transactional=True) as session:
        yield session


async def get_audit_db() -> AsyncIterator[AsyncSession]:
    """Separate write session for the admin action log.

    The doctor update commits on its own session, so a failed or timed-out
    log insert cannot roll it back.
    """
    async with session_scope(transactional=True) as session:
        yield session
