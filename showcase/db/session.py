"""
Database session management for async SQLAlchemy.

The engine lives on an explicitly constructed Database handle that the
application creates at startup and disposes at shutdown. PostgreSQL
(asyncpg) is the production target; SQLite (aiosqlite) serves development
and tests.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from showcase.db.base import Base

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_MS = 30_000


class Database:
    """Owns the async engine and the session factory."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = _create_engine(url, echo)
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.engine.dialect.name == "sqlite"

    async def create_tables(self) -> None:
        """Create all tables known to the declarative base."""
        # Registers the mapped classes on Base.metadata
        from showcase import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


def _create_engine(url: str, echo: bool) -> AsyncEngine:
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

        # Concurrent writers wait for the database lock instead of failing
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
            cursor.close()

        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session from the application's
    Database handle. Commits on success and rolls back on error.

    Usage:
        @router.get("/models")
        async def list_models(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.db
    async with database.sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
