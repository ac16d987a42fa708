"""
Database engine and session management.

Provides async SQLAlchemy engine and session factory for FastAPI.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cardvault.config import settings
from cardvault.models.db import Base


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite does not enforce foreign keys unless asked to on every
    connection, so the pragma is switched on for SQLite URLs.
    """
    if url.startswith("sqlite"):
        async_engine = create_async_engine(url, echo=echo)
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return async_engine
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url, echo=settings.debug)
async_session_factory = build_session_factory(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    One session per request, committed after the handler returns, so every
    write made while handling a request lands in a single transaction.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db(async_engine: AsyncEngine | None = None) -> None:
    """
    Create all tables defined in the ORM models.

    Called once at application startup; tests pass their own engine.
    """
    async with (async_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(async_engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables.

    WARNING: Destroys all data. Use only for testing.
    """
    async with (async_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
