"""
Room Vote – Async SQLAlchemy engine, session factory, and declarative base.
"""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from roomvote.config import Settings


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ── Engine ──
def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine described by ``settings.DATABASE_URL``."""
    engine_kwargs = {
        "echo": settings.DEBUG,
        "future": True,
    }

    # If using PostgreSQL (Render/Supabase), disable prepared statement caching
    # because PgBouncer (transaction mode) does not support it properly.
    if "postgresql" in settings.DATABASE_URL:
        engine_kwargs["connect_args"] = {"statement_cache_size": 0}

    engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)

    # SQLite only enforces ON DELETE CASCADE with foreign keys switched on.
    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_fks(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# ── Session factory ──
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    # Make sure every model is registered on the metadata first.
    import roomvote.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Dependency for FastAPI routes ──
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async database session bound to this app, auto-closed on exit."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
