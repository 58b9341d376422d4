"""
Noteful API - Database Session Management
=========================================

What:  Async SQLAlchemy engine construction, session factory, and the
       FastAPI session dependency.
How:   `create_app()` builds (or receives) an engine, stores a session factory
       on `app.state`, and `get_db_session` opens one session per request from
       it. Nothing here holds a module-level engine.
When:  Engine per application instance; sessions per request.

Connection Pooling Strategy:
    PostgreSQL:  pool_size / max_overflow / pre_ping from settings,
                 pool_recycle=3600.
    SQLite:      StaticPool (one shared connection, required for :memory:)
                 with `PRAGMA foreign_keys=ON` on connect so note → folder
                 references are enforced like they are in PostgreSQL.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from noteful.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register with this metadata; `init_models()` creates their tables.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(config: Settings = default_settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Args:
        config: Settings to read the URL and pool sizing from.

    Returns:
        AsyncEngine ready to hand to `create_app()`.
    """
    if config.is_sqlite:
        engine = create_async_engine(
            config.database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=config.log_level == "DEBUG",
        )
        _enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        pool_recycle=3600,
        echo=config.log_level == "DEBUG",
    )


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    # SQLite ships with FK enforcement off; ON DELETE CASCADE needs it on.
    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Session Factory ───────────────────────────────────────────────────────
def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps attributes readable after the dependency
    commits, so response models can be built from already-loaded objects.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the factory stored on `app.state`
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/folders")
        async def list_folders(db: AsyncSession = Depends(get_db_session)):
            return await folder_service.list_folders(db)
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(engine: AsyncEngine) -> None:
    """Create every registered table that does not exist yet."""
    # Models must be imported so they are registered on Base.metadata
    from noteful import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
