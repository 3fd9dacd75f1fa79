"""
Bookmarks API — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by the store dependency (bookmarks_api.dependencies).
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    pool_size / max_overflow:  from settings (default 10 + 5)
    pool_pre_ping:             validates connections before use
    pool_timeout:              bounded wait for a free connection
    pool_recycle=3600:         recycles connections every hour
    command_timeout:           asyncpg per-statement timeout

    SQLite URLs (used by the test suite) get no pool options; SQLAlchemy
    picks a suitable pool for them.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookmarks_api.config import Settings, settings


def engine_options(app_settings: Settings) -> Dict[str, Any]:
    """
    Build create_async_engine() keyword arguments for the configured driver.

    Pool sizing only applies to server databases; asyncpg additionally
    receives a per-statement command timeout.
    """
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": app_settings.log_level == "DEBUG",
    }
    url = app_settings.database_url
    if url.startswith("sqlite"):
        return options

    options.update(
        pool_size=app_settings.db_pool_size,
        max_overflow=app_settings.db_max_overflow,
        pool_pre_ping=app_settings.db_pool_pre_ping,
        pool_timeout=app_settings.db_pool_timeout,
        pool_recycle=3600,
    )
    if "+asyncpg" in url:
        options["connect_args"] = {"command_timeout": app_settings.db_command_timeout}
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **engine_options(settings))

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, outside
# the session context
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (the store adapter performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Raises:
        Any exception is re-raised after rollback so the global error
        handlers can respond.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
