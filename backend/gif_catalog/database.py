"""
Gif Catalog Backend — Database Engine & Session Management
============================================================

What:  Async SQLAlchemy engine and session factory construction, plus the
       declarative base shared by all models.
Why:   Centralizes connection logic so the app factory, Alembic and tests
       build engines the same way.
How:   `build_engine()` creates an async engine from Settings; the app
       factory wraps it in a session factory and hands that to GifStore.
Who:   Called by `create_app()`, Alembic's env.py and the test fixtures.

Connection Pooling Strategy:
    pool_size / max_overflow / pool_pre_ping come from Settings and are only
    applied to server databases. SQLite engines get SQLAlchemy's default pool
    for the dialect, which rejects queue-pool arguments.
"""

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from gif_catalog.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for --autogenerate
    and `create_schema()` uses to create missing tables.
    """
    pass


def _engine_options(config: Settings) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        # SQL echo only in DEBUG; otherwise far too noisy
        "echo": config.log_level == "DEBUG",
    }
    if not config.is_sqlite:
        options.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def build_engine(config: Optional[Settings] = None) -> AsyncEngine:
    """Create the async engine described by `config` (module settings by default)."""
    config = config or default_settings
    return create_async_engine(config.database_url, **_engine_options(config))


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: returned ORM objects stay readable after the
    store's transaction commits and the session closes.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """
    Create any missing tables for the registered models.

    Used by tests and by `DB_CREATE_ALL=true` development setups. Production
    schema changes go through Alembic instead.
    """
    # Import for the side effect of registering the model with Base.metadata
    from gif_catalog.models.gif import Gif  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close every pooled connection. Called on application shutdown."""
    await engine.dispose()
