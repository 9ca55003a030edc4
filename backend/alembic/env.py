"""
Alembic Migration Environment
===============================

Runs the revisions in alembic/versions against DATABASE_URL from
gif_catalog.config. Online mode opens a single unpooled async connection;
offline mode renders SQL only.

    alembic upgrade head              # apply
    alembic upgrade head --sql        # print SQL instead
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from gif_catalog.config import settings
from gif_catalog.database import Base
from gif_catalog.models.gif import Gif  # noqa: F401  (registers the gifs table)

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)


def _configure(**options) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        # SQLite cannot ALTER most columns in place
        render_as_batch=settings.is_sqlite,
        **options,
    )


def _apply(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def _apply_online() -> None:
    # One short-lived connection; the app's pool settings don't apply here
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(_apply_online())
