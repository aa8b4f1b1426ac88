"""Alembic environment - migrates the chat schema using the API's own settings.

The target URL comes from app.config.Settings, so DATABASE_URL and DOCKER_DB
resolve exactly as they do for the running service. `alembic -x url=...`
overrides them for one-off runs. SQLite targets migrate in batch mode, since
SQLite cannot ALTER most constraints in place.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from app.config import get_settings
from app.db.base import Base
import app.models  # noqa: F401  (populates Base.metadata)

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _target_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    return override or get_settings().database_url


def _emit_sql(url: str) -> None:
    """Offline mode: print the DDL instead of connecting."""
    context.configure(
        url=url,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=Base.metadata,
        render_as_batch=connection.dialect.name == "sqlite",
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _apply_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _emit_sql(_target_url())
else:
    asyncio.run(_apply_online(_target_url()))
