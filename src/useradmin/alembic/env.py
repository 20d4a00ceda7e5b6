"""Alembic environment for the users table.

Migrations run through the same async driver the API uses, so one
``DATABASE_URL`` serves both.
"""
from __future__ import annotations
import asyncio
from logging.config import fileConfig
from sqlalchemy.engine import Connection
from alembic import context
from useradmin.core.config import get_settings
from useradmin.db.session import Base, make_engine
import useradmin.models  # noqa: F401 ensure model metadata is loaded

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=get_settings().database_url_sync,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    # Batch mode lets ALTERs work on sqlite.
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = make_engine(get_settings().database_url_async)
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
