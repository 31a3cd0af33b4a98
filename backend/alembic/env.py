"""
Alembic Migration Environment
===============================

What:  Configures Alembic for the async SQLAlchemy setup over SQLite.
How:   Online mode opens an async engine from settings.database_url, unless
       the caller already handed over a connection through
       config.attributes["connection"] (see lexinote.database.upgrade_schema).
Who:   `alembic` CLI commands run from backend/, and the application lifespan.

SQLite cannot ALTER most column properties in place, so every context is
configured with render_as_batch=True (copy-and-move table rebuilds).
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from lexinote.config import settings
from lexinote.database import Base

# Registers every table on Base.metadata for --autogenerate
from lexinote.models import note, provider  # noqa: F401

config = context.config

# Only the CLI has an .ini; programmatic callers keep the app's logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

# Single source of truth for the database location
config.set_main_option("sqlalchemy.url", settings.database_url)


def run_migrations_offline() -> None:
    """Emit SQL to stdout (`alembic upgrade head --sql`) without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Open a throwaway async engine and migrate through run_sync()."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
    else:
        asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
