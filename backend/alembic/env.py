"""Alembic environment — async migration runner for the ProofPot registry and ledger.

Invariants:
    - Target metadata covers exactly the registry_entries and tokens tables
    - The database URL comes from proofpot.config.Settings, so migrations and the
      running API always agree on the target (including the asyncpg URL rewrite)

Design Decisions:
    - alembic.ini carries no URL: the Settings default already targets the
      docker-compose database, DATABASE_URL overrides it
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from proofpot.config import Settings
from proofpot.db.base import Base
# Import all models so Base.metadata has them
from proofpot.models.registry_entry import RegistryEntryRecord  # noqa: F401
from proofpot.models.token import TokenRecord  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    # Access settings are irrelevant to migrations; open mode needs no administrator
    return Settings(access_mode="open").database_url


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of touching a database."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_apply)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
