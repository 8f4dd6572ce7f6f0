# migrations/env.py

import os
import sys
import asyncio
from logging.config import fileConfig

from alembic import context

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

# --- 1. project root on sys.path ---
# lets env.py find the 'bike_inventory' package wherever alembic is run from
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# --- 2. settings and every model ---
# all SQLModel classes must be registered on the metadata for autogenerate
from bike_inventory.core.config import settings     # noqa: E402
import bike_inventory.domains.models                # noqa: F401, E402

# --- 3. Alembic configuration ---
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL.get_secret_value())


def include_object(object, name, type_, reflected, compare_to):
    if type_ == "table" and name == "alembic_version":
        return False
    return True


def do_run_migrations(connection) -> None:
    """
    Configures the Alembic context on a live connection and runs the migrations.
    """
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_object=include_object,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """
    Emits SQL without a database connection.
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """
    Runs the migrations over the async engine; the sync Alembic logic is
    executed through ``connection.run_sync``.
    """
    engine: AsyncEngine = create_async_engine(
        config.get_main_option("sqlalchemy.url"),
        echo=settings.DEBUG_MODE,
        future=True,
        poolclass=pool.NullPool,  # connect and release immediately
    )

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
