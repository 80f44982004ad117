"""
Alembic Migration Environment
===============================

What:  Runs catalog migrations against DATABASE_URL.
Who:   `alembic upgrade head` / `alembic revision --autogenerate` from backend/.
Note:  Set DB_CREATE_TABLES=false when Alembic owns the schema; otherwise
       the app's startup create_all and these migrations both create tables.

Online mode reuses the application's engine, so migrations see the same
pool and SQLite settings as the running service.
"""

import asyncio
from logging.config import fileConfig

from alembic import context

from storefront.config import settings
from storefront.database import Base, engine

# Register tables on Base.metadata for autogenerate
import storefront.models.image  # noqa: F401
import storefront.models.product  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER most columns in place
        render_as_batch=settings.is_sqlite,
        **kwargs,
    )


def run_offline() -> None:
    """Print the migration SQL instead of executing it."""
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
