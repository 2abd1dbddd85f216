from __future__ import annotations

from logging.config import fileConfig

import sqlmodel  # noqa: F401
from alembic import context
from sqlalchemy import create_engine, pool
from sqlmodel import SQLModel

# Registers every catalog table on SQLModel.metadata
import catalog_models  # noqa: F401
from recloser_api.db import DATABASE_URL

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def _configure(**kwargs) -> None:  # type: ignore[no-untyped-def]
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the catalog schema without a live connection."""
    _configure(url=DATABASE_URL, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply pending catalog revisions against DATABASE_URL (or POSTGRES_*)."""
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
