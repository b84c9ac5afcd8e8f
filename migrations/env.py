"""Alembic environment for the VHR schema."""
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from vhr.db.models import Base
from vhr.utils.settings import database_url_from_env

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    # TEST_DATABASE_URL lets migration tests point at a throwaway database
    return os.getenv("TEST_DATABASE_URL") or database_url_from_env()


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=_migration_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(_migration_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
