"""
Alembic environment configuration.
Migrations run on a SYNC engine (psycopg) while the application uses asyncpg.
"""

from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context

from printshop.core.config import settings
from printshop.core.database import Base
from printshop import models  # noqa: F401  registers every table on Base.metadata

# Alembic Config object
config = context.config


def sync_url(url: str) -> str:
    """Swap an async PostgreSQL driver for psycopg."""
    if "+asyncpg" in url:
        return url.replace("+asyncpg", "+psycopg")
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


# An explicit -x url=... wins over the application settings
database_url = sync_url(
    context.get_x_argument(as_dictionary=True).get("url") or settings.DATABASE_URL_SYNC
)

# Kept in attributes to avoid ConfigParser interpolation of % in passwords
config.attributes["sqlalchemy.url"] = database_url

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Model's MetaData object for 'autogenerate' support
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.
    Emits SQL to the script output without connecting.
    """
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with the given connection."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with a SYNC engine."""
    connectable = create_engine(
        database_url,
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
