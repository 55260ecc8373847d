"""Alembic environment: DATABASE_URL comes from application settings, tables from the ORM metadata."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy.pool import NullPool

from taskmanager.core.config import settings
from taskmanager.core.database import build_engine
from taskmanager.models import Base, Task, User  # noqa: F401  (registers every table)

config = context.config
if config.config_file_name is not None and config.get_section("formatters"):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    url = settings.DATABASE_URL
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_is_sqlite(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect and apply migrations; SQLite uses batch mode for ALTER support."""
    url = settings.DATABASE_URL
    connectable = build_engine(url, poolclass=NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=_is_sqlite(url),
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
