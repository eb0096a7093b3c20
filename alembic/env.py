# alembic/env.py
# Migrations always run against settings.SQLALCHEMY_DATABASE_URL (Heroku URLs
# already rewritten for psycopg2); the url in alembic.ini is ignored.
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from slatecms.core.settings import settings
from slatecms.db.base import Base
import slatecms.models  # noqa: F401  (registers every SlateCMS table)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    context.configure(
        url=settings.SQLALCHEMY_DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        target_metadata=target_metadata,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a single NullPool connection."""
    connectable = engine_from_config(
        {"sqlalchemy.url": settings.SQLALCHEMY_DATABASE_URL},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite has no ALTER for constraints; batch mode rebuilds tables
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
