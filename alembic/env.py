"""
Alembic environment for the library database.

The URL comes from DATABASE_URL through library_api.config, the same
setting the API uses, so alembic.ini carries no credentials. Importing
library_api.models registers the authors, books and users tables on
Base.metadata for autogenerate.

    alembic upgrade head
    alembic revision --autogenerate -m "describe the change"
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from library_api.config import get_settings
from library_api.database import Base
from library_api.models import Author, Book, User  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", get_settings().database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the migration as SQL (alembic upgrade head --sql)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a single unpooled connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # Local SQLite databases cannot ALTER the genres/born columns in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
