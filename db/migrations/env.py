"""Alembic environment for the table booking schema.

The database URL always comes from application settings (DATABASE_URL), so
migrations and the running service can never point at different databases.
"""

from logging.config import fileConfig

from alembic import context

from core.config import get_settings
from db import models_sqlalchemy  # noqa: F401
from db.base import Base
from db.session import create_db_engine


config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

SETTINGS = get_settings()
DATABASE_URL = SETTINGS.database_url
config.set_main_option("sqlalchemy.url", DATABASE_URL)


def _configure_options(is_sqlite: bool) -> dict:
    # SQLite cannot ALTER constraints in place; batch mode rebuilds the table
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "render_as_batch": is_sqlite,
    }


def run_offline() -> None:
    """Emit migration SQL to stdout without a database connection."""
    context.configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(SETTINGS.is_sqlite),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    """Apply migrations through the same engine setup the service uses."""
    engine = create_db_engine(url=DATABASE_URL)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                **_configure_options(connection.dialect.name == "sqlite"),
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
