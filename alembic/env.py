"""
Alembic env - migrations for the users and items tables.
Challenge: The app talks to the database through an async driver; Alembic needs a sync one.
Design: URL comes from Settings (same env vars as the app) and is mapped to the sync driver.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from inventory_api.config import get_settings
from inventory_api.db.base import Base
from inventory_api.db.models import ItemRecord, UserRecord  # noqa: F401 - register tables
from inventory_api.db.session import sync_database_url

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = sync_database_url(get_settings().database_url)
config.set_main_option("sqlalchemy.url", database_url)

target_metadata = Base.metadata
# SQLite cannot ALTER most constraints in place
render_as_batch = database_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL for the users/items schema without connecting."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
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
            render_as_batch=render_as_batch,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
