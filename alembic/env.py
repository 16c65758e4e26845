# alembic/env.py
# Migrations for the claims schema: users, properties/assets, loss events and
# their reminder markers, proof-of-loss forms, jumpstart sessions/prompts.
from __future__ import annotations
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context


config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Same URL the app connects with (DATABASE_URL, or the local sqlite file).
from app.config import DATABASE_URL
config.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))

# every table in alembic/versions is declared in app.models
from app.database import Base
import app.models  # noqa: F401
target_metadata = Base.metadata

def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),  # reads sqlalchemy.url
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
