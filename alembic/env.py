import asyncio
import logging
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine

# ───────────────────────────────────────────────
# 📁 Ensure streamhub is importable
# ───────────────────────────────────────────────
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from streamhub.db.base import Base  # full metadata (every model registered)
from streamhub.core.config import settings

# ───────────────────────────────────────────────
# 📦 Alembic Config
# ───────────────────────────────────────────────
config = context.config

if config.config_file_name:
    fileConfig(config.config_file_name)

log = logging.getLogger("alembic.env")

# `alembic -x url=sqlite+aiosqlite:///./dev.db upgrade head` beats the environment
DATABASE_URL = context.get_x_argument(as_dictionary=True).get("url") or settings.async_database_url
config.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        transaction_per_migration=True,
        **kwargs,
    )


# ───────────────────────────────────────────────
# 📴 Offline: emit SQL only
# ───────────────────────────────────────────────
def run_migrations_offline() -> None:
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


# ───────────────────────────────────────────────
# 🌐 Online: async engine, sync migration body
# ───────────────────────────────────────────────
def do_run_migrations(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place
    _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    log.info("Migrating %s", make_url(DATABASE_URL).render_as_string(hide_password=True))
    connectable = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
