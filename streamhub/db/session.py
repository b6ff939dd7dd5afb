# streamhub/db/session.py
from __future__ import annotations

"""
StreamHub — Database Engine & Session Dependencies

- `Database` owns one async engine + session factory. It is constructed by
  the application lifespan (or a script / test) and stored on `app.state.db`;
  nothing here opens connections at import time.
- `get_async_db` is the FastAPI dependency handing each request its own
  `AsyncSession`, rolled back on error and always closed.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional
import logging

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from streamhub.core.config import settings

logger = logging.getLogger(__name__)

# Pool knobs (ignored for SQLite)
_POOL_PRE_PING = True
_POOL_RECYCLE = 1800
_POOL_TIMEOUT = 30
_POOL_SIZE = 10
_MAX_OVERFLOW = 20


def _engine_kwargs(url: str, echo: bool) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": _POOL_PRE_PING}
    if make_url(url).get_backend_name() != "sqlite":
        kwargs.update(
            pool_recycle=_POOL_RECYCLE,
            pool_size=_POOL_SIZE,
            max_overflow=_MAX_OVERFLOW,
            pool_timeout=_POOL_TIMEOUT,
        )
    return kwargs


# ─────────────────────────────────────────────────────────────
# ⚡ Database handle
# ─────────────────────────────────────────────────────────────
class Database:
    """Async engine + session factory with an explicit lifecycle."""

    def __init__(self, url: Optional[str] = None, *, engine: Optional[AsyncEngine] = None, echo: Optional[bool] = None) -> None:
        if engine is None:
            url = url or settings.async_database_url
            engine = create_async_engine(url, **_engine_kwargs(url, settings.DB_ECHO if echo is None else echo))
        self.engine: AsyncEngine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session and a transaction (commit on success, rollback on error)."""
        async with self.session_factory() as session:
            async with session.begin():
                yield session

    async def healthcheck(self) -> bool:
        """Quick SELECT 1 to verify DB connectivity (used by /readyz)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("DB healthcheck failed")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# ─────────────────────────────────────────────────────────────
# 🔌 FastAPI dependency
# ─────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    return request.app.state.db


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async SQLAlchemy session."""
    database: Database = get_database(request)
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


__all__ = [
    "Database",
    "get_database",
    "get_async_db",
]
