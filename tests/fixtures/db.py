# tests/fixtures/db.py
"""
DB fixtures for tests (async, SQLite in memory):
- One engine per test with `StaticPool`, so the app and the test share the
  same in-memory database
- `PRAGMA foreign_keys=ON` to keep FK behavior close to PostgreSQL
- Schema built with `Base.metadata.create_all`, dropped with the engine
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from streamhub.db.base import Base
from streamhub.db.session import Database

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _enable_sqlite_fks(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture()
async def database() -> AsyncGenerator[Database, None]:
    """Fresh `Database` (engine + session factory) with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_fks)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    db = Database(engine=engine)
    yield db
    await db.dispose()


@pytest.fixture()
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging rows and asserting on them.

    Rows changed through the API are stale in this session's identity map;
    use `await db_session.refresh(obj)` before asserting on them.
    """
    async with database.session() as session:
        yield session
