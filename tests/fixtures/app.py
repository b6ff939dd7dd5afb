# tests/fixtures/app.py

"""
🧩 App Fixture:
- Builds the real application via `create_app` on the test `Database`
- Injects the recording notifier instead of the logging one
- HTTP client over ASGITransport (unhandled errors become 500 envelopes,
  they are not re-raised into the test)
"""

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from streamhub.db.session import Database
from streamhub.main import create_app

API = "/api"


@pytest.fixture()
async def app(database: Database, notifier) -> FastAPI:
    """🧪 Production app wiring on the per-test database."""
    return create_app(database=database, notifier=notifier)


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """🌐 HTTP client for integration tests."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
