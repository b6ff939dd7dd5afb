# tests/conftest.py
"""
Global test bootstrap
- Pins a test environment BEFORE any `streamhub` import (settings are read once)
- Runs every async test on asyncio via anyio
- Pulls in the shared fixtures (db, app/client, users, content, notifier)
"""

from __future__ import annotations

import os
import warnings

import pytest
from sqlalchemy.exc import SAWarning

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (must precede the fixture imports below)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENV", "development")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("PASSWORD_BCRYPT_ROUNDS", "4")  # fast hashing in tests

warnings.filterwarnings("ignore", category=SAWarning, message=r".*conflicts with relationship\(s\):.*")


@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


# ──────────────────────────────────────────────────────────────────────────────
# 📦 Shared fixtures
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *        # noqa: E402,F401,F403
from tests.fixtures.app import *       # noqa: E402,F401,F403
from tests.fixtures.users import *     # noqa: E402,F401,F403
from tests.fixtures.content import *   # noqa: E402,F401,F403
from tests.fixtures.mocks.notifier import *  # noqa: E402,F401,F403
