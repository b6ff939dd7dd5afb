# tests/fixtures/users.py
from __future__ import annotations

from typing import Awaitable, Callable, Dict, Tuple
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.security import create_token_for_user, get_password_hash
from streamhub.db.models import User, UserPreferences

DEFAULT_PASSWORD = "password123"


# ──────────────────────────────────────────────────────────────
# 🧪 Factory: Create Test User
# ──────────────────────────────────────────────────────────────
@pytest.fixture
def create_test_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """
    Create an active user with a bcrypt password (`password123` by default).

    Any `User` column can be overridden; `password=None` makes an OTP-only
    account (no hash).
    """
    async def _create(**kwargs) -> User:
        password = kwargs.pop("password", DEFAULT_PASSWORD)
        kwargs.setdefault("email", f"user_{uuid4().hex[:10]}@example.com")
        kwargs.setdefault("first_name_en", "Test")
        kwargs.setdefault("last_name_en", "User")
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("is_verified", False)

        user = User(password_hash=get_password_hash(password) if password else None, **kwargs)
        db_session.add(user)
        await db_session.flush()
        db_session.add(UserPreferences(user_id=user.id))
        await db_session.commit()
        return user

    return _create


# ──────────────────────────────────────────────────────────────
# 🔑 Factory: User + Bearer headers
# ──────────────────────────────────────────────────────────────
@pytest.fixture
def user_with_headers(create_test_user) -> Callable[..., Awaitable[Tuple[User, Dict[str, str]]]]:
    """Create a user and return `(user, {"Authorization": "Bearer <token>"})`."""
    async def _create(**kwargs):
        user = await create_test_user(**kwargs)
        return user, {"Authorization": f"Bearer {create_token_for_user(user)}"}

    return _create
