# tests/test_auth/test_register.py

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.exceptions import ConflictError, ValidationError
from streamhub.core.security import verify_password
from streamhub.db.models import User, UserPreferences
from streamhub.schemas.auth import RegisterRequest
from streamhub.services.auth.registration_service import register_user

REGISTER = "/api/auth/register"


# ─────────────────────────────────────────────────────────────
# POST /api/auth/register
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_register_success(async_client: AsyncClient, db_session: AsyncSession):
    """
    ✅ Creates an unverified user with a hashed password and default preferences.
    """
    res = await async_client.post(
        REGISTER,
        json={
            "email": "  New.User@Example.com ",
            "phone": "+1555000111",
            "password": "password123",
            "firstName": "New",
            "lastName": "User",
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["email"] == "new.user@example.com"
    assert body["data"]["phone"] == "+1555000111"
    assert "passwordHash" not in body["data"]
    assert "token" not in body["data"]

    user = (await db_session.execute(select(User).where(User.id == body["data"]["id"]))).scalar_one()
    assert user.first_name_en == "New"
    assert user.last_name_en == "User"
    assert user.preferred_language == "en"
    assert user.is_active is True
    assert user.is_verified is False
    assert user.password_hash != "password123"
    assert verify_password("password123", user.password_hash)

    prefs = (
        await db_session.execute(select(UserPreferences).where(UserPreferences.user_id == user.id))
    ).scalar_one()
    assert prefs.favorite_genres == []


@pytest.mark.anyio
async def test_register_phone_only_without_password(async_client: AsyncClient, db_session: AsyncSession):
    res = await async_client.post(REGISTER, json={"phone": "+9715550000"})
    assert res.status_code == 201
    user = (await db_session.execute(select(User).where(User.phone == "+9715550000"))).scalar_one()
    assert user.email is None
    assert user.password_hash is None


@pytest.mark.anyio
async def test_register_requires_email_or_phone(async_client: AsyncClient):
    res = await async_client.post(REGISTER, json={"password": "password123", "email": "   "})
    assert res.status_code == 400
    assert res.json()["error"] == {
        "code": "VALIDATION_ERROR",
        "message": "Email or phone is required",
        "statusCode": 400,
    }


@pytest.mark.anyio
async def test_register_duplicate_email_with_other_phone(async_client: AsyncClient, create_test_user):
    """
    ❌ Email already owned by another account → 409 even with a new phone.
    """
    await create_test_user(email="taken@example.com", phone="+1000000001")
    res = await async_client.post(REGISTER, json={"email": "TAKEN@example.com", "phone": "+1000000002"})
    assert res.status_code == 409
    assert res.json()["error"]["message"] == "User with this email or phone already exists"


@pytest.mark.anyio
async def test_register_duplicate_phone(async_client: AsyncClient, create_test_user):
    await create_test_user(email="a@example.com", phone="+1000000003")
    res = await async_client.post(REGISTER, json={"email": "b@example.com", "phone": "+1000000003"})
    assert res.status_code == 409


@pytest.mark.anyio
async def test_register_rejects_malformed_email(async_client: AsyncClient):
    res = await async_client.post(REGISTER, json={"email": "not-an-email"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─────────────────────────────────────────────────────────────
# Service level
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_register_service_errors(db_session: AsyncSession, create_test_user):
    with pytest.raises(ValidationError):
        await register_user(RegisterRequest(), db_session)

    await create_test_user(email="dupe@example.com", phone=None)
    with pytest.raises(ConflictError):
        await register_user(RegisterRequest(email="dupe@example.com", phone="+1222333444"), db_session)
