# tests/test_auth/test_login.py

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import settings
from streamhub.core.jwt import decode_token
from streamhub.core.security import create_access_token

LOGIN = "/api/auth/login"
ME = "/api/auth/me"
LOGOUT = "/api/auth/logout"


# ─────────────────────────────────────────────────────────────
# POST /api/auth/login
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_login_with_email_sets_cookie(async_client: AsyncClient, create_test_user, db_session: AsyncSession):
    """
    ✅ Token in body + HTTP-only `authToken` cookie, no-store caching.
    """
    user = await create_test_user(email="john@example.com", phone="+1234567890")

    res = await async_client.post(LOGIN, json={"emailOrPhone": "John@Example.com", "password": "password123"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Login successful"
    assert decode_token(body["data"]["token"])["sub"] == user.id
    assert body["data"]["user"]["id"] == user.id
    assert body["data"]["user"]["firstName"] == "Test"

    cookie = res.headers["set-cookie"]
    assert cookie.startswith(f"{settings.AUTH_COOKIE_NAME}=")
    assert "HttpOnly" in cookie
    assert "SameSite=strict" in cookie
    assert f"Max-Age={7 * 24 * 60 * 60}" in cookie
    assert "Secure" not in cookie  # development
    assert res.headers["cache-control"] == "no-store"

    await db_session.refresh(user)
    assert user.last_login_at is not None


@pytest.mark.anyio
async def test_login_with_phone_and_arabic_profile(async_client: AsyncClient, create_test_user):
    await create_test_user(phone="+9876543210", first_name_en="Fatima", first_name_ar="فاطمة")
    res = await async_client.post(
        LOGIN,
        json={"emailOrPhone": "+9876543210", "password": "password123"},
        headers={"Accept-Language": "ar"},
    )
    assert res.status_code == 200
    assert res.json()["data"]["user"]["firstName"] == "فاطمة"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "overrides, identifier, password",
    [
        ({}, "ghost@example.com", "password123"),              # unknown identifier
        ({}, None, "wrong-password"),                           # wrong password
        ({"is_active": False}, None, "password123"),            # inactive account
        ({"password": None}, None, "password123"),              # OTP-only account
    ],
)
async def test_login_failures_share_one_message(async_client: AsyncClient, create_test_user, overrides, identifier, password):
    """
    ❌ Every credential failure is the same 401 (no account enumeration).
    """
    user = await create_test_user(**overrides)
    res = await async_client.post(LOGIN, json={"emailOrPhone": identifier or user.email, "password": password})
    assert res.status_code == 401
    assert res.json()["error"] == {
        "code": "AUTHENTICATION_ERROR",
        "message": "Invalid email/phone or password",
        "statusCode": 401,
    }
    assert "set-cookie" not in res.headers


@pytest.mark.anyio
async def test_login_requires_both_fields(async_client: AsyncClient):
    res = await async_client.post(LOGIN, json={"emailOrPhone": "john@example.com"})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Email/Phone and password are required"


# ─────────────────────────────────────────────────────────────
# GET /api/auth/me · POST /api/auth/logout
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_me_with_bearer(async_client: AsyncClient, user_with_headers):
    user, headers = await user_with_headers(first_name_en="John", first_name_ar="جون")
    res = await async_client.get(ME, headers=headers, params={"lang": "ar"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == user.id
    assert data["firstName"] == "جون"
    assert data["lastName"] == "User"  # no Arabic value → English fallback
    assert data["isVerified"] is False


@pytest.mark.anyio
async def test_me_with_cookie_fallback(async_client: AsyncClient, create_test_user):
    user = await create_test_user()
    token = create_access_token(user.id)
    res = await async_client.get(ME, headers={"Cookie": f"{settings.AUTH_COOKIE_NAME}={token}"})
    assert res.status_code == 200
    assert res.json()["data"]["id"] == user.id


@pytest.mark.anyio
@pytest.mark.parametrize(
    "headers, message",
    [
        ({}, "Missing authorization header"),
        ({"Authorization": "Token abc"}, "Invalid authorization header format"),
        ({"Authorization": "Bearer"}, "Invalid authorization header format"),
        ({"Authorization": "Bearer not.a.jwt"}, "Invalid token"),
    ],
)
async def test_me_rejects_bad_credentials(async_client: AsyncClient, headers, message):
    res = await async_client.get(ME, headers=headers)
    assert res.status_code == 401
    assert res.json()["error"]["message"] == message


@pytest.mark.anyio
async def test_me_expired_token(async_client: AsyncClient, create_test_user):
    user = await create_test_user()
    token = create_access_token(user.id, expires_delta=timedelta(seconds=-1))
    res = await async_client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "TOKEN_EXPIRED"
    assert res.headers["www-authenticate"] == "Bearer"


@pytest.mark.anyio
async def test_me_inactive_user(async_client: AsyncClient, user_with_headers, db_session: AsyncSession):
    user, headers = await user_with_headers()
    user.is_active = False
    await db_session.commit()

    res = await async_client.get(ME, headers=headers)
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "User not found or inactive"


@pytest.mark.anyio
async def test_logout_clears_cookie(async_client: AsyncClient):
    res = await async_client.post(LOGOUT)
    assert res.status_code == 200
    assert res.json()["message"] == "Logged out successfully"
    cookie = res.headers["set-cookie"]
    assert cookie.startswith(f'{settings.AUTH_COOKIE_NAME}=""') or cookie.startswith(f"{settings.AUTH_COOKIE_NAME}=;")
    assert "Max-Age=0" in cookie
