# streamhub/api/v1/routers/auth.py
from __future__ import annotations

"""
Authentication API — StreamHub
==============================

Endpoints
---------
POST /auth/register      Create an account (email and/or phone)      → 201
POST /auth/login         Identifier + password → token + cookie
POST /auth/request-otp   Issue a one-time code                       → {expiresIn}
POST /auth/verify-otp    Consume a code → token + cookie
POST /auth/logout        Clear the session cookie
GET  /auth/me            Current user (Bearer or cookie)

Security & DX
-------------
- **Sensitive cache headers** on every token-issuing route (no-store).
- The `authToken` cookie is HTTP-only, `SameSite=Strict`, `Secure` in
  production and lives as long as the token.
- Auth logic lives in `streamhub.services.auth.*`; routes only shape replies.
"""

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.api.responses import success_envelope
from streamhub.core.config import settings
from streamhub.core.dependencies import get_current_user, get_language
from streamhub.db.models import User
from streamhub.db.session import get_async_db
from streamhub.schemas.auth import LoginRequest, OTPRequest, OTPVerifyRequest, RegisterRequest
from streamhub.security_headers import set_sensitive_cache
from streamhub.services.auth.identity import user_profile
from streamhub.services.auth.login_service import login_user
from streamhub.services.auth.otp_service import request_otp, verify_otp
from streamhub.services.auth.registration_service import register_user
from streamhub.services.notifications import NotificationDispatcher, get_notifier

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.access_token_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


# ──────────────────────────────────────────────────────────────
# 📝 POST /auth/register
# ──────────────────────────────────────────────────────────────
@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register with email and/or phone")
async def register(
    payload: RegisterRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    """Create an unverified account. No token is issued here."""
    created = await register_user(payload, db)
    return success_envelope(created, "User registered successfully")


# ──────────────────────────────────────────────────────────────
# 🔐 POST /auth/login
# ──────────────────────────────────────────────────────────────
@router.post("/login", summary="Email/phone + password login")
async def login(
    response: Response,
    payload: LoginRequest = Body(...),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    # [Step 0] Cache hardening
    set_sensitive_cache(response)

    # [Step 1] Delegate to the login service (neutral errors, logging)
    result = await login_user(payload, db, language)

    # [Step 2] Session cookie
    set_auth_cookie(response, result.token)
    return success_envelope(result, "Login successful")


# ──────────────────────────────────────────────────────────────
# 📨 POST /auth/request-otp
# ──────────────────────────────────────────────────────────────
@router.post("/request-otp", summary="Send a one-time code")
async def request_otp_route(
    payload: OTPRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> dict:
    result = await request_otp(payload, db, notifier)
    return success_envelope(result, "OTP sent successfully")


# ──────────────────────────────────────────────────────────────
# ✅ POST /auth/verify-otp
# ──────────────────────────────────────────────────────────────
@router.post("/verify-otp", summary="Verify a one-time code and sign in")
async def verify_otp_route(
    response: Response,
    payload: OTPVerifyRequest = Body(...),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    set_sensitive_cache(response)
    result = await verify_otp(payload, db, language)
    set_auth_cookie(response, result.token)
    return success_envelope(result, "OTP verified successfully")


# ──────────────────────────────────────────────────────────────
# 🚪 POST /auth/logout · 👤 GET /auth/me
# ──────────────────────────────────────────────────────────────
@router.post("/logout", summary="Clear the session cookie")
async def logout(response: Response) -> dict:
    """Tokens are stateless: logging out only drops the cookie."""
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return success_envelope(None, "Logged out successfully")


@router.get("/me", summary="Current user")
async def me(
    response: Response,
    user: User = Depends(get_current_user),
    language: str = Depends(get_language),
) -> dict:
    set_sensitive_cache(response)
    return success_envelope(user_profile(user, language))


__all__ = ["router", "set_auth_cookie"]
