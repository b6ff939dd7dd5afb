# streamhub/services/auth/login_service.py
from __future__ import annotations

"""
Login service — email/phone + password
======================================

What this module provides
-------------------------
- Password login by **either** identifier (exact match).
- **Neutral errors**: unknown identifier, inactive account, OTP-only account
  and wrong password all raise the same `AuthenticationError`.
- Token issuance through `streamhub.core.security`; the route sets the cookie.
"""

from datetime import datetime, timezone
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.exceptions import AuthenticationError, ValidationError
from streamhub.core.security import create_token_for_user, verify_password
from streamhub.schemas.auth import AuthResult, LoginRequest
from streamhub.services.auth.identity import find_user_by_identifier, user_profile
from streamhub.services.notifications import mask_destination

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email/phone or password"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


async def login_user(payload: LoginRequest, db: AsyncSession, language: str) -> AuthResult:
    """
    Authenticate with an identifier and a password.

    Steps
    -----
    1) Require both fields.
    2) Lookup by email or phone (neutral error on miss / inactive).
    3) Verify the password (missing hash is a mismatch).
    4) Stamp `last_login_at`, issue the token.
    """
    # ── [Step 1] Input ───────────────────────────────────────────────────────
    if not (payload.email_or_phone or "").strip() or not payload.password:
        raise ValidationError("Email/Phone and password are required")

    # ── [Step 2] Lookup ──────────────────────────────────────────────────────
    user = await find_user_by_identifier(db, payload.email_or_phone)
    if user is None or not user.is_active:
        logger.info("Login failed for %s", mask_destination(payload.email_or_phone))
        raise AuthenticationError(INVALID_CREDENTIALS)

    # ── [Step 3] Password ────────────────────────────────────────────────────
    if not verify_password(payload.password, user.password_hash):
        logger.info("Login failed for %s", mask_destination(payload.email_or_phone))
        raise AuthenticationError(INVALID_CREDENTIALS)

    # ── [Step 4] Token ───────────────────────────────────────────────────────
    user.last_login_at = _now_utc()
    await db.commit()

    token = create_token_for_user(user)
    logger.info("Login successful: user_id=%s", user.id)
    return AuthResult(token=token, user=user_profile(user, language))


__all__ = ["login_user", "INVALID_CREDENTIALS"]
