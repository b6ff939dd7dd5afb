# streamhub/services/auth/otp_service.py
from __future__ import annotations

"""
OTP service — passwordless sign-in
==================================

Request
-------
- Looks the user up by phone or email; unknown → `AuthenticationError`.
- Persists a fresh numeric code (`OTP_LENGTH` digits, `OTP_TTL_MINUTES` TTL).
  Earlier live codes stay valid.
- Hands the code to the injected `NotificationDispatcher` *after* the commit.
  A failed delivery is logged and never fails the request.

Verify
------
- Any unused, unexpired record of the user matching the code is accepted.
- Consumption is a conditional `UPDATE … WHERE used = false`; a concurrent
  second verification of the same code matches zero rows and is rejected.
- Marking the code used and marking the user verified are committed together
  in the request's transaction.
"""

from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import false, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import settings
from streamhub.core.exceptions import AuthenticationError, ValidationError
from streamhub.core.security import create_token_for_user, generate_otp
from streamhub.db.models import OTPRecord
from streamhub.schemas.auth import AuthResult, OTPRequest, OTPRequested, OTPVerifyRequest
from streamhub.services.auth.identity import find_user_by_identifier, user_profile
from streamhub.services.notifications import NotificationDispatcher, mask_destination

logger = logging.getLogger(__name__)

INVALID_OTP = "Invalid or expired OTP"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def otp_ttl() -> timedelta:
    return timedelta(minutes=settings.OTP_TTL_MINUTES)


async def _deliver(notifier: NotificationDispatcher, code: str, destination: str) -> None:
    try:
        delivered = await notifier.send(code, destination)
    except Exception:
        logger.exception("OTP delivery raised for %s", mask_destination(destination))
        return
    if not delivered:
        logger.warning("OTP delivery failed for %s", mask_destination(destination))


# ─────────────────────────────────────────────────────────────
# 📨 Request
# ─────────────────────────────────────────────────────────────
async def request_otp(payload: OTPRequest, db: AsyncSession, notifier: NotificationDispatcher) -> OTPRequested:
    """
    Issue a one-time code.

    Steps
    -----
    1) Require the identifier and resolve the user.
    2) Persist the code with its expiry.
    3) Best-effort delivery.
    """
    identifier = (payload.phone_or_email or "").strip()
    if not identifier:
        raise ValidationError("Phone number or email is required")

    # ── [Step 1] User ────────────────────────────────────────────────────────
    user = await find_user_by_identifier(db, identifier)
    if user is None:
        raise AuthenticationError("User not found")

    # ── [Step 2] Persist ─────────────────────────────────────────────────────
    ttl = otp_ttl()
    code = generate_otp()
    db.add(OTPRecord(user_id=user.id, code=code, expires_at=_now_utc() + ttl, used=False))
    await db.commit()
    logger.info("OTP issued: user_id=%s", user.id)

    # ── [Step 3] Deliver ─────────────────────────────────────────────────────
    await _deliver(notifier, code, identifier)

    return OTPRequested(expires_in=int(ttl.total_seconds()))


# ─────────────────────────────────────────────────────────────
# ✅ Verify
# ─────────────────────────────────────────────────────────────
async def verify_otp(payload: OTPVerifyRequest, db: AsyncSession, language: str) -> AuthResult:
    """
    Consume a code and sign the user in.

    Steps
    -----
    1) Require identifier + code and resolve the user.
    2) Find a live matching record.
    3) Consume it (conditional UPDATE) and mark the user verified.
    4) Issue the token.
    """
    identifier = (payload.phone_or_email or "").strip()
    code = (payload.otp or "").strip()
    if not identifier or not code:
        raise ValidationError("Phone/email and OTP are required")

    # ── [Step 1] User ────────────────────────────────────────────────────────
    user = await find_user_by_identifier(db, identifier)
    if user is None:
        raise AuthenticationError("User not found")

    # ── [Step 2] Live record ─────────────────────────────────────────────────
    now = _now_utc()
    record = (
        await db.execute(
            select(OTPRecord)
            .where(
                OTPRecord.user_id == user.id,
                OTPRecord.code == code,
                OTPRecord.used == false(),
                OTPRecord.expires_at > now,
            )
            .order_by(OTPRecord.created_at.desc())
            .limit(1)
        )
    ).scalar_one_or_none()
    if record is None:
        logger.info("OTP rejected: user_id=%s", user.id)
        raise AuthenticationError(INVALID_OTP)

    # ── [Step 3] Consume + verify ────────────────────────────────────────────
    result = await db.execute(
        update(OTPRecord)
        .where(OTPRecord.id == record.id, OTPRecord.used == false())
        .values(used=True)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        logger.info("OTP already consumed: user_id=%s", user.id)
        raise AuthenticationError(INVALID_OTP)

    user.is_verified = True
    user.last_login_at = now
    await db.commit()

    # ── [Step 4] Token ───────────────────────────────────────────────────────
    token = create_token_for_user(user)
    logger.info("OTP verified: user_id=%s", user.id)
    return AuthResult(token=token, user=user_profile(user, language))


__all__ = ["request_otp", "verify_otp", "otp_ttl", "INVALID_OTP"]
