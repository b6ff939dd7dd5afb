# streamhub/services/auth/registration_service.py
from __future__ import annotations

"""
Registration service
====================

Creates an account identified by **email and/or phone**.

Key behaviors
-------------
- At least one identifier is required (`ValidationError`).
- An existing account holding *either* identifier is a `ConflictError`; the
  unique constraints catch the race between the check and the insert.
- The password is optional: OTP-only accounts are stored without a hash.
- A default `UserPreferences` row is created with the account.
- No token is issued; callers log in or verify an OTP afterwards.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.exceptions import ConflictError, ValidationError
from streamhub.core.i18n import DEFAULT_LANGUAGE
from streamhub.core.security import get_password_hash
from streamhub.db.models import User, UserPreferences
from streamhub.schemas.auth import RegisteredUser, RegisterRequest
from streamhub.services.auth.identity import normalize_email
from streamhub.services.notifications import mask_destination

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT = "User with this email or phone already exists"


async def register_user(payload: RegisterRequest, db: AsyncSession) -> RegisteredUser:
    """
    Register a new, unverified account.

    Steps
    -----
    1) Require email or phone.
    2) Reject when any account already owns the email or the phone.
    3) Hash the password when one was supplied.
    4) Insert user + default preferences in one commit.
    """
    email = normalize_email(payload.email)
    phone = payload.phone

    # ── [Step 1] Identifier present ──────────────────────────────────────────
    if not email and not phone:
        raise ValidationError("Email or phone is required")

    # ── [Step 2] Duplicate check (email OR phone) ────────────────────────────
    clauses = []
    if email:
        clauses.append(User.email == email)
    if phone:
        clauses.append(User.phone == phone)
    existing = (await db.execute(select(User.id).where(or_(*clauses)).limit(1))).scalar_one_or_none()
    if existing is not None:
        logger.info("Registration rejected, identifier in use: %s", mask_destination(email or phone))
        raise ConflictError(DUPLICATE_ACCOUNT)

    # ── [Step 3] Credentials ─────────────────────────────────────────────────
    password_hash = get_password_hash(payload.password) if payload.password else None

    # ── [Step 4] Persist ─────────────────────────────────────────────────────
    user = User(
        email=email,
        phone=phone,
        password_hash=password_hash,
        first_name_en=payload.first_name,
        last_name_en=payload.last_name,
        preferred_language=DEFAULT_LANGUAGE,
        is_active=True,
        is_verified=False,
    )
    user.preferences = UserPreferences(favorite_genres=[], favorite_languages=[])
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Registration lost a race on a unique identifier: %s", mask_destination(email or phone))
        raise ConflictError(DUPLICATE_ACCOUNT)

    logger.info("User registered: id=%s otp_only=%s", user.id, password_hash is None)
    return RegisteredUser(id=user.id, email=user.email, phone=user.phone)


__all__ = ["register_user", "DUPLICATE_ACCOUNT"]
