# streamhub/core/security.py
from __future__ import annotations

"""
StreamHub — Credential helpers
==============================
- Salted, slow password hashing (Passlib bcrypt, cost from settings)
- `verify_password` that never raises: any failure is a non-match
- Signed access-token creation (python-jose, HS*), claims:
  `sub` (user id), `email`, `phone`, `iat`, `exp`, `jti`
- Numeric OTP generation with a CSPRNG

Decoding lives in `streamhub.core.jwt`; this module only *creates* tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4
import logging
import secrets
import string

from jose import jwt
from passlib.context import CryptContext

from streamhub.core.config import settings

# ───────────────────────────────────────────────
# 🔐 Security Constants and Setup
# ───────────────────────────────────────────────
ALGORITHM: str = settings.JWT_ALGORITHM

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_BCRYPT_ROUNDS,
)
logger = logging.getLogger(__name__)


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted hash using Passlib's bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: Optional[str], hashed_password: Optional[str]) -> bool:
    """Constant-time verify; missing input or a broken hash is simply `False`."""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.warning("Password verification failed internally: %s", type(e).__name__)
        return False


# ───────────────────────────────────────────────
# 🪪 JWT: Access Token Generation
# ───────────────────────────────────────────────
def create_access_token(
    user_id: str,
    *,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed access token.

    `now` exists for callers that need a fixed clock (tests, backfills);
    production code leaves it unset.
    """
    issued = now or datetime.now(timezone.utc)
    expire = issued + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "phone": phone,
        "iat": issued,
        "exp": expire,
        "jti": str(uuid4()),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=ALGORITHM)


def create_token_for_user(user: Any) -> str:
    """Access token for a `User` row."""
    return create_access_token(user.id, email=user.email, phone=user.phone)


# ───────────────────────────────────────────────
# 🔢 OTP codes
# ───────────────────────────────────────────────
def generate_otp(length: Optional[int] = None) -> str:
    """Uniform-random numeric code, zero-padded by construction."""
    n = length or settings.OTP_LENGTH
    return "".join(secrets.choice(string.digits) for _ in range(n))


__all__ = [
    "pwd_context",
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "create_token_for_user",
    "generate_otp",
]
