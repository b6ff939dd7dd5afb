# streamhub/core/jwt.py
from __future__ import annotations

"""
StreamHub — JWT helpers
=======================
- `decode_token` verifies signature + `exp` and requires `sub`/`jti`
- Distinct failures: `TokenExpiredError` vs `InvalidTokenError`
- Case-insensitive Bearer extraction with `authToken` cookie fallback

Notes
-----
- Token *creation* lives in `streamhub.core.security`.
- Tokens are stateless; there is no server-side revocation list.
"""

from typing import Any, Dict, Optional
import logging

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt

from streamhub.core.config import settings
from streamhub.core.exceptions import AuthenticationError, InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# 🔓 Decode JWT
# ─────────────────────────────────────────────────────────────
def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate an access token.

    Raises
    ------
    TokenExpiredError
        Signature valid, `exp` elapsed.
    InvalidTokenError
        Bad signature, malformed token, or missing `sub` / `jti`.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        logger.info("Token expired.")
        raise TokenExpiredError()
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise InvalidTokenError()

    if not payload.get("sub"):
        logger.warning("Missing sub in token payload.")
        raise InvalidTokenError("Token missing user ID")
    if not payload.get("jti"):
        logger.warning("Missing JTI in token.")
        raise InvalidTokenError("Token missing JTI")

    return payload


# ─────────────────────────────────────────────────────────────
# 📥 Extract token from Authorization header (or cookie)
# ─────────────────────────────────────────────────────────────
def get_bearer_token(request: Request, *, allow_cookie: bool = True) -> str:
    """Return the presented access token.

    Order: `Authorization: Bearer <token>` (scheme case-insensitive), then the
    session cookie when `allow_cookie` is set.
    """
    auth_header = request.headers.get("Authorization")
    if auth_header:
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            logger.warning("Malformed Authorization header.")
            raise AuthenticationError("Invalid authorization header format")
        return parts[1].strip()

    if allow_cookie:
        cookie = request.cookies.get(settings.AUTH_COOKIE_NAME)
        if cookie:
            return cookie

    raise AuthenticationError("Missing authorization header")


__all__ = [
    "decode_token",
    "get_bearer_token",
]
