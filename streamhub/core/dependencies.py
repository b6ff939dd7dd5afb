# streamhub/core/dependencies.py
from __future__ import annotations

"""
Request dependencies — StreamHub
================================

- `get_language`: response language for the request
  (`?lang=` > `Accept-Language` > default).
- `get_current_user`: the active `User` behind the presented access token.

Token parsing and decoding live in `streamhub.core.jwt`; this module only
*uses* them.
"""

from typing import Optional
import logging

from fastapi import Depends, Header, Query, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.exceptions import AuthenticationError
from streamhub.core.i18n import resolve_language
from streamhub.core.jwt import decode_token, get_bearer_token
from streamhub.db.models import User
from streamhub.db.session import get_async_db

logger = logging.getLogger(__name__)

__all__ = [
    "get_language",
    "get_current_user",
]


# ──────────────────────────────────────────────────────────────
# 🌐 Language
# ──────────────────────────────────────────────────────────────
def get_language(
    lang: Optional[str] = Query(None, description="Response language (en|ar)"),
    accept_language: Optional[str] = Header(None, alias="Accept-Language"),
) -> str:
    """Never fails: unsupported or malformed input resolves to the default."""
    return resolve_language(lang, accept_language)


# ──────────────────────────────────────────────────────────────
# 👤 Current user
# ──────────────────────────────────────────────────────────────
async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
) -> User:
    """Resolve the authenticated, active user.

    Steps
    -----
    1) Extract the token (Bearer header, then `authToken` cookie).
    2) Decode + validate it (expired vs invalid are distinct errors).
    3) Load the user; unknown or deactivated accounts are rejected.
    """
    token = get_bearer_token(request)
    payload = decode_token(token)

    user = (await db.execute(select(User).where(User.id == payload["sub"]))).scalar_one_or_none()
    if user is None or not user.is_active:
        logger.warning("Token for unknown or inactive user: sub=%s", payload["sub"])
        raise AuthenticationError("User not found or inactive")

    request.state.user_id = user.id
    return user
