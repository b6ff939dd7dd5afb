# streamhub/services/auth/identity.py
from __future__ import annotations

"""
Identity helpers shared by the auth flows
=========================================
- Identifier normalization (emails are stored lower-cased, phones as given)
- Single-query user lookup by *either* identifier
- Public user projection (never includes the password hash)
"""

from typing import Optional
import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.i18n import resolve_field
from streamhub.db.models import User
from streamhub.schemas.auth import UserProfile

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> Optional[str]:
    email = (email or "").strip().lower()
    return email or None


def _norm_identifier(value: Optional[str]) -> str:
    return (value or "").strip()


async def find_user_by_identifier(db: AsyncSession, identifier: Optional[str]) -> Optional[User]:
    """Exact match on email (case-insensitive by normalization) or phone."""
    ident = _norm_identifier(identifier)
    if not ident:
        return None
    stmt = select(User).where(or_(User.email == normalize_email(ident), User.phone == ident)).limit(1)
    return (await db.execute(stmt)).scalar_one_or_none()


def user_profile(user: User, language: str) -> UserProfile:
    return UserProfile(
        id=user.id,
        email=user.email,
        phone=user.phone,
        first_name=resolve_field(user, "first_name", language),
        last_name=resolve_field(user, "last_name", language),
        preferred_language=user.preferred_language,
        is_verified=bool(user.is_verified),
    )


__all__ = [
    "normalize_email",
    "find_user_by_identifier",
    "user_profile",
]
