from __future__ import annotations

"""
👤 StreamHub — User & UserPreferences
====================================

Accounts identified by **email and/or phone**. A password hash is optional:
OTP-only accounts never set one.

Design highlights
-----------------
• `email` and `phone` are each unique when present (NULLs never collide).
• A CHECK keeps at least one identifier on every row.
• Bilingual first/last names (`first_name_en` / `first_name_ar` …) resolved
  through the language rules like any other multilingual attribute.
• `UserPreferences` is a 1:1 row created together with the account.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
    false,
    true,
)
from sqlalchemy.orm import relationship

from streamhub.core.i18n import DEFAULT_LANGUAGE
from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class User(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "users"
    __translated__ = ("first_name", "last_name")

    # ─────────────── Identity ───────────────
    email = Column(String(320), unique=True, nullable=True, index=True)
    phone = Column(String(32), unique=True, nullable=True, index=True)
    password_hash = Column(String(255), nullable=True, doc="bcrypt hash; NULL for OTP-only accounts")

    # ─────────────── Profile ───────────────
    first_name_en = Column(String(100), nullable=True)
    first_name_ar = Column(String(100), nullable=True)
    last_name_en = Column(String(100), nullable=True)
    last_name_ar = Column(String(100), nullable=True)
    preferred_language = Column(String(8), nullable=False, default=DEFAULT_LANGUAGE, server_default=DEFAULT_LANGUAGE)

    # ─────────────── Status ───────────────
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    is_verified = Column(Boolean, nullable=False, default=False, server_default=false())
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("email IS NOT NULL OR phone IS NOT NULL", name="identifier_present"),
    )

    # ─────────────── Relationships ───────────────
    preferences = relationship(
        "UserPreferences",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    otp_records = relationship(
        "OTPRecord",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    watchlist_entries = relationship(
        "WatchlistEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserPreferences(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "user_preferences"

    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    favorite_genres = Column(JSON, nullable=False, default=list, doc="Genre ids")
    favorite_languages = Column(JSON, nullable=False, default=list)
    notifications_enabled = Column(Boolean, nullable=False, default=True, server_default=true())

    __mapper_args__ = {"eager_defaults": True}

    user = relationship("User", back_populates="preferences")
