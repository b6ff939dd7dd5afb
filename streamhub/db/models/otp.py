from __future__ import annotations

"""
🔑 StreamHub — OTPRecord (One-Time Password)
===========================================

Short-lived numeric codes used for passwordless sign-in / verification.

Design highlights
-----------------
• **Single use**: `used` flips to true exactly once (conditional UPDATE in the
  service layer), never back.
• **Multiple outstanding codes** per user are allowed; requesting a new code
  does not invalidate older live ones.
• Lookup index on `(user_id, code)`; cleanup index on `expires_at`.

Notes
-----
• No `expires_at > created_at` CHECK so tests can insert already-expired rows.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    false,
    func,
)
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, UUIDPKMixin


class OTPRecord(UUIDPKMixin, Base):
    """One-time code bound to a user."""

    __tablename__ = "otp_records"

    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    code = Column(String(10), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, doc="Expiration timestamp (UTC)")
    used = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_otp_records_user_code", "user_id", "code"),
        Index("ix_otp_records_expires_at", "expires_at"),
    )

    user = relationship("User", back_populates="otp_records")

    # ─────────────── Helpers ───────────────
    @property
    def expired(self) -> bool:
        """True when the code is past `expires_at` (naive values are UTC)."""
        exp = self.expires_at
        if exp is None:
            return True
        if exp.tzinfo is None:
            exp = exp.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) >= exp

    @property
    def is_active(self) -> bool:
        return (not self.used) and (not self.expired)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<OTPRecord id={self.id} user_id={self.user_id} used={self.used}>"
