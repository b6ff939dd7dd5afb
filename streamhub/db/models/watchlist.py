from __future__ import annotations

"""
🔖 StreamHub — WatchlistEntry (user ↔ movie|show bookmark)
=========================================================

Tracks content a user saved, with a lightweight viewing state.

Design highlights
-----------------
• References **exactly one** of `movie_id` / `show_id` (CHECK constraint).
• One entry per user per title (`(user_id, movie_id)` and `(user_id, show_id)`
  unique; NULLs never collide).
• `status` is one of `to_watch`, `watching`, `watched`; `watched_progress`
  is a non-negative number (minutes or percent, client-defined).
• Target rows are eagerly loaded (`selectin`) since every listing projects
  their title/poster.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, UUIDPKMixin

WATCHLIST_STATUSES: tuple[str, ...] = ("to_watch", "watching", "watched")
WATCHLIST_CONTENT_TYPES: tuple[str, ...] = ("movie", "show")


class WatchlistEntry(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "watchlist_entries"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(String(36), ForeignKey("movies.id", ondelete="CASCADE"), nullable=True, index=True)
    show_id = Column(String(36), ForeignKey("shows.id", ondelete="CASCADE"), nullable=True, index=True)

    status = Column(String(16), nullable=False, default="to_watch", server_default="to_watch")
    watched_progress = Column(Float, nullable=False, default=0.0, server_default="0")

    __mapper_args__ = {"eager_defaults": True}

    # ── Constraints & indexes ───────────────────────────────────────────────
    __table_args__ = (
        CheckConstraint("(movie_id IS NULL) <> (show_id IS NULL)", name="exactly_one_target"),
        CheckConstraint("status IN ('to_watch', 'watching', 'watched')", name="status_valid"),
        CheckConstraint("watched_progress >= 0", name="progress_non_negative"),
        UniqueConstraint("user_id", "movie_id", name="uq_watchlist_entries_user_movie"),
        UniqueConstraint("user_id", "show_id", name="uq_watchlist_entries_user_show"),
        Index("ix_watchlist_entries_user_status", "user_id", "status"),
        Index("ix_watchlist_entries_user_created", "user_id", "created_at"),
    )

    # ── Relationships ───────────────────────────────────────────────────────
    user = relationship("User", back_populates="watchlist_entries")
    movie = relationship("Movie", lazy="selectin")
    show = relationship("Show", lazy="selectin")

    @property
    def content_type(self) -> str:
        return "movie" if self.movie_id is not None else "show"

    @property
    def content(self):
        return self.movie if self.movie_id is not None else self.show

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<WatchlistEntry id={self.id} user_id={self.user_id} "
            f"{self.content_type}={self.movie_id or self.show_id} status={self.status}>"
        )
