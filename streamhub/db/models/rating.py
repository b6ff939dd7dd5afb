from __future__ import annotations

"""
⭐ StreamHub — Rating
====================

Numeric score (0–10) a user gives a movie or show; one per user per title.
Movie detail averages these.
"""

from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Rating(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "ratings"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(String(36), ForeignKey("movies.id", ondelete="CASCADE"), nullable=True, index=True)
    show_id = Column(String(36), ForeignKey("shows.id", ondelete="CASCADE"), nullable=True, index=True)
    score = Column(Float, nullable=False)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 10", name="score_range"),
        CheckConstraint("(movie_id IS NULL) <> (show_id IS NULL)", name="exactly_one_target"),
        UniqueConstraint("user_id", "movie_id", name="uq_ratings_user_movie"),
        UniqueConstraint("user_id", "show_id", name="uq_ratings_user_show"),
    )

    movie = relationship("Movie", back_populates="ratings")
