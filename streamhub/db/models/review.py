from __future__ import annotations

"""
📝 StreamHub — Review
====================

User-written review of a movie or a show (bilingual title/content). The
author is eagerly loaded because every serializer prints their name.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Float, ForeignKey, String, Text, false
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class Review(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "reviews"
    __translated__ = ("title", "content")

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(String(36), ForeignKey("movies.id", ondelete="CASCADE"), nullable=True, index=True)
    show_id = Column(String(36), ForeignKey("shows.id", ondelete="CASCADE"), nullable=True, index=True)

    title_en = Column(String(300), nullable=True)
    title_ar = Column(String(300), nullable=True)
    content_en = Column(Text, nullable=True)
    content_ar = Column(Text, nullable=True)
    rating = Column(Float, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False, server_default=false())

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("(movie_id IS NULL) <> (show_id IS NULL)", name="exactly_one_target"),
    )

    user = relationship("User", lazy="selectin")
    movie = relationship("Movie", back_populates="reviews")
