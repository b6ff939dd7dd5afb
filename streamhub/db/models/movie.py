from __future__ import annotations

"""
🎬 StreamHub — Movie
===================

Feature film with bilingual text attributes.

Design highlights
-----------------
• Multilingual: `title`, `description`, `director`, `cast` (`cast_*` are JSON
  lists of names per language).
• Exactly one `Genre`; zero or more platforms through `PlatformMovie`.
• Listing hot path: `(is_available, release_date)` and `(genre_id, is_available)`.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    true,
)
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class Movie(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "movies"
    __translated__ = ("title", "description", "director", "cast")

    # ── Text (bilingual) ────────────────────────────────────────────────────
    title_en = Column(String(300), nullable=False)
    title_ar = Column(String(300), nullable=True)
    slug = Column(String(320), nullable=False, unique=True, index=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    director_en = Column(String(300), nullable=True)
    director_ar = Column(String(300), nullable=True)
    cast_en = Column(JSON, nullable=True)
    cast_ar = Column(JSON, nullable=True)

    # ── Facts ───────────────────────────────────────────────────────────────
    release_date = Column(Date, nullable=True)
    duration = Column(Integer, nullable=True, doc="Runtime in minutes")
    rating = Column(Float, nullable=True)
    age_rating = Column(String(16), nullable=True)

    # ── Media ───────────────────────────────────────────────────────────────
    poster_url = Column(String(500), nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    backdrop_url = Column(String(500), nullable=True)
    trailer_url = Column(String(500), nullable=True)

    # ── Catalog ─────────────────────────────────────────────────────────────
    genre_id = Column(String(36), ForeignKey("genres.id", ondelete="RESTRICT"), nullable=False, index=True)
    is_available = Column(Boolean, nullable=False, default=True, server_default=true())

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_movies_available_release", "is_available", "release_date"),
        Index("ix_movies_genre_available", "genre_id", "is_available"),
    )

    # ── Relationships ───────────────────────────────────────────────────────
    genre = relationship("Genre", back_populates="movies", lazy="selectin")
    platform_links = relationship(
        "PlatformMovie",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reviews = relationship(
        "Review",
        back_populates="movie",
        order_by="Review.created_at.desc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    ratings = relationship(
        "Rating",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
