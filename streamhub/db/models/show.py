from __future__ import annotations

"""
📼 StreamHub — Show (series)
===========================

Episodic title owning an ordered list of `Season`s, each owning ordered
`Episode`s. Same bilingual layout and catalog links as `Movie`.
"""

from sqlalchemy import (
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


class Show(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "shows"
    __translated__ = ("title", "description", "creator")

    title_en = Column(String(300), nullable=False)
    title_ar = Column(String(300), nullable=True)
    slug = Column(String(320), nullable=False, unique=True, index=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    creator_en = Column(String(300), nullable=True)
    creator_ar = Column(String(300), nullable=True)

    release_date = Column(Date, nullable=True)
    total_seasons = Column(Integer, nullable=False, default=0, server_default="0")
    total_episodes = Column(Integer, nullable=False, default=0, server_default="0")
    rating = Column(Float, nullable=True)
    age_rating = Column(String(16), nullable=True)

    poster_url = Column(String(500), nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    backdrop_url = Column(String(500), nullable=True)

    genre_id = Column(String(36), ForeignKey("genres.id", ondelete="RESTRICT"), nullable=False, index=True)
    is_available = Column(Boolean, nullable=False, default=True, server_default=true())

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_shows_available_release", "is_available", "release_date"),
        Index("ix_shows_genre_available", "genre_id", "is_available"),
    )

    genre = relationship("Genre", back_populates="shows", lazy="selectin")
    seasons = relationship(
        "Season",
        back_populates="show",
        order_by="Season.season_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    platform_links = relationship(
        "PlatformShow",
        back_populates="show",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
