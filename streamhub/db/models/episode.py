from __future__ import annotations

"""
🎞️ StreamHub — Episode
=====================

Single episode of a season, ordered by `episode_number` (unique per season).
"""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class Episode(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "episodes"
    __translated__ = ("title", "description")

    season_id = Column(String(36), ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_number = Column(Integer, nullable=False)
    title_en = Column(String(300), nullable=False)
    title_ar = Column(String(300), nullable=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    duration = Column(Integer, nullable=True, doc="Runtime in minutes")
    release_date = Column(Date, nullable=True)
    thumbnail_url = Column(String(500), nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        UniqueConstraint("season_id", "episode_number", name="uq_episodes_season_number"),
        CheckConstraint("episode_number >= 0", name="episode_number_non_negative"),
    )

    season = relationship("Season", back_populates="episodes")
