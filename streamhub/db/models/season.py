from __future__ import annotations

"""
🗂️ StreamHub — Season
====================

Ordered container of episodes within a show; `(show_id, season_number)` is
unique and is the sort key.
"""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class Season(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "seasons"
    __translated__ = ("title", "description")

    show_id = Column(String(36), ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True)
    season_number = Column(Integer, nullable=False)
    title_en = Column(String(300), nullable=True)
    title_ar = Column(String(300), nullable=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    release_date = Column(Date, nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        UniqueConstraint("show_id", "season_number", name="uq_seasons_show_number"),
        CheckConstraint("season_number >= 0", name="season_number_non_negative"),
    )

    show = relationship("Show", back_populates="seasons")
    episodes = relationship(
        "Episode",
        back_populates="season",
        order_by="Episode.episode_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
