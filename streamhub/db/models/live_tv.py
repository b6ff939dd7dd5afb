from __future__ import annotations

"""
📡 StreamHub — LiveTVChannel
===========================

Linear channels; only rows with `is_live = true` are listed.
"""

from sqlalchemy import Boolean, Column, Index, String, Text, false
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class LiveTVChannel(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "live_tv_channels"
    __translated__ = ("name", "description", "category")

    name_en = Column(String(200), nullable=False)
    name_ar = Column(String(200), nullable=True)
    slug = Column(String(220), nullable=False, unique=True, index=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    category_en = Column(String(100), nullable=True)
    category_ar = Column(String(100), nullable=True)
    logo_url = Column(String(500), nullable=True)
    stream_url = Column(String(1000), nullable=True)
    is_live = Column(Boolean, nullable=False, default=False, server_default=false())

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (Index("ix_live_tv_channels_is_live", "is_live"),)

    platform_links = relationship(
        "PlatformLiveTV",
        back_populates="channel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
