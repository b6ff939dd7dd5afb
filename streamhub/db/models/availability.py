from __future__ import annotations

"""
🗓️ StreamHub — Platform availability links
=========================================

Association rows between a `StreamingPlatform` and a piece of content, each
carrying its own availability flag and optional window.

Design highlights
-----------------
• One table per content kind (movie / show / live channel) so every FK is
  real and cascades cleanly.
• `(platform_id, <content>_id)` unique: a platform lists a title once.
• `platform` is eagerly loaded (`selectin`): every serializer needs its name.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    true,
)
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, UUIDPKMixin


class _PlatformLinkMixin:
    is_available = Column(Boolean, nullable=False, default=True, server_default=true())
    available_from = Column(DateTime(timezone=True), nullable=True)
    available_until = Column(DateTime(timezone=True), nullable=True)


class PlatformMovie(UUIDPKMixin, TimestampMixin, _PlatformLinkMixin, Base):
    __tablename__ = "platform_movies"

    platform_id = Column(String(36), ForeignKey("streaming_platforms.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(String(36), ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)

    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (UniqueConstraint("platform_id", "movie_id", name="uq_platform_movies_platform_movie"),)

    platform = relationship("StreamingPlatform", lazy="selectin")
    movie = relationship("Movie", back_populates="platform_links")


class PlatformShow(UUIDPKMixin, TimestampMixin, _PlatformLinkMixin, Base):
    __tablename__ = "platform_shows"

    platform_id = Column(String(36), ForeignKey("streaming_platforms.id", ondelete="CASCADE"), nullable=False, index=True)
    show_id = Column(String(36), ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True)

    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (UniqueConstraint("platform_id", "show_id", name="uq_platform_shows_platform_show"),)

    platform = relationship("StreamingPlatform", lazy="selectin")
    show = relationship("Show", back_populates="platform_links")


class PlatformLiveTV(UUIDPKMixin, TimestampMixin, _PlatformLinkMixin, Base):
    __tablename__ = "platform_live_tv"

    platform_id = Column(String(36), ForeignKey("streaming_platforms.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_id = Column(String(36), ForeignKey("live_tv_channels.id", ondelete="CASCADE"), nullable=False, index=True)

    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (UniqueConstraint("platform_id", "channel_id", name="uq_platform_live_tv_platform_channel"),)

    platform = relationship("StreamingPlatform", lazy="selectin")
    channel = relationship("LiveTVChannel", back_populates="platform_links")
