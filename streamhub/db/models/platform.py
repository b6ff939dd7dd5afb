from __future__ import annotations

"""
📺 StreamHub — StreamingPlatform
===============================

Services where content can be watched (Netflix, Prime Video, …). Links to
movies, shows and live channels live in `availability.py`.
"""

from sqlalchemy import Column, String, Text

from streamhub.db.base_class import Base, TimestampMixin, UUIDPKMixin


class StreamingPlatform(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "streaming_platforms"

    name = Column(String(120), nullable=False)
    slug = Column(String(140), nullable=False, unique=True, index=True)
    website = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    logo_url = Column(String(500), nullable=True)

    __mapper_args__ = {"eager_defaults": True}
