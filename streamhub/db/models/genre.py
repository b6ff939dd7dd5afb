from __future__ import annotations

"""
🏷️ StreamHub — Genre
===================

Bilingual catalog genre. Every movie and show belongs to exactly one genre.
"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class Genre(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "genres"
    __translated__ = ("name", "description")

    name_en = Column(String(120), nullable=False)
    name_ar = Column(String(120), nullable=True)
    slug = Column(String(140), nullable=False, unique=True, index=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    movies = relationship("Movie", back_populates="genre")
    shows = relationship("Show", back_populates="genre")
