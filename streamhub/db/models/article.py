from __future__ import annotations

"""
📰 StreamHub — Article
=====================

Editorial content (news, lists). Only published rows are searchable.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, false
from sqlalchemy.orm import relationship

from streamhub.db.base_class import Base, TimestampMixin, TranslatableMixin, UUIDPKMixin


class Article(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
    __tablename__ = "articles"
    __translated__ = ("title", "content", "excerpt")

    title_en = Column(String(300), nullable=False)
    title_ar = Column(String(300), nullable=True)
    slug = Column(String(320), nullable=False, unique=True, index=True)
    content_en = Column(Text, nullable=True)
    content_ar = Column(Text, nullable=True)
    excerpt_en = Column(String(500), nullable=True)
    excerpt_ar = Column(String(500), nullable=True)
    featured_image = Column(String(500), nullable=True)

    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    genre_id = Column(String(36), ForeignKey("genres.id", ondelete="SET NULL"), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False, server_default=false())
    published_at = Column(DateTime(timezone=True), nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (Index("ix_articles_published", "is_published", "published_at"),)

    author = relationship("User", lazy="selectin")
