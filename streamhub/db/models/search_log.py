from __future__ import annotations

"""
🔎 StreamHub — SearchLog
=======================

Append-only record of every search (raw query, language, result count).
Trending terms are a GROUP BY over `query`.
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, func

from streamhub.db.base_class import Base, UUIDPKMixin


class SearchLog(UUIDPKMixin, Base):
    __tablename__ = "search_logs"

    query = Column(String(500), nullable=False)
    language = Column(String(8), nullable=False)
    results_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_search_logs_query", "query"),
        Index("ix_search_logs_created_at", "created_at"),
    )
