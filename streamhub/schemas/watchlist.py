from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from streamhub.schemas.common import CamelModel


class WatchlistAdd(CamelModel):
    content_id: str = Field(..., min_length=1, max_length=64)
    content_type: str = Field(..., max_length=16)


class WatchlistUpdate(CamelModel):
    status: str = Field(..., max_length=16)
    progress: Optional[float] = Field(None, ge=0)


class WatchlistItemOut(CamelModel):
    id: str
    content_id: str
    content_type: str
    title: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    status: str
    watched_progress: float = 0.0
    added_at: Optional[datetime] = None
