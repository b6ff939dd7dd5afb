from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from streamhub.schemas.common import CamelModel, NamedRef


class GenreRef(NamedRef):
    pass


class GenreOut(CamelModel):
    id: str
    name: Optional[str] = None
    slug: str
    description: Optional[str] = None


class PlatformRef(NamedRef):
    pass


class PlatformAvailability(PlatformRef):
    is_available: bool = True


class PlatformWindow(PlatformAvailability):
    available_from: Optional[datetime] = None
    available_until: Optional[datetime] = None


# ── Movies ──────────────────────────────────────────────────
class MovieSummary(CamelModel):
    id: str
    title: Optional[str] = None
    slug: str
    description: Optional[str] = None
    release_date: Optional[date] = None
    duration: Optional[int] = None
    rating: Optional[float] = None
    poster_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    genre: Optional[GenreRef] = None
    platforms: List[PlatformAvailability] = []


class ReviewOut(CamelModel):
    id: str
    title: Optional[str] = None
    content: Optional[str] = None
    rating: Optional[float] = None
    author: Optional[str] = None


class MovieDetail(MovieSummary):
    trailer_url: Optional[str] = None
    director: Optional[str] = None
    cast: List[str] = []
    age_rating: Optional[str] = None
    average_user_rating: Optional[str] = None
    platforms: List[PlatformWindow] = []  # type: ignore[assignment]
    reviews: List[ReviewOut] = []


# ── Shows ───────────────────────────────────────────────────
class ShowSummary(CamelModel):
    id: str
    title: Optional[str] = None
    slug: str
    description: Optional[str] = None
    release_date: Optional[date] = None
    total_seasons: int = 0
    total_episodes: int = 0
    rating: Optional[float] = None
    poster_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    genre: Optional[GenreRef] = None
    platforms: List[PlatformRef] = []


class EpisodeOut(CamelModel):
    id: str
    episode_number: int
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    release_date: Optional[date] = None
    thumbnail_url: Optional[str] = None


class SeasonOut(CamelModel):
    id: str
    season_number: int
    title: Optional[str] = None
    episodes: List[EpisodeOut] = []


class ShowDetail(ShowSummary):
    backdrop_url: Optional[str] = None
    creator: Optional[str] = None
    age_rating: Optional[str] = None
    seasons: List[SeasonOut] = []


# ── Live TV ─────────────────────────────────────────────────
class LiveChannelOut(CamelModel):
    id: str
    name: Optional[str] = None
    slug: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    category: Optional[str] = None
    stream_url: Optional[str] = None
    platforms: List[PlatformRef] = []


class LiveChannelList(CamelModel):
    channels: List[LiveChannelOut]
