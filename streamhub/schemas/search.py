from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional

from streamhub.schemas.common import CamelModel


class SearchContentType(str, Enum):
    all = "all"
    movie = "movie"
    show = "show"
    article = "article"


class MovieHit(CamelModel):
    id: str
    type: Literal["movie"] = "movie"
    title: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    rating: Optional[float] = None
    release_date: Optional[date] = None


class ShowHit(CamelModel):
    id: str
    type: Literal["show"] = "show"
    title: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    rating: Optional[float] = None
    total_seasons: int = 0


class ArticleHit(CamelModel):
    id: str
    type: Literal["article"] = "article"
    title: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    author: Optional[str] = None
    published_at: Optional[datetime] = None


class SearchResults(CamelModel):
    movies: List[MovieHit] = []
    shows: List[ShowHit] = []
    articles: List[ArticleHit] = []

    @property
    def total(self) -> int:
        return len(self.movies) + len(self.shows) + len(self.articles)


class TrendingQuery(CamelModel):
    query: str
    count: int
