# streamhub/services/content_service.py
from __future__ import annotations

"""
Catalog service — movies, shows, live TV, genres
================================================

Read-only browsing of the catalog. Every projection goes through the
language rules (`streamhub.core.i18n`), nested rows included.

Listing
-------
- Equality filters on availability (default: available only) and genre.
- Descending sort on `releaseDate` (default), `rating`, `title` or
  `createdAt`; ties broken by id so pages never overlap.
- `skip = (page - 1) * limit`, `take = limit`; the count uses the same filters.

Detail
------
- Lookup by primary id **or** slug (both unique, at most one match).
- Movie detail carries the mean user rating (one decimal, as a string) or
  `None` when nobody rated it yet, and the five most recent reviews.
- Show detail nests seasons by number, each with episodes by number.
"""

from typing import Any, Optional, Sequence
import logging

from sqlalchemy import func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from streamhub.core.config import settings
from streamhub.core.exceptions import NotFoundError, ValidationError
from streamhub.core.i18n import pick, resolve_field
from streamhub.db.models import Genre, LiveTVChannel, Movie, PlatformMovie, Rating, Season, Show
from streamhub.schemas.common import Page
from streamhub.schemas.content import (
    EpisodeOut,
    GenreOut,
    GenreRef,
    LiveChannelOut,
    MovieDetail,
    MovieSummary,
    PlatformAvailability,
    PlatformRef,
    PlatformWindow,
    ReviewOut,
    SeasonOut,
    ShowDetail,
    ShowSummary,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = ("releaseDate", "rating", "title", "createdAt")
DEFAULT_SORT = "releaseDate"
REVIEWS_ON_DETAIL = 5


# ─────────────────────────────────────────────────────────────
# 🔧 Helpers
# ─────────────────────────────────────────────────────────────
def check_paging(page: int, limit: int) -> None:
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1 or limit > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")


def _sort_column(model: Any, sort_by: Optional[str]):
    key = sort_by or DEFAULT_SORT
    columns = {
        "releaseDate": model.release_date,
        "rating": model.rating,
        "title": model.title_en,
        "createdAt": model.created_at,
    }
    if key not in columns:
        raise ValidationError(
            f"Invalid sortBy '{key}'",
            details={"allowed": list(SORT_FIELDS)},
        )
    return columns[key]


def _genre_ref(genre: Optional[Genre], language: str) -> Optional[GenreRef]:
    if genre is None:
        return None
    return GenreRef(id=genre.id, name=resolve_field(genre, "name", language))


def average_rating(scores: Sequence[float]) -> Optional[str]:
    """Mean score to one decimal (`"8.0"`), `None` for no scores."""
    if not scores:
        return None
    return f"{sum(scores) / len(scores):.1f}"


async def _paginate(db: AsyncSession, model: Any, *, filters: list, order_by: list, options: list, page: int, limit: int):
    total = (await db.execute(select(func.count()).select_from(model).where(*filters))).scalar_one()
    stmt = (
        select(model)
        .where(*filters)
        .options(*options)
        .order_by(*order_by)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).scalars().all()
    return rows, int(total)


# ─────────────────────────────────────────────────────────────
# 🎬 Movies
# ─────────────────────────────────────────────────────────────
def movie_summary(movie: Movie, language: str) -> MovieSummary:
    return MovieSummary(
        id=movie.id,
        title=resolve_field(movie, "title", language),
        slug=movie.slug,
        description=resolve_field(movie, "description", language),
        release_date=movie.release_date,
        duration=movie.duration,
        rating=movie.rating,
        poster_url=movie.poster_url,
        thumbnail_url=movie.thumbnail_url,
        backdrop_url=movie.backdrop_url,
        genre=_genre_ref(movie.genre, language),
        platforms=[
            PlatformAvailability(id=link.platform.id, name=link.platform.name, is_available=link.is_available)
            for link in movie.platform_links
        ],
    )


async def list_movies(
    db: AsyncSession,
    *,
    language: str,
    page: int = 1,
    limit: int = 20,
    genre_id: Optional[str] = None,
    sort_by: Optional[str] = None,
    available: bool = True,
) -> Page[MovieSummary]:
    check_paging(page, limit)
    sort_col = _sort_column(Movie, sort_by)

    filters = [Movie.is_available == available]
    if genre_id:
        filters.append(Movie.genre_id == genre_id)

    rows, total = await _paginate(
        db,
        Movie,
        filters=filters,
        order_by=[sort_col.desc().nulls_last(), Movie.id.desc()],
        options=[selectinload(Movie.platform_links)],
        page=page,
        limit=limit,
    )
    return Page[MovieSummary](items=[movie_summary(m, language) for m in rows], page=page, limit=limit, total=total)


async def get_movie_detail(db: AsyncSession, identifier: str, language: str) -> MovieDetail:
    """Movie by id or slug, with platforms, recent reviews and the mean user rating."""
    stmt = (
        select(Movie)
        .where(or_(Movie.id == identifier, Movie.slug == identifier))
        .options(
            selectinload(Movie.platform_links).selectinload(PlatformMovie.platform),
            selectinload(Movie.reviews),
        )
        .limit(1)
    )
    movie = (await db.execute(stmt)).scalar_one_or_none()
    if movie is None:
        raise NotFoundError("Movie")

    scores = (await db.execute(select(Rating.score).where(Rating.movie_id == movie.id))).scalars().all()

    base = movie_summary(movie, language).model_dump()
    base["platforms"] = [
        PlatformWindow(
            id=link.platform.id,
            name=link.platform.name,
            is_available=link.is_available,
            available_from=link.available_from,
            available_until=link.available_until,
        )
        for link in movie.platform_links
    ]
    return MovieDetail(
        **base,
        trailer_url=movie.trailer_url,
        director=resolve_field(movie, "director", language),
        cast=list(pick(movie.translations("cast"), language) or []),
        age_rating=movie.age_rating,
        average_user_rating=average_rating(scores),
        reviews=[
            ReviewOut(
                id=review.id,
                title=resolve_field(review, "title", language),
                content=resolve_field(review, "content", language),
                rating=review.rating,
                author=resolve_field(review.user, "first_name", language),
            )
            for review in movie.reviews[:REVIEWS_ON_DETAIL]
        ],
    )


# ─────────────────────────────────────────────────────────────
# 📺 Shows
# ─────────────────────────────────────────────────────────────
def show_summary(show: Show, language: str) -> ShowSummary:
    return ShowSummary(
        id=show.id,
        title=resolve_field(show, "title", language),
        slug=show.slug,
        description=resolve_field(show, "description", language),
        release_date=show.release_date,
        total_seasons=show.total_seasons or 0,
        total_episodes=show.total_episodes or 0,
        rating=show.rating,
        poster_url=show.poster_url,
        thumbnail_url=show.thumbnail_url,
        genre=_genre_ref(show.genre, language),
        platforms=[PlatformRef(id=link.platform.id, name=link.platform.name) for link in show.platform_links],
    )


async def list_shows(
    db: AsyncSession,
    *,
    language: str,
    page: int = 1,
    limit: int = 20,
    genre_id: Optional[str] = None,
    sort_by: Optional[str] = None,
    available: bool = True,
) -> Page[ShowSummary]:
    check_paging(page, limit)
    sort_col = _sort_column(Show, sort_by)

    filters = [Show.is_available == available]
    if genre_id:
        filters.append(Show.genre_id == genre_id)

    rows, total = await _paginate(
        db,
        Show,
        filters=filters,
        order_by=[sort_col.desc().nulls_last(), Show.id.desc()],
        options=[selectinload(Show.platform_links)],
        page=page,
        limit=limit,
    )
    return Page[ShowSummary](items=[show_summary(s, language) for s in rows], page=page, limit=limit, total=total)


async def get_show_detail(db: AsyncSession, identifier: str, language: str) -> ShowDetail:
    """Show by id or slug with ordered seasons → episodes."""
    stmt = (
        select(Show)
        .where(or_(Show.id == identifier, Show.slug == identifier))
        .options(
            selectinload(Show.platform_links),
            selectinload(Show.seasons).selectinload(Season.episodes),
        )
        .limit(1)
    )
    show = (await db.execute(stmt)).scalar_one_or_none()
    if show is None:
        raise NotFoundError("Show")

    return ShowDetail(
        **show_summary(show, language).model_dump(),
        backdrop_url=show.backdrop_url,
        creator=resolve_field(show, "creator", language),
        age_rating=show.age_rating,
        seasons=[
            SeasonOut(
                id=season.id,
                season_number=season.season_number,
                title=resolve_field(season, "title", language),
                episodes=[
                    EpisodeOut(
                        id=ep.id,
                        episode_number=ep.episode_number,
                        title=resolve_field(ep, "title", language),
                        description=resolve_field(ep, "description", language),
                        duration=ep.duration,
                        release_date=ep.release_date,
                        thumbnail_url=ep.thumbnail_url,
                    )
                    for ep in season.episodes
                ],
            )
            for season in show.seasons
        ],
    )


# ─────────────────────────────────────────────────────────────
# 📡 Live TV
# ─────────────────────────────────────────────────────────────
async def list_live_channels(db: AsyncSession, language: str, limit: Optional[int] = None) -> list[LiveChannelOut]:
    """Currently-live channels only, capped at `LIVE_TV_LIMIT`."""
    stmt = (
        select(LiveTVChannel)
        .where(LiveTVChannel.is_live == true())
        .options(selectinload(LiveTVChannel.platform_links))
        .order_by(LiveTVChannel.name_en.asc(), LiveTVChannel.id.asc())
        .limit(limit or settings.LIVE_TV_LIMIT)
    )
    channels = (await db.execute(stmt)).scalars().all()
    return [
        LiveChannelOut(
            id=ch.id,
            name=resolve_field(ch, "name", language),
            slug=ch.slug,
            description=resolve_field(ch, "description", language),
            logo_url=ch.logo_url,
            category=resolve_field(ch, "category", language),
            stream_url=ch.stream_url,
            platforms=[PlatformRef(id=link.platform.id, name=link.platform.name) for link in ch.platform_links],
        )
        for ch in channels
    ]


# ─────────────────────────────────────────────────────────────
# 🏷️ Genres
# ─────────────────────────────────────────────────────────────
async def list_genres(db: AsyncSession, language: str) -> list[GenreOut]:
    genres = (await db.execute(select(Genre).order_by(Genre.name_en.asc()))).scalars().all()
    return [
        GenreOut(
            id=g.id,
            name=resolve_field(g, "name", language),
            slug=g.slug,
            description=resolve_field(g, "description", language),
        )
        for g in genres
    ]


__all__ = [
    "SORT_FIELDS",
    "check_paging",
    "average_rating",
    "movie_summary",
    "show_summary",
    "list_movies",
    "get_movie_detail",
    "list_shows",
    "get_show_detail",
    "list_live_channels",
    "list_genres",
]
