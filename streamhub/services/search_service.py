# streamhub/services/search_service.py
from __future__ import annotations

"""
Search service
==============

- Case-insensitive substring match over both language variants of each
  entity's title and description/content (`ILIKE`, wildcards escaped).
- Each content type is searched independently and capped at `limit`.
- Every call appends one `SearchLog` row (raw query, language, total hits),
  zero hits included. If a sub-search fails the session is rolled back, the
  log row is still written with the hits gathered so far, and the original
  error propagates.
- Trending = log rows grouped by exact query text, most frequent first.
"""

from typing import Optional
import logging

from sqlalchemy import func, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import settings
from streamhub.core.exceptions import ValidationError
from streamhub.core.i18n import SUPPORTED_LANGUAGES, resolve_field
from streamhub.db.models import Article, Movie, SearchLog, Show
from streamhub.schemas.search import ArticleHit, MovieHit, SearchContentType, SearchResults, ShowHit, TrendingQuery

logger = logging.getLogger(__name__)


def _matches(model, fields: tuple[str, ...], needle: str):
    return or_(
        *[
            getattr(model, f"{field}_{lang}").icontains(needle, autoescape=True)
            for field in fields
            for lang in SUPPORTED_LANGUAGES
        ]
    )


def _parse_type(content_type: Optional[str]) -> SearchContentType:
    try:
        return SearchContentType(content_type or SearchContentType.all.value)
    except ValueError:
        raise ValidationError(
            f"Invalid content type '{content_type}'",
            details={"allowed": [t.value for t in SearchContentType]},
        )


async def _record(db: AsyncSession, query: str, language: str, results_count: int) -> None:
    db.add(SearchLog(query=query, language=language, results_count=results_count))
    await db.commit()


# ─────────────────────────────────────────────────────────────
# 🔎 Sub-searches
# ─────────────────────────────────────────────────────────────
async def _search_movies(db: AsyncSession, needle: str, language: str, limit: int) -> list[MovieHit]:
    stmt = select(Movie).where(_matches(Movie, ("title", "description"), needle)).order_by(Movie.title_en, Movie.id).limit(limit)
    return [
        MovieHit(
            id=m.id,
            title=resolve_field(m, "title", language),
            description=resolve_field(m, "description", language),
            poster_url=m.poster_url,
            rating=m.rating,
            release_date=m.release_date,
        )
        for m in (await db.execute(stmt)).scalars().all()
    ]


async def _search_shows(db: AsyncSession, needle: str, language: str, limit: int) -> list[ShowHit]:
    stmt = select(Show).where(_matches(Show, ("title", "description"), needle)).order_by(Show.title_en, Show.id).limit(limit)
    return [
        ShowHit(
            id=s.id,
            title=resolve_field(s, "title", language),
            description=resolve_field(s, "description", language),
            poster_url=s.poster_url,
            rating=s.rating,
            total_seasons=s.total_seasons or 0,
        )
        for s in (await db.execute(stmt)).scalars().all()
    ]


async def _search_articles(db: AsyncSession, needle: str, language: str, limit: int) -> list[ArticleHit]:
    stmt = (
        select(Article)
        .where(Article.is_published == true(), _matches(Article, ("title", "content"), needle))
        .order_by(Article.published_at.desc().nulls_last(), Article.id)
        .limit(limit)
    )
    return [
        ArticleHit(
            id=a.id,
            title=resolve_field(a, "title", language),
            excerpt=resolve_field(a, "excerpt", language),
            featured_image=a.featured_image,
            author=resolve_field(a.author, "first_name", language),
            published_at=a.published_at,
        )
        for a in (await db.execute(stmt)).scalars().all()
    ]


# ─────────────────────────────────────────────────────────────
# 🌐 Public API
# ─────────────────────────────────────────────────────────────
async def search_content(
    db: AsyncSession,
    query: Optional[str],
    *,
    language: str,
    content_type: Optional[str] = None,
    limit: Optional[int] = None,
) -> SearchResults:
    """
    Search movies, shows and published articles.

    Steps
    -----
    1) Validate query, type and limit.
    2) Run the requested sub-searches.
    3) Append the search log row (also on failure, then re-raise).
    """
    # ── [Step 1] Input ───────────────────────────────────────────────────────
    needle = (query or "").strip()
    if not needle:
        raise ValidationError("Search query is required")
    kind = _parse_type(content_type)
    cap = limit or settings.SEARCH_RESULT_LIMIT
    if cap < 1 or cap > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")

    # ── [Step 2] Sub-searches ────────────────────────────────────────────────
    results = SearchResults()
    try:
        if kind in (SearchContentType.all, SearchContentType.movie):
            results.movies = await _search_movies(db, needle, language, cap)
        if kind in (SearchContentType.all, SearchContentType.show):
            results.shows = await _search_shows(db, needle, language, cap)
        if kind in (SearchContentType.all, SearchContentType.article):
            results.articles = await _search_articles(db, needle, language, cap)
    except Exception:
        await db.rollback()
        logger.exception("Search failed for query=%r type=%s", needle, kind.value)
        try:
            await _record(db, query, language, results.total)
        except SQLAlchemyError:
            logger.exception("Could not write search log after a failed search")
        raise

    # ── [Step 3] Log ─────────────────────────────────────────────────────────
    await _record(db, query, language, results.total)
    logger.debug("Search %r (%s, %s) → %d hits", needle, kind.value, language, results.total)
    return results


async def get_trending_searches(db: AsyncSession, limit: Optional[int] = None) -> list[TrendingQuery]:
    """Top queries by frequency; equal counts ordered by query text."""
    n = limit or settings.TRENDING_LIMIT
    if n < 1 or n > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")

    hits = func.count(SearchLog.id).label("hits")
    stmt = (
        select(SearchLog.query, hits)
        .group_by(SearchLog.query)
        .order_by(hits.desc(), SearchLog.query.asc())
        .limit(n)
    )
    rows = (await db.execute(stmt)).all()
    return [TrendingQuery(query=text, count=int(total)) for text, total in rows]


__all__ = ["search_content", "get_trending_searches"]
