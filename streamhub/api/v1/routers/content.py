# streamhub/api/v1/routers/content.py
from __future__ import annotations

"""
Catalog API — StreamHub
=======================

GET /content/movies              paginated movie summaries
GET /content/movies/{id|slug}    movie detail
GET /content/shows               paginated show summaries
GET /content/shows/{id|slug}     show detail with seasons → episodes
GET /content/live-tv             live channels
GET /content/genres              genres

Every route resolves the response language (`?lang=` > `Accept-Language`).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.api.responses import paginated_envelope, success_envelope
from streamhub.core.config import settings
from streamhub.core.dependencies import get_language
from streamhub.db.session import get_async_db
from streamhub.schemas.content import LiveChannelList
from streamhub.services import content_service

router = APIRouter(prefix="/content", tags=["Content"])


# ──────────────────────────────────────────────────────────────
# 🎬 Movies
# ──────────────────────────────────────────────────────────────
@router.get("/movies", summary="List movies")
async def list_movies(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    genre_id: Optional[str] = Query(None, alias="genreId"),
    sort_by: str = Query("releaseDate", alias="sortBy"),
    available: bool = Query(True),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    result = await content_service.list_movies(
        db,
        language=language,
        page=page,
        limit=limit,
        genre_id=genre_id,
        sort_by=sort_by,
        available=available,
    )
    return paginated_envelope(result.items, page=result.page, limit=result.limit, total=result.total)


@router.get("/movies/{identifier}", summary="Movie detail by id or slug")
async def movie_detail(
    identifier: str = Path(..., min_length=1, max_length=320),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    return success_envelope(await content_service.get_movie_detail(db, identifier, language))


# ──────────────────────────────────────────────────────────────
# 📺 Shows
# ──────────────────────────────────────────────────────────────
@router.get("/shows", summary="List shows")
async def list_shows(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    genre_id: Optional[str] = Query(None, alias="genreId"),
    sort_by: str = Query("releaseDate", alias="sortBy"),
    available: bool = Query(True),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    result = await content_service.list_shows(
        db,
        language=language,
        page=page,
        limit=limit,
        genre_id=genre_id,
        sort_by=sort_by,
        available=available,
    )
    return paginated_envelope(result.items, page=result.page, limit=result.limit, total=result.total)


@router.get("/shows/{identifier}", summary="Show detail by id or slug")
async def show_detail(
    identifier: str = Path(..., min_length=1, max_length=320),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    return success_envelope(await content_service.get_show_detail(db, identifier, language))


# ──────────────────────────────────────────────────────────────
# 📡 Live TV · 🏷️ Genres
# ──────────────────────────────────────────────────────────────
@router.get("/live-tv", summary="Live channels")
async def live_tv(
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    channels = await content_service.list_live_channels(db, language)
    return success_envelope(LiveChannelList(channels=channels))


@router.get("/genres", summary="Genres")
async def genres(
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    return success_envelope(await content_service.list_genres(db, language))


__all__ = ["router"]
