# streamhub/api/v1/routers/search.py
from __future__ import annotations

"""
Search API — StreamHub
======================

GET /search?q&type&limit&lang   movies / shows / published articles
GET /search/trending?limit      most frequent queries
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.api.responses import success_envelope
from streamhub.core.config import settings
from streamhub.core.dependencies import get_language
from streamhub.db.session import get_async_db
from streamhub.services.search_service import get_trending_searches, search_content

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("", summary="Search the catalog")
async def search(
    q: Optional[str] = Query(None, max_length=200, description="Substring to look for"),
    content_type: str = Query("all", alias="type", description="all | movie | show | article"),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    language: str = Depends(get_language),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    results = await search_content(db, q, language=language, content_type=content_type, limit=limit)
    return success_envelope(results)


@router.get("/trending", summary="Trending queries")
async def trending(
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    return success_envelope(await get_trending_searches(db, limit))


__all__ = ["router"]
