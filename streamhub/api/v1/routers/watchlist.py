# streamhub/api/v1/routers/watchlist.py
from __future__ import annotations

"""
Watchlist API — StreamHub (authenticated)
=========================================

GET    /watchlist?status&page&limit   caller's entries, newest first
POST   /watchlist                     {contentId, contentType}        → 201
PATCH  /watchlist/{id}                {status, progress?}
DELETE /watchlist/{id}

Entries of other users are invisible: their ids answer 404.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.api.responses import paginated_envelope, success_envelope
from streamhub.core.config import settings
from streamhub.core.dependencies import get_current_user, get_language
from streamhub.db.models import User
from streamhub.db.session import get_async_db
from streamhub.schemas.watchlist import WatchlistAdd, WatchlistUpdate
from streamhub.security_headers import set_sensitive_cache
from streamhub.services import watchlist_service

router = APIRouter(prefix="/watchlist", tags=["Watchlist"])


@router.get("", summary="List my watchlist")
async def list_watchlist(
    response: Response,
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    language: str = Depends(get_language),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    set_sensitive_cache(response)
    result = await watchlist_service.list_watchlist(
        db,
        user.id,
        language=language,
        status=status_filter,
        page=page,
        limit=limit,
    )
    return paginated_envelope(result.items, page=result.page, limit=result.limit, total=result.total)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add to my watchlist")
async def add_to_watchlist(
    payload: WatchlistAdd = Body(...),
    language: str = Depends(get_language),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    item = await watchlist_service.add_to_watchlist(db, user.id, payload, language)
    return success_envelope(item, "Added to watchlist")


@router.patch("/{entry_id}", summary="Update status / progress")
async def update_watchlist_item(
    entry_id: str = Path(..., min_length=1, max_length=64),
    payload: WatchlistUpdate = Body(...),
    language: str = Depends(get_language),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    item = await watchlist_service.update_watchlist_item(db, user.id, entry_id, payload, language)
    return success_envelope(item, "Watchlist updated")


@router.delete("/{entry_id}", summary="Remove from my watchlist")
async def remove_from_watchlist(
    entry_id: str = Path(..., min_length=1, max_length=64),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> dict:
    await watchlist_service.remove_from_watchlist(db, user.id, entry_id)
    return success_envelope(None, "Removed from watchlist")


__all__ = ["router"]
