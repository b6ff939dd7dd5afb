# streamhub/services/watchlist_service.py
from __future__ import annotations

"""
Watchlist service
=================

Per-user bookmarks of movies and shows with a viewing status.

- Every operation is scoped to the calling user: another user's entry id
  behaves exactly like an unknown id (`NotFoundError`).
- `content_type` must be `movie` or `show`; the entry references exactly one
  of the two foreign keys.
- Rows are projected through the language rules using whichever target is set.
"""

from typing import Optional
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.exceptions import ConflictError, NotFoundError, ValidationError
from streamhub.core.i18n import resolve_field
from streamhub.db.models import WATCHLIST_CONTENT_TYPES, WATCHLIST_STATUSES, Movie, Show, WatchlistEntry
from streamhub.schemas.common import Page
from streamhub.schemas.watchlist import WatchlistAdd, WatchlistItemOut, WatchlistUpdate
from streamhub.services.content_service import check_paging

logger = logging.getLogger(__name__)

ALREADY_SAVED = "Content already in watchlist"


def _check_status(status: Optional[str]) -> None:
    if status not in WATCHLIST_STATUSES:
        raise ValidationError(
            "Invalid watchlist status",
            details={"allowed": list(WATCHLIST_STATUSES)},
        )


def watchlist_item(entry: WatchlistEntry, language: str) -> WatchlistItemOut:
    content = entry.content
    return WatchlistItemOut(
        id=entry.id,
        content_id=content.id,
        content_type=entry.content_type,
        title=resolve_field(content, "title", language),
        description=resolve_field(content, "description", language),
        poster_url=content.poster_url,
        status=entry.status,
        watched_progress=entry.watched_progress or 0.0,
        added_at=entry.created_at,
    )


async def _owned_entry(db: AsyncSession, user_id: str, entry_id: str) -> WatchlistEntry:
    entry = (
        await db.execute(
            select(WatchlistEntry).where(WatchlistEntry.id == entry_id, WatchlistEntry.user_id == user_id)
        )
    ).scalar_one_or_none()
    if entry is None:
        raise NotFoundError("Watchlist item")
    return entry


# ─────────────────────────────────────────────────────────────
# ➕ Add
# ─────────────────────────────────────────────────────────────
async def add_to_watchlist(db: AsyncSession, user_id: str, payload: WatchlistAdd, language: str) -> WatchlistItemOut:
    """
    Bookmark a movie or a show.

    Steps
    -----
    1) Validate the content type.
    2) Resolve the target (unknown id → 404).
    3) Reject duplicates, insert with status `to_watch`.
    """
    # ── [Step 1] Type ────────────────────────────────────────────────────────
    if payload.content_type not in WATCHLIST_CONTENT_TYPES:
        raise ValidationError(
            "Invalid content type",
            details={"allowed": list(WATCHLIST_CONTENT_TYPES)},
        )

    # ── [Step 2] Target ──────────────────────────────────────────────────────
    if payload.content_type == "movie":
        target = await db.get(Movie, payload.content_id)
        if target is None:
            raise NotFoundError("Movie")
        fk = WatchlistEntry.movie_id
        entry = WatchlistEntry(user_id=user_id, movie_id=target.id, status="to_watch")
        entry.movie = target
    else:
        target = await db.get(Show, payload.content_id)
        if target is None:
            raise NotFoundError("Show")
        fk = WatchlistEntry.show_id
        entry = WatchlistEntry(user_id=user_id, show_id=target.id, status="to_watch")
        entry.show = target

    # ── [Step 3] Insert ──────────────────────────────────────────────────────
    dupe = (
        await db.execute(select(WatchlistEntry.id).where(WatchlistEntry.user_id == user_id, fk == target.id))
    ).scalar_one_or_none()
    if dupe is not None:
        raise ConflictError(ALREADY_SAVED)

    db.add(entry)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(ALREADY_SAVED)

    logger.info("Watchlist add: user_id=%s %s=%s", user_id, payload.content_type, target.id)
    return watchlist_item(entry, language)


# ─────────────────────────────────────────────────────────────
# 📃 List
# ─────────────────────────────────────────────────────────────
async def list_watchlist(
    db: AsyncSession,
    user_id: str,
    *,
    language: str,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Page[WatchlistItemOut]:
    check_paging(page, limit)
    filters = [WatchlistEntry.user_id == user_id]
    if status:
        _check_status(status)
        filters.append(WatchlistEntry.status == status)

    total = (await db.execute(select(func.count()).select_from(WatchlistEntry).where(*filters))).scalar_one()
    rows = (
        await db.execute(
            select(WatchlistEntry)
            .where(*filters)
            .order_by(WatchlistEntry.created_at.desc(), WatchlistEntry.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
    ).scalars().all()
    return Page[WatchlistItemOut](
        items=[watchlist_item(e, language) for e in rows],
        page=page,
        limit=limit,
        total=int(total),
    )


# ─────────────────────────────────────────────────────────────
# ✏️ Update / ❌ Remove
# ─────────────────────────────────────────────────────────────
async def update_watchlist_item(
    db: AsyncSession,
    user_id: str,
    entry_id: str,
    payload: WatchlistUpdate,
    language: str,
) -> WatchlistItemOut:
    """Patch status and, when given, progress."""
    _check_status(payload.status)
    if payload.progress is not None and payload.progress < 0:
        raise ValidationError("progress must be >= 0")

    entry = await _owned_entry(db, user_id, entry_id)
    entry.status = payload.status
    if payload.progress is not None:
        entry.watched_progress = payload.progress
    await db.commit()
    return watchlist_item(entry, language)


async def remove_from_watchlist(db: AsyncSession, user_id: str, entry_id: str) -> None:
    result = await db.execute(
        delete(WatchlistEntry).where(WatchlistEntry.id == entry_id, WatchlistEntry.user_id == user_id)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Watchlist item")
    await db.commit()
    logger.info("Watchlist remove: user_id=%s entry_id=%s", user_id, entry_id)


__all__ = [
    "add_to_watchlist",
    "list_watchlist",
    "update_watchlist_item",
    "remove_from_watchlist",
    "watchlist_item",
]
