# tests/test_watchlist/test_watchlist.py

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.db.models import WatchlistEntry

WATCHLIST = "/api/watchlist"


async def _add(client: AsyncClient, headers, content_id: str, content_type: str = "movie"):
    return await client.post(
        WATCHLIST, json={"contentId": content_id, "contentType": content_type}, headers=headers
    )


# ─────────────────────────────────────────────────────────────
# ➕ POST /api/watchlist
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_add_movie_and_show(async_client: AsyncClient, user_with_headers, create_movie, create_show):
    """
    ✅ Movies and shows are bookmarked with status `to_watch`.
    """
    _, headers = await user_with_headers()
    movie = await create_movie(title_en="The Matrix")
    show = await create_show(title_en="Breaking Bad", title_ar="كسر السيء")

    res = await _add(async_client, headers, movie.id)
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Added to watchlist"
    item = body["data"]
    assert item["contentId"] == movie.id
    assert item["contentType"] == "movie"
    assert item["title"] == "The Matrix"
    assert item["status"] == "to_watch"
    assert item["watchedProgress"] == 0
    assert item["addedAt"]

    res = await async_client.post(
        WATCHLIST,
        json={"contentId": show.id, "contentType": "show"},
        headers={**headers, "Accept-Language": "ar"},
    )
    assert res.status_code == 201
    assert res.json()["data"]["contentType"] == "show"
    assert res.json()["data"]["title"] == "كسر السيء"


@pytest.mark.anyio
async def test_add_rejects_bad_type_unknown_id_and_duplicates(
    async_client: AsyncClient, user_with_headers, create_movie, db_session: AsyncSession
):
    """
    ❌ Invalid type → 400, unknown target → 404, second add → 409.
    """
    user, headers = await user_with_headers()
    movie = await create_movie()

    res = await _add(async_client, headers, movie.id, "podcast")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid content type"
    assert res.json()["error"]["details"]["allowed"] == ["movie", "show"]

    res = await _add(async_client, headers, "missing-id")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Movie not found"

    res = await _add(async_client, headers, "missing-id", "show")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Show not found"

    assert (await _add(async_client, headers, movie.id)).status_code == 201
    res = await _add(async_client, headers, movie.id)
    assert res.status_code == 409
    assert res.json()["error"]["message"] == "Content already in watchlist"

    rows = (await db_session.execute(select(WatchlistEntry).where(WatchlistEntry.user_id == user.id))).scalars().all()
    assert len(rows) == 1


@pytest.mark.anyio
async def test_watchlist_requires_auth(async_client: AsyncClient):
    res = await async_client.get(WATCHLIST)
    assert res.status_code == 401
    assert res.json()["success"] is False

    res = await async_client.post(WATCHLIST, json={"contentId": "x", "contentType": "movie"})
    assert res.status_code == 401


# ─────────────────────────────────────────────────────────────
# 📃 GET /api/watchlist
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_list_is_scoped_paginated_and_filtered(
    async_client: AsyncClient, user_with_headers, create_movie, create_show
):
    _, headers = await user_with_headers()
    _, other_headers = await user_with_headers()
    movies = [await create_movie(title_en=f"Movie {i}") for i in range(3)]
    show = await create_show()

    for m in movies:
        assert (await _add(async_client, headers, m.id)).status_code == 201
    added = await _add(async_client, headers, show.id, "show")
    await _add(async_client, other_headers, movies[0].id)

    await async_client.patch(
        f"{WATCHLIST}/{added.json()['data']['id']}", json={"status": "watching"}, headers=headers
    )

    res = await async_client.get(WATCHLIST, params={"limit": 3}, headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert len(body["data"]) == 3
    assert body["pagination"] == {
        "page": 1,
        "limit": 3,
        "total": 4,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPreviousPage": False,
    }

    res = await async_client.get(WATCHLIST, params={"page": 2, "limit": 3}, headers=headers)
    assert len(res.json()["data"]) == 1

    res = await async_client.get(WATCHLIST, params={"status": "watching"}, headers=headers)
    data = res.json()["data"]
    assert [i["contentId"] for i in data] == [show.id]
    assert res.json()["pagination"]["total"] == 1

    res = await async_client.get(WATCHLIST, headers=other_headers)
    assert [i["contentId"] for i in res.json()["data"]] == [movies[0].id]


@pytest.mark.anyio
async def test_list_rejects_unknown_status(async_client: AsyncClient, user_with_headers):
    _, headers = await user_with_headers()
    res = await async_client.get(WATCHLIST, params={"status": "abandoned"}, headers=headers)
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid watchlist status"


# ─────────────────────────────────────────────────────────────
# ✏️ PATCH /api/watchlist/{id}
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_update_status_and_progress(
    async_client: AsyncClient, user_with_headers, create_movie, db_session: AsyncSession
):
    _, headers = await user_with_headers()
    movie = await create_movie()
    entry_id = (await _add(async_client, headers, movie.id)).json()["data"]["id"]

    res = await async_client.patch(
        f"{WATCHLIST}/{entry_id}", json={"status": "watching", "progress": 42.5}, headers=headers
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Watchlist updated"
    assert res.json()["data"]["status"] == "watching"
    assert res.json()["data"]["watchedProgress"] == 42.5

    # progress omitted → unchanged
    res = await async_client.patch(f"{WATCHLIST}/{entry_id}", json={"status": "watched"}, headers=headers)
    assert res.json()["data"]["watchedProgress"] == 42.5

    entry = await db_session.get(WatchlistEntry, entry_id)
    await db_session.refresh(entry)
    assert entry.status == "watched"
    assert entry.watched_progress == 42.5


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"status": "finished"},
        {"status": "watching", "progress": -1},
        {},
    ],
)
async def test_update_rejects_bad_input(async_client: AsyncClient, user_with_headers, create_movie, payload):
    _, headers = await user_with_headers()
    movie = await create_movie()
    entry_id = (await _add(async_client, headers, movie.id)).json()["data"]["id"]

    res = await async_client.patch(f"{WATCHLIST}/{entry_id}", json=payload, headers=headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.anyio
async def test_update_foreign_entry_is_not_found(async_client: AsyncClient, user_with_headers, create_movie):
    """
    ❌ Another user's entry behaves like an unknown id.
    """
    _, owner_headers = await user_with_headers()
    _, intruder_headers = await user_with_headers()
    movie = await create_movie()
    entry_id = (await _add(async_client, owner_headers, movie.id)).json()["data"]["id"]

    res = await async_client.patch(f"{WATCHLIST}/{entry_id}", json={"status": "watched"}, headers=intruder_headers)
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Watchlist item not found"

    res = await async_client.delete(f"{WATCHLIST}/{entry_id}", headers=intruder_headers)
    assert res.status_code == 404


# ─────────────────────────────────────────────────────────────
# ❌ DELETE /api/watchlist/{id}
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_remove_then_missing(
    async_client: AsyncClient, user_with_headers, create_movie, db_session: AsyncSession
):
    _, headers = await user_with_headers()
    movie = await create_movie()
    entry_id = (await _add(async_client, headers, movie.id)).json()["data"]["id"]

    res = await async_client.delete(f"{WATCHLIST}/{entry_id}", headers=headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Removed from watchlist"
    assert res.json()["data"] is None

    res = await async_client.delete(f"{WATCHLIST}/{entry_id}", headers=headers)
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Watchlist item not found"

    remaining = (await db_session.execute(select(WatchlistEntry.id))).scalars().all()
    assert remaining == []
