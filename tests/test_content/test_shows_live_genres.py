# tests/test_content/test_shows_live_genres.py

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import settings
from streamhub.db.models import Genre, PlatformLiveTV

SHOWS = "/api/content/shows"
LIVE_TV = "/api/content/live-tv"
GENRES = "/api/content/genres"


# ─────────────────────────────────────────────────────────────
# Shows
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_shows_list_summary(async_client: AsyncClient, create_show, platform):
    show = await create_show(
        title_en="Breaking Bad",
        title_ar="كسر السيء",
        total_seasons=5,
        total_episodes=62,
        rating=9.5,
        platforms=[platform],
    )

    res = await async_client.get(SHOWS, params={"lang": "ar"})
    assert res.status_code == 200
    body = res.json()
    assert body["pagination"]["total"] == 1
    item = body["data"][0]
    assert item["id"] == show.id
    assert item["title"] == "كسر السيء"
    assert item["totalSeasons"] == 5
    assert item["totalEpisodes"] == 62
    assert item["platforms"] == [{"id": platform.id, "name": "Netflix"}]


@pytest.mark.anyio
async def test_show_detail_orders_seasons_and_episodes(async_client: AsyncClient, create_show):
    show = await create_show(
        slug="breaking-bad",
        creator_en="Vince Gilligan",
        seasons={2: ["Seven Thirty-Seven", "Grilled"], 1: ["Pilot", "Cat's in the Bag..."]},
    )

    res = await async_client.get(f"{SHOWS}/breaking-bad")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == show.id
    assert data["creator"] == "Vince Gilligan"
    assert [s["seasonNumber"] for s in data["seasons"]] == [1, 2]
    first = data["seasons"][0]
    assert first["title"] == "Season 1"
    assert [e["episodeNumber"] for e in first["episodes"]] == [1, 2]
    assert first["episodes"][0]["title"] == "Pilot"
    assert first["episodes"][0]["duration"] == 58


@pytest.mark.anyio
async def test_show_detail_not_found(async_client: AsyncClient):
    res = await async_client.get(f"{SHOWS}/missing")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Show not found"


# ─────────────────────────────────────────────────────────────
# Live TV
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_live_tv_only_live_channels(
    async_client: AsyncClient, create_channel, platform, db_session: AsyncSession
):
    news = await create_channel(
        name_en="News Channel",
        name_ar="قناة الأخبار",
        category_en="News",
        category_ar="أخبار",
        stream_url="https://stream.example.com/news",
    )
    await create_channel(name_en="Off Air", is_live=False)
    db_session.add(PlatformLiveTV(platform_id=platform.id, channel_id=news.id))
    await db_session.commit()

    res = await async_client.get(LIVE_TV, headers={"Accept-Language": "ar"})
    assert res.status_code == 200
    channels = res.json()["data"]["channels"]
    assert len(channels) == 1
    channel = channels[0]
    assert channel["name"] == "قناة الأخبار"
    assert channel["category"] == "أخبار"
    assert channel["streamUrl"] == "https://stream.example.com/news"
    assert channel["platforms"] == [{"id": platform.id, "name": "Netflix"}]


@pytest.mark.anyio
async def test_live_tv_is_capped(async_client: AsyncClient, create_channel, monkeypatch):
    monkeypatch.setattr(settings, "LIVE_TV_LIMIT", 2)
    for i in range(3):
        await create_channel(name_en=f"Channel {i}")

    res = await async_client.get(LIVE_TV)
    assert [c["name"] for c in res.json()["data"]["channels"]] == ["Channel 0", "Channel 1"]


# ─────────────────────────────────────────────────────────────
# Genres
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_genres_ordered_by_english_name(async_client: AsyncClient, db_session: AsyncSession):
    db_session.add_all(
        [
            Genre(name_en="Drama", name_ar="دراما", slug="drama"),
            Genre(name_en="Action", name_ar="حركة", slug="action"),
            Genre(name_en="Comedy", slug="comedy"),
        ]
    )
    await db_session.commit()

    res = await async_client.get(GENRES, params={"lang": "ar"})
    assert res.status_code == 200
    assert [g["name"] for g in res.json()["data"]] == ["حركة", "Comedy", "دراما"]
