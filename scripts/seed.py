#!/usr/bin/env python3
"""
StreamHub • Seed Sample Data
============================

Wipes the catalog/account tables and inserts a small bilingual data set:
three genres, two platforms, two verified users (password `password123`),
The Matrix, Inception, Breaking Bad S1E1, a live news channel, platform
links, a watchlist entry, a rating, a review and a published article.

Usage
-----
    python scripts/seed.py                       # uses DATABASE_URL / POSTGRES_*
    python scripts/seed.py --url sqlite+aiosqlite:///./dev.db --create-tables
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import date, datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from streamhub.core import logger as _logsetup  # noqa: F401,E402
from streamhub.core.security import get_password_hash  # noqa: E402
from streamhub.db.base import Base  # noqa: E402
from streamhub.db.models import (  # noqa: E402
    Article,
    Episode,
    Genre,
    LiveTVChannel,
    Movie,
    OTPRecord,
    PlatformLiveTV,
    PlatformMovie,
    PlatformShow,
    Rating,
    Review,
    SearchLog,
    Season,
    Show,
    StreamingPlatform,
    User,
    UserPreferences,
    WatchlistEntry,
)
from streamhub.db.session import Database  # noqa: E402

logger = logging.getLogger("streamhub.seed")

SEED_PASSWORD = "password123"

# Children before parents
_CLEAR_ORDER = (
    SearchLog,
    Rating,
    Review,
    WatchlistEntry,
    Episode,
    Season,
    PlatformLiveTV,
    PlatformShow,
    PlatformMovie,
    LiveTVChannel,
    Show,
    Movie,
    Article,
    Genre,
    StreamingPlatform,
    UserPreferences,
    OTPRecord,
    User,
)


async def clear(session: AsyncSession) -> None:
    for model in _CLEAR_ORDER:
        await session.execute(delete(model))
    logger.info("✓ Cleared existing data")


async def populate(session: AsyncSession) -> None:
    # ── Genres ─────────────────────────────────────────────
    action = Genre(
        name_en="Action",
        name_ar="حركة",
        slug="action",
        description_en="Action-packed movies and shows",
        description_ar="أفلام وعروض مليئة بالحركة",
    )
    drama = Genre(
        name_en="Drama",
        name_ar="دراما",
        slug="drama",
        description_en="Dramatic stories",
        description_ar="قصص درامية",
    )
    comedy = Genre(
        name_en="Comedy",
        name_ar="كوميديا",
        slug="comedy",
        description_en="Funny and entertaining content",
        description_ar="محتوى مضحك وممتع",
    )

    # ── Platforms ──────────────────────────────────────────
    netflix = StreamingPlatform(
        name="Netflix",
        slug="netflix",
        website="https://netflix.com",
        description="Streaming entertainment service",
    )
    prime = StreamingPlatform(
        name="Amazon Prime Video",
        slug="prime-video",
        website="https://primevideo.com",
        description="Amazon streaming service",
    )

    # ── Users ──────────────────────────────────────────────
    password_hash = get_password_hash(SEED_PASSWORD)
    john = User(
        email="john@example.com",
        phone="+1234567890",
        password_hash=password_hash,
        first_name_en="John",
        first_name_ar="جون",
        last_name_en="Doe",
        last_name_ar="دو",
        preferred_language="en",
        is_active=True,
        is_verified=True,
    )
    fatima = User(
        email="fatima@example.com",
        phone="+9876543210",
        password_hash=password_hash,
        first_name_en="Fatima",
        first_name_ar="فاطمة",
        last_name_en="Ahmed",
        last_name_ar="أحمد",
        preferred_language="ar",
        is_active=True,
        is_verified=True,
    )

    session.add_all([action, drama, comedy, netflix, prime, john, fatima])
    await session.flush()
    logger.info("✓ Created genres, platforms and users")

    session.add_all(
        [
            UserPreferences(user_id=john.id, favorite_genres=[action.id], favorite_languages=["en"]),
            UserPreferences(user_id=fatima.id, favorite_genres=[drama.id], favorite_languages=["ar"]),
        ]
    )

    # ── Movies & shows ─────────────────────────────────────
    matrix = Movie(
        title_en="The Matrix",
        title_ar="المصفوفة",
        slug="the-matrix",
        description_en="A computer hacker learns about the true nature of reality",
        description_ar="يتعلم قرصان الكمبيوتر عن الطبيعة الحقيقية للواقع",
        release_date=date(1999, 3, 31),
        duration=136,
        rating=8.7,
        director_en="Lana Wachowski, Lilly Wachowski",
        director_ar="لانا واتشوسكي، ليلي واتشوسكي",
        age_rating="R",
        genre_id=action.id,
        is_available=True,
    )
    inception = Movie(
        title_en="Inception",
        title_ar="الحاضنة",
        slug="inception",
        description_en="A skilled thief who steals corporate secrets through dream-sharing",
        description_ar="لص ماهر يسرق أسرار الشركات من خلال مشاركة الأحلام",
        release_date=date(2010, 7, 16),
        duration=148,
        rating=8.8,
        director_en="Christopher Nolan",
        director_ar="كريستوفر نولان",
        age_rating="PG-13",
        genre_id=action.id,
        is_available=True,
    )
    breaking_bad = Show(
        title_en="Breaking Bad",
        title_ar="كسر السيء",
        slug="breaking-bad",
        description_en="A high school chemistry teacher turns to cooking meth",
        description_ar="يتحول معلم الكيمياء بالمدرسة الثانوية إلى طهي الميثامفيتامين",
        release_date=date(2008, 1, 20),
        total_seasons=5,
        total_episodes=62,
        rating=9.5,
        creator_en="Vince Gilligan",
        creator_ar="فينس جيليجان",
        age_rating="TV-MA",
        genre_id=drama.id,
        is_available=True,
    )
    news = LiveTVChannel(
        name_en="News Channel",
        name_ar="قناة الأخبار",
        slug="news-channel",
        category_en="News",
        category_ar="أخبار",
        stream_url="https://stream.example.com/news",
        is_live=True,
    )
    session.add_all([matrix, inception, breaking_bad, news])
    await session.flush()
    logger.info("✓ Created movies, shows and live TV")

    season_1 = Season(
        show_id=breaking_bad.id,
        season_number=1,
        title_en="Season 1",
        title_ar="الموسم 1",
        release_date=date(2008, 1, 20),
    )
    session.add(season_1)
    await session.flush()
    session.add(
        Episode(
            season_id=season_1.id,
            episode_number=1,
            title_en="Pilot",
            title_ar="الحلقة التجريبية",
            description_en="A high school chemistry teacher is diagnosed with cancer",
            description_ar="يتم تشخيص معلم الكيمياء بالمدرسة الثانوية بالسرطان",
            duration=58,
            release_date=date(2008, 1, 20),
        )
    )

    # ── Availability ───────────────────────────────────────
    session.add_all(
        [
            PlatformMovie(platform_id=netflix.id, movie_id=matrix.id, is_available=True),
            PlatformMovie(platform_id=prime.id, movie_id=inception.id, is_available=True),
        ]
    )

    # ── Engagement ─────────────────────────────────────────
    session.add_all(
        [
            WatchlistEntry(user_id=john.id, movie_id=matrix.id, status="to_watch"),
            Rating(user_id=john.id, movie_id=matrix.id, score=9.0),
            Review(
                user_id=john.id,
                movie_id=matrix.id,
                title_en="Amazing movie!",
                title_ar="فيلم رائع!",
                content_en="One of the best sci-fi movies ever made",
                content_ar="واحد من أفضل أفلام الخيال العلمي على الإطلاق",
                rating=9.0,
                is_verified=True,
            ),
            Article(
                title_en="Top 10 Movies of 2024",
                title_ar="أفضل 10 أفلام لعام 2024",
                slug="top-10-movies-2024",
                content_en="Here are the best movies released in 2024...",
                content_ar="إليك أفضل الأفلام المُصدرة في عام 2024...",
                excerpt_en="A list of the best movies from 2024",
                excerpt_ar="قائمة بأفضل الأفلام من عام 2024",
                author_id=john.id,
                genre_id=action.id,
                is_published=True,
                published_at=datetime.now(timezone.utc),
            ),
        ]
    )
    await session.flush()
    logger.info("✓ Created episodes, platform links, watchlist, rating, review and article")


async def run(url: str | None, create_tables: bool) -> None:
    database = Database(url)
    try:
        if create_tables:
            async with database.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        async with database.transaction() as session:
            await clear(session)
            await populate(session)
    finally:
        await database.dispose()
    logger.info("✅ Database seed completed")


def main() -> None:
    ap = argparse.ArgumentParser(description="Populate StreamHub with sample data")
    ap.add_argument("--url", help="Async SQLAlchemy URL; defaults to settings")
    ap.add_argument("--create-tables", action="store_true", help="Run metadata.create_all first (dev only)")
    args = ap.parse_args()

    try:
        asyncio.run(run(args.url, args.create_tables))
    except Exception:
        logger.exception("❌ Seed failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
