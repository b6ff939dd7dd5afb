"""
Initial StreamHub schema.

- Accounts: users, user_preferences, otp_records.
- Catalog: genres, streaming_platforms, movies, shows, seasons, episodes,
  live_tv_channels, articles and the platform availability links.
- Engagement: ratings, reviews, watchlist_entries, search_logs.
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20261019_01_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), primary_key=True, nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _fk(column: str, target: str, *, ondelete: str, nullable: bool) -> sa.Column:
    return sa.Column(column, sa.String(length=36), sa.ForeignKey(target, ondelete=ondelete), nullable=nullable)


def _platform_link(table: str, target_col: str, target: str) -> None:
    op.create_table(
        table,
        _id(),
        _fk("platform_id", "streaming_platforms.id", ondelete="CASCADE", nullable=False),
        _fk(target_col, target, ondelete="CASCADE", nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("available_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("available_until", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("platform_id", target_col, name=f"uq_{table}_platform_{target_col.split('_')[0]}"),
    )
    op.create_index(f"ix_{table}_platform_id", table, ["platform_id"])
    op.create_index(f"ix_{table}_{target_col}", table, [target_col])


def upgrade() -> None:
    # --- Accounts ---
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("first_name_en", sa.String(length=100), nullable=True),
        sa.Column("first_name_ar", sa.String(length=100), nullable=True),
        sa.Column("last_name_en", sa.String(length=100), nullable=True),
        sa.Column("last_name_ar", sa.String(length=100), nullable=True),
        sa.Column("preferred_language", sa.String(length=8), server_default="en", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("email IS NOT NULL OR phone IS NOT NULL", name="ck_users_identifier_present"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)

    op.create_table(
        "user_preferences",
        _id(),
        _fk("user_id", "users.id", ondelete="CASCADE", nullable=False),
        sa.Column("favorite_genres", sa.JSON(), nullable=False),
        sa.Column("favorite_languages", sa.JSON(), nullable=False),
        sa.Column("notifications_enabled", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_user_preferences_user_id"),
    )

    op.create_table(
        "otp_records",
        _id(),
        _fk("user_id", "users.id", ondelete="CASCADE", nullable=False),
        sa.Column("code", sa.String(length=10), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_otp_records_user_id", "otp_records", ["user_id"])
    op.create_index("ix_otp_records_user_code", "otp_records", ["user_id", "code"])
    op.create_index("ix_otp_records_expires_at", "otp_records", ["expires_at"])

    # --- Catalog ---
    op.create_table(
        "genres",
        _id(),
        sa.Column("name_en", sa.String(length=120), nullable=False),
        sa.Column("name_ar", sa.String(length=120), nullable=True),
        sa.Column("slug", sa.String(length=140), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_genres_slug", "genres", ["slug"], unique=True)

    op.create_table(
        "streaming_platforms",
        _id(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("slug", sa.String(length=140), nullable=False),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_streaming_platforms_slug", "streaming_platforms", ["slug"], unique=True)

    op.create_table(
        "movies",
        _id(),
        sa.Column("title_en", sa.String(length=300), nullable=False),
        sa.Column("title_ar", sa.String(length=300), nullable=True),
        sa.Column("slug", sa.String(length=320), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("director_en", sa.String(length=300), nullable=True),
        sa.Column("director_ar", sa.String(length=300), nullable=True),
        sa.Column("cast_en", sa.JSON(), nullable=True),
        sa.Column("cast_ar", sa.JSON(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("age_rating", sa.String(length=16), nullable=True),
        sa.Column("poster_url", sa.String(length=500), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("backdrop_url", sa.String(length=500), nullable=True),
        sa.Column("trailer_url", sa.String(length=500), nullable=True),
        _fk("genre_id", "genres.id", ondelete="RESTRICT", nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_movies_slug", "movies", ["slug"], unique=True)
    op.create_index("ix_movies_genre_id", "movies", ["genre_id"])
    op.create_index("ix_movies_available_release", "movies", ["is_available", "release_date"])
    op.create_index("ix_movies_genre_available", "movies", ["genre_id", "is_available"])

    op.create_table(
        "shows",
        _id(),
        sa.Column("title_en", sa.String(length=300), nullable=False),
        sa.Column("title_ar", sa.String(length=300), nullable=True),
        sa.Column("slug", sa.String(length=320), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("creator_en", sa.String(length=300), nullable=True),
        sa.Column("creator_ar", sa.String(length=300), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("total_seasons", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_episodes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("age_rating", sa.String(length=16), nullable=True),
        sa.Column("poster_url", sa.String(length=500), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("backdrop_url", sa.String(length=500), nullable=True),
        _fk("genre_id", "genres.id", ondelete="RESTRICT", nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_shows_slug", "shows", ["slug"], unique=True)
    op.create_index("ix_shows_genre_id", "shows", ["genre_id"])
    op.create_index("ix_shows_available_release", "shows", ["is_available", "release_date"])
    op.create_index("ix_shows_genre_available", "shows", ["genre_id", "is_available"])

    op.create_table(
        "seasons",
        _id(),
        _fk("show_id", "shows.id", ondelete="CASCADE", nullable=False),
        sa.Column("season_number", sa.Integer(), nullable=False),
        sa.Column("title_en", sa.String(length=300), nullable=True),
        sa.Column("title_ar", sa.String(length=300), nullable=True),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("show_id", "season_number", name="uq_seasons_show_number"),
        sa.CheckConstraint("season_number >= 0", name="ck_seasons_season_number_non_negative"),
    )
    op.create_index("ix_seasons_show_id", "seasons", ["show_id"])

    op.create_table(
        "episodes",
        _id(),
        _fk("season_id", "seasons.id", ondelete="CASCADE", nullable=False),
        sa.Column("episode_number", sa.Integer(), nullable=False),
        sa.Column("title_en", sa.String(length=300), nullable=False),
        sa.Column("title_ar", sa.String(length=300), nullable=True),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("season_id", "episode_number", name="uq_episodes_season_number"),
        sa.CheckConstraint("episode_number >= 0", name="ck_episodes_episode_number_non_negative"),
    )
    op.create_index("ix_episodes_season_id", "episodes", ["season_id"])

    op.create_table(
        "live_tv_channels",
        _id(),
        sa.Column("name_en", sa.String(length=200), nullable=False),
        sa.Column("name_ar", sa.String(length=200), nullable=True),
        sa.Column("slug", sa.String(length=220), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("category_en", sa.String(length=100), nullable=True),
        sa.Column("category_ar", sa.String(length=100), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        sa.Column("stream_url", sa.String(length=1000), nullable=True),
        sa.Column("is_live", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_live_tv_channels_slug", "live_tv_channels", ["slug"], unique=True)
    op.create_index("ix_live_tv_channels_is_live", "live_tv_channels", ["is_live"])

    _platform_link("platform_movies", "movie_id", "movies.id")
    _platform_link("platform_shows", "show_id", "shows.id")
    _platform_link("platform_live_tv", "channel_id", "live_tv_channels.id")

    op.create_table(
        "articles",
        _id(),
        sa.Column("title_en", sa.String(length=300), nullable=False),
        sa.Column("title_ar", sa.String(length=300), nullable=True),
        sa.Column("slug", sa.String(length=320), nullable=False),
        sa.Column("content_en", sa.Text(), nullable=True),
        sa.Column("content_ar", sa.Text(), nullable=True),
        sa.Column("excerpt_en", sa.String(length=500), nullable=True),
        sa.Column("excerpt_ar", sa.String(length=500), nullable=True),
        sa.Column("featured_image", sa.String(length=500), nullable=True),
        _fk("author_id", "users.id", ondelete="SET NULL", nullable=True),
        _fk("genre_id", "genres.id", ondelete="SET NULL", nullable=True),
        sa.Column("is_published", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_articles_slug", "articles", ["slug"], unique=True)
    op.create_index("ix_articles_author_id", "articles", ["author_id"])
    op.create_index("ix_articles_published", "articles", ["is_published", "published_at"])

    # --- Engagement ---
    op.create_table(
        "ratings",
        _id(),
        _fk("user_id", "users.id", ondelete="CASCADE", nullable=False),
        _fk("movie_id", "movies.id", ondelete="CASCADE", nullable=True),
        _fk("show_id", "shows.id", ondelete="CASCADE", nullable=True),
        sa.Column("score", sa.Float(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("score >= 0 AND score <= 10", name="ck_ratings_score_range"),
        sa.CheckConstraint("(movie_id IS NULL) <> (show_id IS NULL)", name="ck_ratings_exactly_one_target"),
        sa.UniqueConstraint("user_id", "movie_id", name="uq_ratings_user_movie"),
        sa.UniqueConstraint("user_id", "show_id", name="uq_ratings_user_show"),
    )
    for col in ("user_id", "movie_id", "show_id"):
        op.create_index(f"ix_ratings_{col}", "ratings", [col])

    op.create_table(
        "reviews",
        _id(),
        _fk("user_id", "users.id", ondelete="CASCADE", nullable=False),
        _fk("movie_id", "movies.id", ondelete="CASCADE", nullable=True),
        _fk("show_id", "shows.id", ondelete="CASCADE", nullable=True),
        sa.Column("title_en", sa.String(length=300), nullable=True),
        sa.Column("title_ar", sa.String(length=300), nullable=True),
        sa.Column("content_en", sa.Text(), nullable=True),
        sa.Column("content_ar", sa.Text(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("(movie_id IS NULL) <> (show_id IS NULL)", name="ck_reviews_exactly_one_target"),
    )
    for col in ("user_id", "movie_id", "show_id"):
        op.create_index(f"ix_reviews_{col}", "reviews", [col])

    op.create_table(
        "watchlist_entries",
        _id(),
        _fk("user_id", "users.id", ondelete="CASCADE", nullable=False),
        _fk("movie_id", "movies.id", ondelete="CASCADE", nullable=True),
        _fk("show_id", "shows.id", ondelete="CASCADE", nullable=True),
        sa.Column("status", sa.String(length=16), server_default="to_watch", nullable=False),
        sa.Column("watched_progress", sa.Float(), server_default="0", nullable=False),
        *_timestamps(),
        sa.CheckConstraint("(movie_id IS NULL) <> (show_id IS NULL)", name="ck_watchlist_entries_exactly_one_target"),
        sa.CheckConstraint("status IN ('to_watch', 'watching', 'watched')", name="ck_watchlist_entries_status_valid"),
        sa.CheckConstraint("watched_progress >= 0", name="ck_watchlist_entries_progress_non_negative"),
        sa.UniqueConstraint("user_id", "movie_id", name="uq_watchlist_entries_user_movie"),
        sa.UniqueConstraint("user_id", "show_id", name="uq_watchlist_entries_user_show"),
    )
    for col in ("user_id", "movie_id", "show_id"):
        op.create_index(f"ix_watchlist_entries_{col}", "watchlist_entries", [col])
    op.create_index("ix_watchlist_entries_user_status", "watchlist_entries", ["user_id", "status"])
    op.create_index("ix_watchlist_entries_user_created", "watchlist_entries", ["user_id", "created_at"])

    op.create_table(
        "search_logs",
        _id(),
        sa.Column("query", sa.String(length=500), nullable=False),
        sa.Column("language", sa.String(length=8), nullable=False),
        sa.Column("results_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_search_logs_query", "search_logs", ["query"])
    op.create_index("ix_search_logs_created_at", "search_logs", ["created_at"])


def downgrade() -> None:
    for table in (
        "search_logs",
        "watchlist_entries",
        "reviews",
        "ratings",
        "articles",
        "platform_live_tv",
        "platform_shows",
        "platform_movies",
        "live_tv_channels",
        "episodes",
        "seasons",
        "shows",
        "movies",
        "streaming_platforms",
        "genres",
        "otp_records",
        "user_preferences",
        "users",
    ):
        op.drop_table(table)
