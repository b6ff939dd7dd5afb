# streamhub/db/models/__init__.py
"""
StreamHub — ORM model registry
==============================

Import every model so its table is registered on `Base.metadata` and string
relationship targets resolve at mapper configuration time.

Tip: Keep this file import-only; no runtime logic.
"""

from streamhub.db.base_class import Base

# ───────────────────────────────────────────────────────────────
# Accounts & auth
# ───────────────────────────────────────────────────────────────
from .user import User, UserPreferences
from .otp import OTPRecord

# ───────────────────────────────────────────────────────────────
# Catalog
# ───────────────────────────────────────────────────────────────
from .genre import Genre
from .platform import StreamingPlatform
from .movie import Movie
from .show import Show
from .season import Season
from .episode import Episode
from .live_tv import LiveTVChannel
from .availability import PlatformMovie, PlatformShow, PlatformLiveTV
from .article import Article

# ───────────────────────────────────────────────────────────────
# Engagement
# ───────────────────────────────────────────────────────────────
from .review import Review
from .rating import Rating
from .watchlist import WatchlistEntry, WATCHLIST_STATUSES, WATCHLIST_CONTENT_TYPES
from .search_log import SearchLog

__all__ = [
    "Base",
    "User",
    "UserPreferences",
    "OTPRecord",
    "Genre",
    "StreamingPlatform",
    "Movie",
    "Show",
    "Season",
    "Episode",
    "LiveTVChannel",
    "PlatformMovie",
    "PlatformShow",
    "PlatformLiveTV",
    "Article",
    "Review",
    "Rating",
    "WatchlistEntry",
    "WATCHLIST_STATUSES",
    "WATCHLIST_CONTENT_TYPES",
    "SearchLog",
]
