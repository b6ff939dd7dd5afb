"""
🧭 StreamHub • API Router Aggregator
===================================

Exports the **combined `router`** and a `build_v1_router()` factory.

Quick usage
-----------
    from streamhub.api.v1.routers import router as api_router
    app.include_router(api_router, prefix=settings.API_PREFIX)

Layout
------
- `/auth/*`      registration, password + OTP sign-in, session cookie
- `/content/*`   movies, shows, live TV, genres
- `/search`      catalog search + trending queries
- `/watchlist`   per-user bookmarks (authenticated)
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .content import router as content_router
from .search import router as search_router
from .watchlist import router as watchlist_router


def build_v1_router() -> APIRouter:
    r = APIRouter()
    r.include_router(auth_router)
    r.include_router(content_router)
    r.include_router(search_router)
    r.include_router(watchlist_router)
    return r


router = build_v1_router()

__all__ = [
    "build_v1_router",
    "router",
    "auth_router",
    "content_router",
    "search_router",
    "watchlist_router",
]
