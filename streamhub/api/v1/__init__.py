"""Versioned API (v1).

The aggregated router lives in `streamhub.api.v1.routers`:

    from streamhub.api.v1.routers import router as api_router
"""

# Keep this package import-free so `routers` stays a plain dotted path
# (monkeypatch targets such as "streamhub.api.v1.routers.auth.<name>").

__all__ = []
