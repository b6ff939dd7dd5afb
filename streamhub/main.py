# streamhub/main.py
from __future__ import annotations

"""
# StreamHub API — Application Entrypoint (FastAPI)

ASGI application factory and lifecycle for the StreamHub content backend
(bilingual catalog, auth with password + OTP, search, watchlist).

## Design Goals
- Deterministic, testable **app factory** (`create_app`) with explicit lifespan.
- The persistence handle (`Database`) and the OTP `NotificationDispatcher`
  are built at startup and stored on `app.state`; callers (tests, scripts)
  may pass their own instead.
- Explicit **middleware order**:
  1) request id → 2) security headers → 3) CORS → 4) gzip.
- One set of exception handlers renders every error as the envelope.

## Probes
- `/healthz` — liveness (process up).
- `/readyz` — readiness (`SELECT 1` against the database).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging
import os

from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import JSONResponse

# -- Logging bootstrap (Loguru + stdlib intercept) ----------------------------
from streamhub.core import logger as _logsetup  # noqa: F401

from streamhub.core.config import settings
from streamhub.core.exception_handlers import register_exception_handlers
from streamhub.db.session import Database
from streamhub.middleware.request_id import RequestIDMiddleware
from streamhub.security_headers import configure_cors, install_security
from streamhub.services.notifications import LoggingNotificationDispatcher, NotificationDispatcher

logger = logging.getLogger("streamhub")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup:
        - Build the `Database` unless one was injected.
        - Default the notifier to the logging dispatcher.

    Shutdown:
        - Dispose the engine we created (injected ones belong to the caller).
    """
    logger.info("✅ %s starting up (env=%s)", settings.PROJECT_NAME, settings.ENV)

    owns_db = getattr(app.state, "db", None) is None
    if owns_db:
        app.state.db = Database()
    if getattr(app.state, "notifier", None) is None:
        app.state.notifier = LoggingNotificationDispatcher()

    try:
        yield
    finally:
        if owns_db:
            await app.state.db.dispose()
            app.state.db = None
            logger.info("🛑 Database engine disposed")
        logger.info("🛑 %s shutting down", settings.PROJECT_NAME)


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(
    *,
    database: Optional[Database] = None,
    notifier: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    `database` / `notifier` are installed on `app.state` right away, so
    transports that skip the lifespan (e.g. httpx `ASGITransport`) work too.
    """
    docs_url = "/docs" if settings.ENABLE_DOCS else None
    redoc_url = "/redoc" if settings.ENABLE_DOCS else None
    openapi_url = "/openapi.json" if settings.ENABLE_DOCS else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )
    app.state.db = database
    app.state.notifier = notifier

    # ── Middlewares (last added runs first) ─────────────────────────────────
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    configure_cors(app)
    install_security(app)
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers ──────────────────────────────────────────────────
    register_exception_handlers(app)

    # ── Routers ─────────────────────────────────────────────────────────────
    from streamhub.api.v1.routers import router as api_router

    app.include_router(api_router, prefix=settings.API_PREFIX)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe: no external checks."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> JSONResponse:
        """Readiness probe: quick `SELECT 1`."""
        db: Optional[Database] = app.state.db
        db_ok = bool(db is not None and await db.healthcheck())
        return JSONResponse(
            {"ready": db_ok, "checks": {"db": db_ok}},
            status_code=200 if db_ok else 503,
        )

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        return JSONResponse(
            {
                "name": settings.PROJECT_NAME,
                "docs": app.docs_url or "",
                "version": settings.VERSION,
            }
        )

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
__all__ = ["create_app", "app", "lifespan"]


# Local dev runner (prefer: `uvicorn streamhub.main:app --reload`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "streamhub.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "1") == "1",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
