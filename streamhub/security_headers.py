# streamhub/security_headers.py
from __future__ import annotations

"""
# StreamHub — HTTP hardening & CORS

- **Baseline headers** on every response (`X-Content-Type-Options`,
  `X-Frame-Options`, `Referrer-Policy`), added idempotently by a pure ASGI
  middleware.
- **Cache helper**: `set_sensitive_cache()` for token-bearing responses.
- **CORS installer**: allow-list from `FRONTEND_ORIGINS`, credentials allowed
  so the `authToken` cookie works cross-origin (localhost defaults in dev).

## Quick start
    from streamhub.security_headers import install_security, configure_cors

    app = FastAPI()
    install_security(app)
    configure_cors(app)

Inside a route:
    @router.post("/auth/login")
    async def login(response: Response, ...):
        set_sensitive_cache(response)
"""

from typing import Iterable, List, Optional, Tuple

from fastapi import Response
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from streamhub.core.config import settings

BASELINE_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("X-Content-Type-Options", "nosniff"),
    ("X-Frame-Options", "DENY"),
    ("Referrer-Policy", "strict-origin-when-cross-origin"),
)

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


# ─────────────────────────────────────────────────────────────
# 🧩 Middleware
# ─────────────────────────────────────────────────────────────
def _has_header(raw_headers: List[Tuple[bytes, bytes]], name: str) -> bool:
    lname = name.lower().encode("latin-1")
    return any(h[0].lower() == lname for h in raw_headers)


class SecurityHeadersMiddleware:
    """Adds the baseline headers unless the handler already set them."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        async def send_wrapper(message):
            if message.get("type") == "http.response.start":
                raw_headers: List[Tuple[bytes, bytes]] = list(message.get("headers", []))
                for name, value in BASELINE_HEADERS:
                    if not _has_header(raw_headers, name):
                        raw_headers.append((name.encode("latin-1"), value.encode("latin-1")))
                message["headers"] = raw_headers
            await send(message)

        await self.app(scope, receive, send_wrapper)


# ─────────────────────────────────────────────────────────────
# 🔓 Route helper
# ─────────────────────────────────────────────────────────────
def set_sensitive_cache(response: Response) -> None:
    """Mark a response carrying credentials as never cacheable (idempotent)."""
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("Pragma", "no-cache")
    response.headers.setdefault("Expires", "0")


# ─────────────────────────────────────────────────────────────
# 🌐 CORS installer (allow-list, not '*')
# ─────────────────────────────────────────────────────────────
def configure_cors(
    app,
    *,
    allow_credentials: bool = True,
    allow_methods: Optional[Iterable[str]] = None,
    allow_headers: Optional[Iterable[str]] = None,
) -> None:
    allow_methods = allow_methods or ["GET", "HEAD", "OPTIONS", "POST", "PATCH", "DELETE"]
    allow_headers = allow_headers or ["Authorization", "Content-Type", "Accept-Language", "X-Request-ID"]

    origins = settings.frontend_origins_list
    if not origins and not settings.is_production:
        origins = list(DEV_ORIGINS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=list(allow_methods),
        allow_headers=list(allow_headers),
        expose_headers=["X-Request-ID"],
        max_age=3600,
    )


def install_security(app) -> None:
    app.add_middleware(SecurityHeadersMiddleware)


__all__ = [
    "SecurityHeadersMiddleware",
    "install_security",
    "configure_cors",
    "set_sensitive_cache",
]
