# streamhub/middleware/request_id.py
from __future__ import annotations

"""
# StreamHub — Request ID Middleware (pure ASGI)

- Reuses a client-supplied `X-Request-ID` when it is a valid UUIDv4.
- Generates a UUIDv4 otherwise.
- Stores it on `request.state.request_id` and echoes it in the response.
- Binds `request_id` into the **loguru** context for the whole request, so
  every log line emitted while handling it carries the id.

## Usage
    from streamhub.middleware.request_id import RequestIDMiddleware, get_request_id
    app.add_middleware(RequestIDMiddleware)
"""

import re
import uuid

from loguru import logger
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

HEADER_NAME = "X-Request-ID"

_UUID_V4_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$")


def choose_request_id(incoming: str | None) -> str:
    """Client id when it is a well-formed UUIDv4, else a fresh one."""
    candidate = (incoming or "").strip()
    if candidate and _UUID_V4_RE.fullmatch(candidate):
        return str(uuid.UUID(candidate))
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Per-request correlation id (header in, header out, log context)."""

    def __init__(self, app: ASGIApp, header_name: str = HEADER_NAME) -> None:
        self.app = app
        self.header_name = header_name
        self._header_bytes = header_name.lower().encode("latin-1")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        req_id = choose_request_id(Headers(scope=scope).get(self.header_name))
        scope.setdefault("state", {})["request_id"] = req_id

        async def _send_wrapper(message):
            if message.get("type") == "http.response.start":
                raw = [(k, v) for (k, v) in message.get("headers", []) if k.lower() != self._header_bytes]
                raw.append((self.header_name.encode("latin-1"), req_id.encode("latin-1")))
                message["headers"] = raw
            await send(message)

        with logger.contextualize(request_id=req_id):
            await self.app(scope, receive, _send_wrapper)


def get_request_id(request) -> str:
    """Current request id from `request.state` ("" outside the middleware)."""
    return getattr(getattr(request, "state", object()), "request_id", "") or ""


__all__ = ["RequestIDMiddleware", "choose_request_id", "get_request_id"]
