from __future__ import annotations

"""
Error-envelope exception handlers.

Registered by `streamhub.main.create_app`. Every failure leaves the API as

    {"success": false,
     "error": {"code", "message", "statusCode", "details"?},
     "timestamp": ISO-8601}

- `AppException` subclasses map straight through.
- Persistence failures: unique violations → 409 CONFLICT, missing rows → 404.
- Request validation → 400 VALIDATION_ERROR with per-field details.
- Anything else → 500 INTERNAL_ERROR with the exception message (no traceback;
  the traceback goes to the log).
"""

import logging
import re
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from streamhub.api.responses import error_envelope
from streamhub.core.exceptions import AppException, ErrorKind

logger = logging.getLogger(__name__)

# "UNIQUE constraint failed: users.email" (sqlite) / "Key (email)=(...)" (postgres)
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: [\w]+\.(\w+)")
_PG_KEY_RE = re.compile(r"Key \((\w+)(?:,[^)]*)?\)=")


def _render(
    *,
    code: str,
    message: str,
    status_code: int,
    details: Optional[Any] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_envelope(code=code, message=message, status_code=status_code, details=details),
        headers=headers,
    )


def _unique_field(exc: IntegrityError) -> Optional[str]:
    """Best-effort name of the column behind a unique violation."""
    text = str(getattr(exc, "orig", exc))
    for rx in (_SQLITE_UNIQUE_RE, _PG_KEY_RE):
        m = rx.search(text)
        if m:
            return m.group(1)
    return None


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:  # type: ignore
    if exc.status_code >= 500:
        logger.error("Application error %s: %s", exc.code, exc.message)
    return _render(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        headers=getattr(exc, "headers", None),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    kind = ErrorKind.from_status(exc.status_code)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _render(
        code=kind.code,
        message=detail,
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")),
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type"),
        }
        for err in exc.errors()
    ]
    return _render(
        code=ErrorKind.VALIDATION.code,
        message="Validation failed",
        status_code=status.HTTP_400_BAD_REQUEST,
        details=jsonable_encoder(errors),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:  # type: ignore
    field = _unique_field(exc)
    logger.warning("Integrity error on %s %s (field=%s)", request.method, request.url.path, field)
    return _render(
        code=ErrorKind.CONFLICT.code,
        message="Unique constraint violation",
        status_code=ErrorKind.CONFLICT.status_code,
        details={"field": field},
    )


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:  # type: ignore
    return _render(
        code=ErrorKind.NOT_FOUND.code,
        message="Record not found",
        status_code=ErrorKind.NOT_FOUND.status_code,
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _render(
        code=ErrorKind.INTERNAL.code,
        message=str(exc) or "Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on `app` (most specific first)."""
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NoResultFound, no_result_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]


__all__ = [
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "integrity_error_handler",
    "no_result_handler",
    "global_exception_handler",
    "register_exception_handlers",
]
