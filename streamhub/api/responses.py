from __future__ import annotations

"""
StreamHub · Response envelope
=============================

Every endpoint answers with the same wrapper so clients never have to guess:

    success   → {"success": true,  "message", "data", "timestamp"}
    paginated → success + {"pagination": {page, limit, total, totalPages,
                                          hasNextPage, hasPreviousPage}}
    error     → {"success": false, "error": {code, message, statusCode,
                                             details?}, "timestamp"}

Payloads are passed through `jsonable_encoder` so pydantic schemas come out
with their camelCase aliases and datetimes as ISO-8601 strings.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from fastapi.encoders import jsonable_encoder

__all__ = [
    "utc_timestamp",
    "build_pagination",
    "success_envelope",
    "paginated_envelope",
    "error_envelope",
]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a `Z` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNextPage": page < total_pages,
        "hasPreviousPage": page > 1,
    }


def success_envelope(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": jsonable_encoder(data, by_alias=True),
        "timestamp": utc_timestamp(),
    }


def paginated_envelope(
    items: Sequence[Any],
    *,
    page: int,
    limit: int,
    total: int,
    message: str = "Success",
) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": jsonable_encoder(list(items), by_alias=True),
        "pagination": build_pagination(page, limit, total),
        "timestamp": utc_timestamp(),
    }


def error_envelope(
    *,
    code: str,
    message: str,
    status_code: int,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message, "statusCode": status_code}
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return {"success": False, "error": error, "timestamp": utc_timestamp()}
