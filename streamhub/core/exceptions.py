# streamhub/core/exceptions.py
from __future__ import annotations

"""
StreamHub — Application Exceptions
==================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
carries a **stable machine-readable code**, a human message, the intended
HTTP status and optional details. The single set of handlers in
`streamhub.core.exception_handlers` renders every one of them into the error
envelope.

Key ideas
---------
- `ErrorKind` is the closed taxonomy (code + status). Services only ever
  raise one of the typed subclasses below.
- `code` defaults to the kind's code but may be narrower (e.g. token errors
  use `TOKEN_EXPIRED` / `INVALID_TOKEN` while staying Authentication errors).
- Zero breaking changes for callers already catching `HTTPException`.

Usage
-----
    raise NotFoundError("Movie")                      # 404 "Movie not found"
    raise ConflictError("User with this email or phone already exists")
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "ErrorKind",
    "AppException",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "InternalError",
    "TokenExpiredError",
    "InvalidTokenError",
]


# ──────────────────────────────────────────────────────────────
# 🏷️ Taxonomy
# ──────────────────────────────────────────────────────────────
class ErrorKind(Enum):
    VALIDATION = ("VALIDATION_ERROR", status.HTTP_400_BAD_REQUEST)
    AUTHENTICATION = ("AUTHENTICATION_ERROR", status.HTTP_401_UNAUTHORIZED)
    AUTHORIZATION = ("AUTHORIZATION_ERROR", status.HTTP_403_FORBIDDEN)
    NOT_FOUND = ("NOT_FOUND", status.HTTP_404_NOT_FOUND)
    CONFLICT = ("CONFLICT", status.HTTP_409_CONFLICT)
    RATE_LIMIT = ("RATE_LIMIT_EXCEEDED", status.HTTP_429_TOO_MANY_REQUESTS)
    INTERNAL = ("INTERNAL_ERROR", status.HTTP_500_INTERNAL_SERVER_ERROR)

    def __init__(self, code: str, status_code: int) -> None:
        self.code = code
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        """Best match for a bare HTTP status (used for non-app HTTP errors)."""
        for kind in cls:
            if kind.status_code == status_code:
                return kind
        if 400 <= status_code < 500:
            return cls.VALIDATION
        return cls.INTERNAL


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception.

    Attributes
    -----------
    kind : ErrorKind
        Taxonomy entry; decides the HTTP status.
    code : str
        Stable machine-readable code (defaults to `kind.code`).
    message : str
        Human-readable error message (also exposed as `detail`).
    details : Any
        Optional machine-readable details (field errors, constraint names...).
    headers : dict | None
        Optional headers (e.g., `{"WWW-Authenticate": "Bearer"}`).
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        msg = message or self.default_message
        super().__init__(status_code=self.kind.status_code, detail=msg, headers=headers)
        self.message: str = msg
        self.code: str = code or self.kind.code
        self.details: Optional[Any] = details

    def to_error(self) -> Dict[str, Any]:
        """Return the `error` member of the envelope."""
        body: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "statusCode": self.status_code,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


# ──────────────────────────────────────────────────────────────
# 🧱 Typed errors
# ──────────────────────────────────────────────────────────────
class ValidationError(AppException):
    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"


class AuthenticationError(AppException):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Authentication failed"


class AuthorizationError(AppException):
    kind = ErrorKind.AUTHORIZATION
    default_message = "Access denied"


class NotFoundError(AppException):
    """404 with the conventional "<Resource> not found" message."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"

    def __init__(self, resource: str = "Resource", **kwargs: Any) -> None:
        super().__init__(f"{resource} not found", **kwargs)


class ConflictError(AppException):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class RateLimitError(AppException):
    kind = ErrorKind.RATE_LIMIT
    default_message = "Too many requests"


class InternalError(AppException):
    kind = ErrorKind.INTERNAL


# ──────────────────────────────────────────────────────────────
# 🔑 Auth/Token exceptions
# ──────────────────────────────────────────────────────────────
class TokenExpiredError(AuthenticationError):
    """Signature is fine but `exp` is in the past."""

    default_message = "Token has expired"

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, code="TOKEN_EXPIRED", **kwargs)


class InvalidTokenError(AuthenticationError):
    """Bad signature, malformed token or missing required claims."""

    default_message = "Invalid token"

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, code="INVALID_TOKEN", **kwargs)
