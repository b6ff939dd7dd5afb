from __future__ import annotations

"""
Notification dispatch
=====================

The OTP flow hands codes to a `NotificationDispatcher`; it never talks to an
SMS or e-mail provider directly. Real providers implement the same one-method
protocol and are selected at startup (`app.state.notifier`).

Contract
--------
`await dispatcher.send(code, destination) -> bool`
  - `True` when the provider accepted the message.
  - `False` (or an exception) means delivery failed. Callers treat delivery as
    best-effort: they log and carry on.
"""

from typing import Protocol, runtime_checkable
import logging

from fastapi import Request

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationDispatcher(Protocol):
    async def send(self, code: str, destination: str) -> bool:  # pragma: no cover - protocol
        ...


def mask_destination(destination: str) -> str:
    """`john@example.com` → `jo***@example.com`, `+1234567890` → `*******7890`."""
    value = (destination or "").strip()
    if "@" in value:
        local, _, domain = value.partition("@")
        return f"{local[:2]}***@{domain}"
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


class LoggingNotificationDispatcher:
    """Development dispatcher: logs that a code was issued, sends nothing.

    The code itself is only logged at DEBUG so it never lands in production
    logs by accident.
    """

    async def send(self, code: str, destination: str) -> bool:
        logger.info("OTP dispatched to %s", mask_destination(destination))
        logger.debug("OTP for %s is %s", mask_destination(destination), code)
        return True


def get_notifier(request: Request) -> NotificationDispatcher:
    """FastAPI dependency: the dispatcher chosen at startup."""
    notifier = getattr(request.app.state, "notifier", None)
    if notifier is None:
        notifier = LoggingNotificationDispatcher()
        request.app.state.notifier = notifier
    return notifier


__all__ = [
    "NotificationDispatcher",
    "LoggingNotificationDispatcher",
    "mask_destination",
    "get_notifier",
]
