# streamhub/core/logger.py
from __future__ import annotations

"""
StreamHub — Logging (Loguru)
----------------------------
- Pretty console logs by default; optional JSON logs via `LOG_JSON=1`
- Request correlation: every record carries `request_id` (RequestIDMiddleware)
- Intercepts stdlib logging (uvicorn/fastapi/starlette/sqlalchemy and our own
  `streamhub.*` module loggers) into Loguru
- Optional file sink with rotation

Env
---
LOG_LEVEL=INFO|DEBUG|WARNING|ERROR (default: INFO)
LOG_JSON=1 (enable JSON logs; pretty logs otherwise)
LOG_TO_FILE=1 (write logs/app.log with rotation; default: 0)
LOG_DIR=logs
LOG_FILE=app.log
LOG_ROTATION=10 MB
APP_DEBUG=1 (enables backtrace/diagnose in console sink)

Importing this module configures the sinks; `setup_logging()` re-runs the
setup (tests use it after tweaking the env).
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

_TRUTHY = {"1", "true", "yes"}

# Loggers whose stdlib records are routed into Loguru.
INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "fastapi",
    "starlette",
    "sqlalchemy.engine",
    "streamhub",
)


# ─────────────────────────────────────────────────────────────
# 🧾 Formatters
# ─────────────────────────────────────────────────────────────
def _fmt_pretty(record) -> str:
    """Colorized single-line formatter with request_id support."""
    record["extra"]["request_id"] = record["extra"].get("request_id", "N/A")
    safe_name = record["name"].replace("<", "[").replace(">", "]")
    safe_func = record["function"].replace("<", "[").replace(">", "]")
    line = (
        f"<green>{record['time']:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        f"<level>{record['level']:<8}</level> | "
        f"<cyan>{safe_name}</cyan>:<cyan>{safe_func}</cyan>:<cyan>{record['line']}</cyan> - "
        "<level>{message}</level> | request_id={extra[request_id]}\n"
    )
    if record["exception"]:
        line += "{exception}\n"
    return line


def _serialize(record) -> str:
    payload: Dict[str, Any] = {
        "time": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f%z"),
        "level": record["level"].name,
        "logger": record["name"],
        "func": record["function"],
        "line": record["line"],
        "message": record["message"],
        "request_id": record["extra"].get("request_id", "N/A"),
    }
    for k, v in record["extra"].items():
        if k not in payload and k != "serialized":
            payload[k] = v
    if record["exception"]:
        payload["exception"] = str(record["exception"].value)
    return json.dumps(payload, ensure_ascii=False, default=str)


def _fmt_json(record) -> str:
    """Structured JSON logs, one object per line."""
    record["extra"]["serialized"] = _serialize(record)
    return "{extra[serialized]}\n"


# ─────────────────────────────────────────────────────────────
# 🔁 Intercept stdlib logging → Loguru
# ─────────────────────────────────────────────────────────────
class InterceptHandler(logging.Handler):
    """Route standard logging records into Loguru, keeping the caller frame."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


# ─────────────────────────────────────────────────────────────
# ⚙️ Setup
# ─────────────────────────────────────────────────────────────
def setup_logging() -> None:
    """(Re)configure Loguru sinks and stdlib interception from the environment."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    as_json = os.getenv("LOG_JSON", "0").lower() in _TRUTHY
    debug = os.getenv("APP_DEBUG", "0").lower() in _TRUTHY
    to_file = os.getenv("LOG_TO_FILE", "0").lower() in _TRUTHY

    logger.remove()
    logger.configure(extra={"request_id": "N/A"})

    fmt = _fmt_json if as_json else _fmt_pretty
    logger.add(
        sys.stdout,
        level=level,
        format=fmt,
        backtrace=debug,
        diagnose=debug,
    )

    if to_file:
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / os.getenv("LOG_FILE", "app.log")),
            rotation=os.getenv("LOG_ROTATION", "10 MB"),
            level=level,
            format=fmt,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(level if name != "sqlalchemy.engine" else logging.WARNING)
        std_logger.propagate = False


setup_logging()

__all__ = ["InterceptHandler", "setup_logging", "logger"]
