# streamhub/core/config.py
from __future__ import annotations

"""
# StreamHub — Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- One place for auth knobs (JWT secret/TTL, bcrypt cost, OTP length/TTL).
- Either a full `DATABASE_URL` or the classic `POSTGRES_*` parts.
- Immutable after startup; request code only ever reads it.

## Usage
    from streamhub.core.config import settings
"""

import logging
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)
load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _split_csv(v: str | None) -> list[str]:
    """Split a comma-separated string into a trimmed list (empty-safe)."""
    if not v:
        return []
    return [s.strip() for s in str(v).split(",") if s and s.strip()]


def _to_async_dsn(url: str) -> str:
    """Convert a sync Postgres URL to an asyncpg URL if needed."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - `JWT_SECRET_KEY` has no default and must be provided.
        - The session cookie is only marked `Secure` in production.

    Notes:
        - Prefer `async_database_url` when building engines.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "StreamHub API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Security / JWT ────────────────────────────────────────
    JWT_SECRET_KEY: SecretStr = Field(...)
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(7, ge=1, le=90)
    PASSWORD_BCRYPT_ROUNDS: int = Field(10, ge=4, le=15)
    AUTH_COOKIE_NAME: str = "authToken"

    # ── OTP ───────────────────────────────────────────────────
    OTP_LENGTH: int = Field(6, ge=4, le=10)
    OTP_TTL_MINUTES: int = Field(10, ge=1, le=60)

    # ── Database ──────────────────────────────────────────────
    DATABASE_URL: Optional[str] = None  # full DSN; wins over POSTGRES_*
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "streamhub"
    DB_ECHO: bool = False

    # ── Catalog / search limits ───────────────────────────────
    DEFAULT_PAGE_SIZE: int = Field(20, ge=1, le=100)
    MAX_PAGE_SIZE: int = Field(100, ge=1, le=500)
    LIVE_TV_LIMIT: int = Field(50, ge=1, le=500)
    SEARCH_RESULT_LIMIT: int = Field(50, ge=1, le=100)
    TRENDING_LIMIT: int = Field(10, ge=1, le=100)

    # ── CORS ──────────────────────────────────────────────────
    FRONTEND_ORIGINS: Optional[str] = None  # CSV

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("FRONTEND_ORIGINS", mode="before")
    @classmethod
    def _normalize_frontend_csv(cls, v):
        return None if v is None else ",".join(_split_csv(str(v)))

    @field_validator("API_PREFIX", mode="before")
    @classmethod
    def _normalize_prefix(cls, v) -> str:
        s = "/" + str(v or "").strip().strip("/")
        return "" if s == "/" else s

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENV.lower() == "development"

    @property
    def async_database_url(self) -> str:
        """Async SQLAlchemy DSN."""
        if self.DATABASE_URL:
            return _to_async_dsn(self.DATABASE_URL.strip())
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def frontend_origins_list(self) -> List[str]:
        return _split_csv(self.FRONTEND_ORIGINS)

    @property
    def access_token_ttl_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


# Singleton instance
settings = Settings()
