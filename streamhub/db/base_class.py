# streamhub/db/base_class.py
from __future__ import annotations

"""
# StreamHub — SQLAlchemy Base & Mixins

SQLAlchemy 2.0 declarative **Base** with:
- Global **naming conventions** (Alembic-friendly)
- Automatic **snake_case `__tablename__`** (models usually set their own)
- Helpful `__repr__` for debugging
- Common mixins:
  - `UUIDPKMixin` — string UUIDv4 primary key (portable across Postgres/SQLite)
  - `TimestampMixin` — `created_at` / `updated_at` (UTC, server-side)
  - `TranslatableMixin` — per-language views over `<field>_<lang>` columns

Usage:
    from streamhub.db.base_class import Base, UUIDPKMixin, TimestampMixin, TranslatableMixin

    class Genre(UUIDPKMixin, TimestampMixin, TranslatableMixin, Base):
        __translated__ = ("name", "description")
        name_en = Column(String(120), nullable=False)
        name_ar = Column(String(120))

Notes:
- Multilingual attributes are stored as one column per supported language so
  they stay indexable and searchable with plain `ILIKE`; the application only
  ever sees them as `{language: value}` mappings.
"""

import re
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, MetaData, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from streamhub.core.i18n import SUPPORTED_LANGUAGES

# ──────────────────────────────────────────────────────────────────────────────
# 🏷️ Naming conventions (stable constraint names for Alembic)
# ──────────────────────────────────────────────────────────────────────────────

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _to_snake(name: str) -> str:
    """Convert `CamelCase` / `PascalCase` to `snake_case` for table names."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def new_uuid() -> str:
    return str(uuid.uuid4())


# ──────────────────────────────────────────────────────────────────────────────
# 🧱 Declarative Base
# ──────────────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    """Global declarative base for StreamHub models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore[override]
        return _to_snake(cls.__name__)

    def __repr__(self) -> str:  # pragma: no cover (repr convenience)
        attrs: list[str] = []
        for key in ("id", "slug", "email", "status"):
            if key in self.__dict__:
                attrs.append(f"{key}={self.__dict__[key]!r}")
        return f"{self.__class__.__name__}({', '.join(attrs)})"


# ──────────────────────────────────────────────────────────────────────────────
# 🧩 Common mixins
# ──────────────────────────────────────────────────────────────────────────────

class UUIDPKMixin:
    """String UUIDv4 primary key generated application-side."""
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)


class TimestampMixin:
    """
    Server-side timestamps (UTC).
    - `created_at`: set once at insert
    - `updated_at`: set at insert and auto-updated on change
    """
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class TranslatableMixin:
    """
    Exposes `<field>_<lang>` column groups as language mappings.

    Subclasses list their multilingual attributes in `__translated__`.
    """
    __translated__: tuple[str, ...] = ()

    def translations(self, field: str) -> dict[str, Any]:
        if field not in self.__translated__:
            raise AttributeError(f"{type(self).__name__}.{field} is not a multilingual attribute")
        return {lang: getattr(self, f"{field}_{lang}", None) for lang in SUPPORTED_LANGUAGES}


__all__ = [
    "Base",
    "UUIDPKMixin",
    "TimestampMixin",
    "TranslatableMixin",
    "NAMING_CONVENTION",
    "new_uuid",
]
