# streamhub/core/i18n.py
from __future__ import annotations

"""
StreamHub — Language resolution
===============================

Two small rules used by every serialization path:

1) **Which language does this request want?**
   `resolve_language(explicit, accept_language)`:
   explicit `?lang=` (when supported) > `Accept-Language` > `DEFAULT_LANGUAGE`.

2) **Which value do we show for a multilingual attribute?**
   A multilingual attribute is a mapping `{language_code: value}`.
   `pick(values, language)` returns the requested language's value when it is
   non-empty, else the default language's value, else `None`.
   `resolve_field(entity, "title", language)` does the same for anything that
   exposes such a mapping (ORM rows via `TranslatableMixin.translations()`,
   or plain dicts with `<field>_<lang>` keys).

Header parsing never raises: malformed input degrades to the default.
"""

from typing import Any, Mapping, Optional

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "ar")
DEFAULT_LANGUAGE = "en"

Translations = Mapping[str, Any]


def is_supported(code: Optional[str]) -> bool:
    return bool(code) and code in SUPPORTED_LANGUAGES


def _normalize(code: Optional[str]) -> str:
    return (code or "").strip().lower()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


# ─────────────────────────────────────────────────────────────
# 🌐 Request language
# ─────────────────────────────────────────────────────────────
def parse_accept_language(header: Optional[str]) -> Optional[str]:
    """Return the best supported primary subtag from an `Accept-Language` value.

    Entries are `tag[;q=weight]`; weight defaults to 1.0. Region suffixes are
    dropped (`ar-EG` → `ar`). The highest weight wins and ties keep the
    first-listed entry. Entries with an unreadable or zero weight are ignored.
    """
    if not header:
        return None

    best: Optional[str] = None
    best_q = 0.0
    for raw in str(header).split(","):
        parts = [p.strip() for p in raw.split(";")]
        tag = _normalize(parts[0]).split("-")[0]
        if not is_supported(tag):
            continue

        q = 1.0
        for param in parts[1:]:
            if param.lower().startswith("q="):
                try:
                    q = float(param[2:])
                except ValueError:
                    q = 0.0
                break
        if q <= 0:
            continue
        if best is None or q > best_q:
            best, best_q = tag, q
    return best


def resolve_language(explicit: Optional[str] = None, accept_language: Optional[str] = None) -> str:
    """Pick the response language for a request."""
    code = _normalize(explicit)
    if is_supported(code):
        return code
    return parse_accept_language(accept_language) or DEFAULT_LANGUAGE


# ─────────────────────────────────────────────────────────────
# 🈯 Multilingual values
# ─────────────────────────────────────────────────────────────
def pick(values: Optional[Translations], language: str) -> Any:
    """Requested language value, falling back to the default language."""
    if not values:
        return None
    value = values.get(language)
    if not _is_blank(value):
        return value
    fallback = values.get(DEFAULT_LANGUAGE)
    return None if _is_blank(fallback) else fallback


def translations_of(entity: Any, field: str) -> dict[str, Any]:
    """Collect `{lang: value}` for `field` from a row or a flat mapping."""
    getter = getattr(entity, "translations", None)
    if callable(getter):
        return getter(field)
    if isinstance(entity, Mapping):
        return {lang: entity.get(f"{field}_{lang}") for lang in SUPPORTED_LANGUAGES}
    return {lang: getattr(entity, f"{field}_{lang}", None) for lang in SUPPORTED_LANGUAGES}


def resolve_field(entity: Any, field: str, language: str) -> Any:
    """Display value of a multilingual attribute (`None` when both are empty)."""
    if entity is None:
        return None
    return pick(translations_of(entity, field), language)


__all__ = [
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    "Translations",
    "is_supported",
    "parse_accept_language",
    "resolve_language",
    "pick",
    "translations_of",
    "resolve_field",
]
