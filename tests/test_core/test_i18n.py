# tests/test_core/test_i18n.py
import pytest

from streamhub.core.i18n import parse_accept_language, pick, resolve_field, resolve_language
from streamhub.db.models import Movie


# ─────────────────────────────────────────────────────────────
# resolve_language
# ─────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "explicit, header, expected",
    [
        ("ar", "en", "ar"),
        (None, "fr,ar;q=0.5", "ar"),
        (None, None, "en"),
        ("AR", None, "ar"),
        ("fr", "ar", "ar"),          # unsupported query value falls through to the header
        (None, "ar-EG,en;q=0.9", "ar"),
        (None, "en;q=0.4,ar;q=0.8", "ar"),
        (None, "ar;q=0,en;q=0.1", "en"),
        (None, "ar;q=0", "en"),
        (None, "de,fr", "en"),
        (None, ";;;,q=abc", "en"),   # garbage never raises
    ],
)
def test_resolve_language(explicit, header, expected):
    assert resolve_language(explicit, header) == expected


def test_accept_language_ties_keep_first_listed():
    assert parse_accept_language("ar,en") == "ar"
    assert parse_accept_language("en,ar") == "en"


def test_accept_language_bad_weight_is_ignored():
    assert parse_accept_language("ar;q=oops,en;q=0.2") == "en"


# ─────────────────────────────────────────────────────────────
# resolve_field / pick
# ─────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "row, language, expected",
    [
        ({"title_en": "Matrix", "title_ar": "المصفوفة"}, "ar", "المصفوفة"),
        ({"title_en": "Matrix", "title_ar": "المصفوفة"}, "en", "Matrix"),
        ({"title_en": "Matrix", "title_ar": ""}, "ar", "Matrix"),
        ({"title_en": "Matrix", "title_ar": None}, "ar", "Matrix"),
        ({"title_en": None, "title_ar": None}, "ar", None),
        ({"title_en": "", "title_ar": "المصفوفة"}, "en", None),
    ],
)
def test_resolve_field_on_mappings(row, language, expected):
    assert resolve_field(row, "title", language) == expected


def test_resolve_field_on_orm_row_uses_translations():
    movie = Movie(title_en="Inception", title_ar="الحاضنة", director_en="Christopher Nolan")
    assert resolve_field(movie, "title", "ar") == "الحاضنة"
    assert resolve_field(movie, "director", "ar") == "Christopher Nolan"
    assert movie.translations("title") == {"en": "Inception", "ar": "الحاضنة"}


def test_translations_rejects_unknown_attribute():
    with pytest.raises(AttributeError):
        Movie(title_en="x").translations("slug")


def test_pick_empty_list_falls_back():
    assert pick({"en": ["Keanu Reeves"], "ar": []}, "ar") == ["Keanu Reeves"]
    assert pick(None, "en") is None
