"""
test_language.py — Language negotiation
=======================================
"""

import pytest

from app.services.language import lang_meta, parse_language_preference, resolve_lang

SUPPORTED = ("fr", "en")


@pytest.mark.parametrize("raw, expected", [
    (None, "fr"),
    ("", "fr"),
    ("xx", "fr"),
    ("en", "en"),
    ("EN", "en"),
    ("en-US", "en"),
    ("en-US,en;q=0.9", "en"),
    ("fr;q=0.9,en", "fr"),
    ("de-DE,en;q=0.8", "fr"),
    ("  en  ", "en"),
])
def test_parse_language_preference(raw, expected):
    assert parse_language_preference(raw, SUPPORTED, "fr") == expected


def test_parse_language_preference_non_string():
    assert parse_language_preference(42, SUPPORTED, "fr") == "fr"


def test_query_param_wins_over_header():
    assert resolve_lang("en", "fr-FR", SUPPORTED, "fr") == "en"
    assert resolve_lang("fr", "en-US", SUPPORTED, "fr") == "fr"


def test_unsupported_query_param_falls_back_to_header():
    assert resolve_lang("de", "en-GB", SUPPORTED, "fr") == "en"


def test_nothing_resolves_to_default():
    assert resolve_lang(None, None, SUPPORTED, "fr") == "fr"
    assert resolve_lang("", "", SUPPORTED, "fr") == "fr"


def test_lang_meta():
    assert lang_meta("en") == {"lang": "en", "lang_label": "English"}
    assert lang_meta("fr")["lang_label"] == "Français"
