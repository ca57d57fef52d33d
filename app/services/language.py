"""
app/services/language.py — Language negotiation
================================================
Turns a free-form preference (Accept-Language header, ?lang= value) into one
of the supported two-letter codes. Pure functions, never raise.

  "en-US,fr;q=0.8"  → "en"
  "fr;q=0.9,en"     → "fr"
  "xx" / "" / None  → default language

Only the first entry of a header counts; q-weights are not compared.
"""

from typing import Iterable, Optional

LANG_LABELS = {"fr": "Français", "en": "English"}


def parse_language_preference(raw: Optional[str], supported: Iterable[str],
                              default: str) -> str:
    """First entry of `raw`, minus region and q-weight, if supported; else `default`."""
    if not raw or not isinstance(raw, str):
        return default
    first = raw.split(",", 1)[0]
    code = first.split(";", 1)[0].split("-", 1)[0].strip().lower()
    if code in set(supported):
        return code
    return default


def resolve_lang(lang_param: Optional[str], accept_language: Optional[str],
                 supported: Iterable[str], default: str) -> str:
    """
    Priority: ?lang= > Accept-Language header > default.
    An unsupported ?lang= value is ignored rather than forcing the default.
    """
    supported = tuple(supported)
    if lang_param:
        code = parse_language_preference(lang_param, supported, "")
        if code:
            return code
    return parse_language_preference(accept_language, supported, default)


def lang_meta(lang: str) -> dict:
    return {"lang": lang, "lang_label": LANG_LABELS.get(lang, lang)}
