"""
app/dependencies/context.py — Per-request DB connection and language
=====================================================================
Shared by the public site app and the admin app. Both factories put the
sqlite path and the i18n settings on ``app.state``:

    app.state.db_path          Path to the sqlite file
    app.state.default_lang     e.g. "fr"
    app.state.supported_langs  e.g. ("fr", "en")
"""

import sqlite3
from functools import partial
from pathlib import Path
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, Header, Query, Request

from app.services.language import resolve_lang
from app.services.localisation import OverlayApplier
from config_loader import db_path_from, i18n_settings
from db.models import get_db
from db.translations import get_all_fields


def configure_state(app: FastAPI, config: dict, db_path: Optional[Path] = None):
    """Put db path and i18n settings where the dependencies below look for them."""
    default_lang, supported = i18n_settings(config)
    app.state.config = config
    app.state.db_path = Path(db_path) if db_path else db_path_from(config)
    app.state.default_lang = default_lang
    app.state.supported_langs = supported


def db(request: Request) -> Iterator[sqlite3.Connection]:
    conn = get_db(request.app.state.db_path)
    try:
        yield conn
    finally:
        conn.close()


def request_lang(
    request: Request,
    lang: Optional[str] = Query(None, description="Two-letter language code, overrides Accept-Language"),
    accept_language: Optional[str] = Header(None),
) -> str:
    state = request.app.state
    return resolve_lang(lang, accept_language, state.supported_langs, state.default_lang)


def overlay_applier(request: Request,
                    conn: sqlite3.Connection = Depends(db)) -> OverlayApplier:
    return OverlayApplier(partial(get_all_fields, conn), request.app.state.default_lang)
