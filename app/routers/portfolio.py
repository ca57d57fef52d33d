"""
app/routers/portfolio.py — Public portfolio endpoints
======================================================

Endpoints (all GET, all localised):
  /api/v1/about          → About section (data is null when none exists)
  /api/v1/projects       → projects, display order
  /api/v1/skills         → skills
  /api/v1/experiences    → work experience
  /api/v1/education      → education entries
  /api/v1/languages      → spoken languages
  /api/v1/interests      → interests

Language comes from ?lang= or Accept-Language (see app/services/language.py).
Translated fields are overlaid per record; anything without a translation is
served in the default language.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, Response

from app.dependencies.context import db, overlay_applier, request_lang
from app.schemas import dump, to_model
from app.services.language import lang_meta
from app.services.localisation import OverlayApplier
from db.models import RECORD_KINDS, get_about, list_records

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Portfolio"])


def ok(data, lang: str) -> dict:
    return {"status": "success", "data": data, "meta": lang_meta(lang)}


def _list_localised(conn: sqlite3.Connection, kind: str, applier: OverlayApplier,
                    lang: str) -> list:
    records = [to_model(kind, row) for row in list_records(conn, kind)]
    logger.debug(f"Found {len(records)} {kind} [lang={lang}]")
    return applier.localise_many(records, RECORD_KINDS[kind].tag, lang)


@router.get("/about", summary="About section")
async def about(
    response: Response,
    conn: sqlite3.Connection = Depends(db),
    applier: OverlayApplier = Depends(overlay_applier),
    lang: str = Depends(request_lang),
):
    record = to_model("about", get_about(conn))
    if record is None:
        logger.warning("No About section found in database")
    record = applier.localise(record, "About", lang)
    response.headers["Content-Language"] = lang
    return ok(dump(record), lang)


def _register_list_route(path: str, kind: str, summary: str):
    async def endpoint(
        response: Response,
        conn: sqlite3.Connection = Depends(db),
        applier: OverlayApplier = Depends(overlay_applier),
        lang: str = Depends(request_lang),
    ):
        response.headers["Content-Language"] = lang
        return ok(dump(_list_localised(conn, kind, applier, lang)), lang)

    endpoint.__name__ = f"list_{kind}"
    router.add_api_route(path, endpoint, methods=["GET"], summary=summary)


_register_list_route("/projects", "projects", "All projects")
_register_list_route("/skills", "skills", "All skills")
_register_list_route("/experiences", "experiences", "All work experience")
_register_list_route("/education", "education", "All education entries")
_register_list_route("/languages", "languages", "All spoken languages")
_register_list_route("/interests", "interests", "All interests")
