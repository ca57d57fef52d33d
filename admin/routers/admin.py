# Admin Router
# Purpose: Portfolio management endpoints: records, translations, inbox and dashboard
# Main functions: dashboard stats, per-kind CRUD, translation editor, message handling
# Dependent files: admin/dependencies/access_control.py, db/models.py, db/translations.py

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from typing import Optional
import logging
import sqlite3

from admin.dependencies.access_control import get_current_admin_user
from app.dependencies.context import db
from app.schemas import RECORD_MODELS, About, ContactMessage, TranslationUpdate, dump, to_model
from app.services.localisation import TRANSLATABLE_FIELDS
from db.models import (
    MESSAGE_READ, MESSAGE_STATUSES, MESSAGE_UNREAD, RECORD_KINDS,
    RecordNotFound, count_messages, count_records, delete_message, delete_record,
    get_about, get_record, list_messages, list_records, mark_message_read,
    save_about, save_record,
)
from db.translations import delete_all_for_record, list_for_record, upsert_many

logger = logging.getLogger(__name__)

RECENT_MESSAGES = 5

# translation tag (Project, Skill, ...) → record kind (projects, skills, ...)
KIND_BY_TAG = {rk.tag: rk.name for rk in RECORD_KINDS.values()}


# --- ROUTER SETUP ---

router = APIRouter(dependencies=[Depends(get_current_admin_user)])


# ============================================================================
# DASHBOARD
# ============================================================================

@router.get("/dashboard/stats")
async def dashboard_stats(conn: sqlite3.Connection = Depends(db)):
    """Record counts, inbox counts and the most recent messages."""
    recent = list_messages(conn, limit=RECENT_MESSAGES)
    stats = {
        "totalProjects": count_records(conn, "projects"),
        "totalSkills": count_records(conn, "skills"),
        "totalExperiences": count_records(conn, "experiences"),
        "totalEducation": count_records(conn, "education"),
        "totalLanguages": count_records(conn, "languages"),
        "totalInterests": count_records(conn, "interests"),
        "totalMessages": count_messages(conn),
        "unreadMessages": count_messages(conn, MESSAGE_UNREAD),
        "readMessages": count_messages(conn, MESSAGE_READ),
        "recentMessages": [dump(ContactMessage.model_validate(m)) for m in recent],
    }
    logger.info(
        f"Dashboard stats - Projects: {stats['totalProjects']}, Skills: {stats['totalSkills']}, "
        f"Messages: {stats['totalMessages']}, Unread: {stats['unreadMessages']}"
    )
    return stats


# ============================================================================
# ABOUT (singleton)
# ============================================================================

@router.get("/about")
async def get_about_section(conn: sqlite3.Connection = Depends(db)):
    about = get_about(conn)
    if about is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return dump(to_model("about", about))


@router.put("/about")
async def update_about_section(body: About, conn: sqlite3.Connection = Depends(db)):
    logger.info(f"Saving About section for: {body.name}")
    saved = save_about(conn, body.model_dump())
    conn.commit()
    return dump(to_model("about", saved))


# ============================================================================
# RECORD CRUD: projects, skills, experiences, education, languages, interests
# ============================================================================

def _register_crud(kind: str):
    model = RECORD_MODELS[kind]
    rk = RECORD_KINDS[kind]
    path = f"/{kind}"

    async def list_all(conn: sqlite3.Connection = Depends(db)):
        records = [to_model(kind, r) for r in list_records(conn, kind)]
        return {kind: dump(records), "count": len(records)}

    async def create(body: model, conn: sqlite3.Connection = Depends(db)):
        data = body.model_dump()
        data["id"] = None
        saved = save_record(conn, kind, data)
        conn.commit()
        logger.info(f"{rk.tag} saved with ID: {saved['id']}")
        return dump(to_model(kind, saved))

    async def update(record_id: int, body: model, conn: sqlite3.Connection = Depends(db)):
        data = body.model_dump()
        data["id"] = record_id
        saved = save_record(conn, kind, data)
        conn.commit()
        logger.info(f"{rk.tag} #{record_id} updated")
        return dump(to_model(kind, saved))

    async def delete(record_id: int, conn: sqlite3.Connection = Depends(db)):
        delete_record(conn, kind, record_id)
        delete_all_for_record(conn, rk.tag, record_id)
        conn.commit()
        logger.info(f"{rk.tag} #{record_id} deleted with its translations")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    for func, verb in ((list_all, "list"), (create, "create"), (update, "update"), (delete, "delete")):
        func.__name__ = f"{verb}_{kind}"

    router.add_api_route(path, list_all, methods=["GET"], summary=f"List {kind}")
    router.add_api_route(path, create, methods=["POST"], status_code=status.HTTP_201_CREATED,
                         summary=f"Create {rk.tag}")
    router.add_api_route(f"{path}/{{record_id}}", update, methods=["PUT"], summary=f"Update {rk.tag}")
    router.add_api_route(f"{path}/{{record_id}}", delete, methods=["DELETE"],
                         status_code=status.HTTP_204_NO_CONTENT, summary=f"Delete {rk.tag}")


for _kind in ("projects", "skills", "experiences", "education", "languages", "interests"):
    _register_crud(_kind)


# ============================================================================
# CONTACT MESSAGES
# ============================================================================

@router.get("/messages")
async def get_messages(status_filter: Optional[str] = Query(None, alias="status"),
                       conn: sqlite3.Connection = Depends(db)):
    if status_filter is not None:
        status_filter = status_filter.upper()
        if status_filter not in MESSAGE_STATUSES:
            raise HTTPException(status_code=400, detail=f"status must be one of {', '.join(MESSAGE_STATUSES)}")
    messages = list_messages(conn, status=status_filter)
    return {"messages": [dump(ContactMessage.model_validate(m)) for m in messages],
            "count": len(messages)}


@router.put("/messages/{message_id}/read")
async def read_message(message_id: int, conn: sqlite3.Connection = Depends(db)):
    message = mark_message_read(conn, message_id)
    conn.commit()
    return dump(ContactMessage.model_validate(message))


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_message(message_id: int, conn: sqlite3.Connection = Depends(db)):
    delete_message(conn, message_id)
    conn.commit()
    logger.info(f"Message #{message_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# TRANSLATIONS
# ============================================================================

def _require_record(conn: sqlite3.Connection, record_type: str, record_id: int):
    kind = KIND_BY_TAG.get(record_type)
    if kind is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown record type '{record_type}'. Use one of: {', '.join(KIND_BY_TAG)}",
        )
    if get_record(conn, kind, record_id) is None:
        raise RecordNotFound(record_type, record_id)


@router.get("/translations/{record_type}/{record_id}")
async def get_translations(record_type: str, record_id: int,
                           conn: sqlite3.Connection = Depends(db)):
    """Every stored translation of one record, grouped by language."""
    _require_record(conn, record_type, record_id)
    by_lang: dict[str, dict[str, str]] = {}
    for t in list_for_record(conn, record_type, record_id):
        by_lang.setdefault(t.language, {})[t.field_name] = t.value
    return {"recordType": record_type, "recordId": record_id, "translations": by_lang}


@router.put("/translations/{record_type}/{record_id}/{language}")
async def put_translations(record_type: str, record_id: int, language: str,
                           body: TranslationUpdate, request: Request,
                           conn: sqlite3.Connection = Depends(db)):
    """Upsert translated fields of one record in one language."""
    state = request.app.state
    language = language.lower()
    if language == state.default_lang:
        raise HTTPException(
            status_code=400,
            detail=f"'{language}' is the default language, edit the record itself instead",
        )
    if language not in state.supported_langs:
        raise HTTPException(status_code=400, detail=f"Unsupported language '{language}'")
    unknown = sorted(set(body.fields) - set(TRANSLATABLE_FIELDS))
    if unknown:
        raise HTTPException(status_code=400, detail=f"Fields not translatable: {', '.join(unknown)}")
    _require_record(conn, record_type, record_id)

    stored = upsert_many(conn, record_type, record_id, language, body.fields)
    logger.info(f"Saved {len(stored)} translations for {record_type} #{record_id} [{language}]")
    return {"translations": [t.to_dict() for t in stored], "count": len(stored)}


@router.delete("/translations/{record_type}/{record_id}")
async def delete_translations(record_type: str, record_id: int,
                              conn: sqlite3.Connection = Depends(db)):
    deleted = delete_all_for_record(conn, record_type, record_id)
    return {"deleted": deleted}
