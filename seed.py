"""
seed.py — Load portfolio content from YAML
==========================================
Fills an empty database with the records of a seed file, plus the
translations attached to each record. A kind that already has rows is
skipped unless --reset is given, so the command is safe to re-run.

Seed file layout (see data/seed.yaml):

    about:
      name: ...
      translations:
        en: {title: ..., description: ...}
    projects:
      - title: ...
        technologies: [Java, React]
        translations:
          en: {title: ..., description: ...}

Usage:
    python seed.py
    python seed.py --file data/seed.yaml --db /tmp/portfolio.db --reset
"""

import argparse
import logging
import sqlite3
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from app.schemas import RECORD_MODELS
from app.services.localisation import TRANSLATABLE_FIELDS
from config_loader import db_path_from, i18n_settings, load_config
from db.models import (
    RECORD_KINDS, count_records, get_db, init_db, save_about, save_record,
)
from db.translations import upsert_many

log = logging.getLogger("portfolio.seed")

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "seed.yaml"

# seed order; "about" is the singleton
SEED_KINDS = ("about", "skills", "projects", "experiences", "education", "languages", "interests")


def reset_content(conn: sqlite3.Connection):
    """Drop every record and translation (contact messages are kept)."""
    with conn:
        for rk in RECORD_KINDS.values():
            conn.execute(f"DELETE FROM {rk.table}")
        conn.execute("DELETE FROM translations")
    log.warning("Existing portfolio content and translations removed")


def _store_translations(conn: sqlite3.Connection, tag: str, record_id: int,
                        translations: Optional[dict], default_lang: str) -> int:
    stored = 0
    for language, fields in (translations or {}).items():
        language = str(language).lower()
        if language == default_lang:
            log.warning(f"Skipping {tag} #{record_id} translations in default language '{language}'")
            continue
        fields = {str(k): str(v) for k, v in (fields or {}).items()}
        rejected = sorted(set(fields) - set(TRANSLATABLE_FIELDS))
        if rejected:
            log.warning(f"Skipping non-translatable fields for {tag} #{record_id} [{language}]: {', '.join(rejected)}")
        accepted = {k: v for k, v in fields.items() if k in TRANSLATABLE_FIELDS}
        stored += len(upsert_many(conn, tag, record_id, language, accepted))
    return stored


def seed_kind(conn: sqlite3.Connection, kind: str, entries, default_lang: str) -> tuple[int, int]:
    """Insert one kind's records. Returns (records, translations) stored."""
    rk = RECORD_KINDS[kind]
    if count_records(conn, kind):
        log.info(f"{kind}: already populated, skipping")
        return 0, 0
    if kind == "about":
        entries = [entries] if entries else []

    model = RECORD_MODELS[kind]
    records = translations = 0
    for position, entry in enumerate(entries or []):
        data = dict(entry)
        pending = data.pop("translations", None)
        data.pop("id", None)
        try:
            data = model.model_validate(data).model_dump()
        except ValidationError as e:
            log.warning(f"{kind}: skipping entry #{position}, {e.error_count()} invalid field(s): {e}")
            continue
        saved = save_about(conn, data) if kind == "about" else save_record(conn, kind, data)
        conn.commit()
        records += 1
        translations += _store_translations(conn, rk.tag, saved["id"], pending, default_lang)
    log.info(f"{kind}: {records} records, {translations} translations")
    return records, translations


def seed(conn: sqlite3.Connection, content: dict, default_lang: str) -> dict:
    summary = {}
    for kind in SEED_KINDS:
        if kind in content:
            summary[kind] = seed_kind(conn, kind, content[kind], default_lang)
    return summary


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the portfolio database from a YAML file.")
    parser.add_argument("--file", type=str, default=str(DEFAULT_SEED_FILE),
                        help="Seed YAML file (default: data/seed.yaml)")
    parser.add_argument("--db", type=str,
                        help="SQLite file to seed (default: database.path from config)")
    parser.add_argument("--reset", action="store_true",
                        help="Delete existing records and translations before seeding")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    config = load_config()
    default_lang, _ = i18n_settings(config)
    db_path = Path(args.db) if args.db else db_path_from(config)

    with open(args.file) as f:
        content = yaml.safe_load(f) or {}

    init_db(db_path)
    conn = get_db(db_path)
    try:
        if args.reset:
            reset_content(conn)
        summary = seed(conn, content, default_lang)
    finally:
        conn.close()

    total = sum(r for r, _ in summary.values())
    log.info(f"Seeding finished: {total} records into {db_path}")
    return summary


if __name__ == "__main__":
    main()
