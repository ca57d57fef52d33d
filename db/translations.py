"""
db/translations.py — Field Translation Store
============================================
One shared table holds translated values for any field of any record kind,
keyed by (entity_type, entity_id, field_name, language).

  get_field              → one value or None
  get_all_fields         → {field_name: value} for one record + language
  upsert                 → insert, or overwrite value/updated_at (created_at kept)
  upsert_many            → upsert per field, each one committed on its own
  delete_all_for_record  → drop every field/language of a record (idempotent)
  list_for_record        → every row of a record, all languages (admin editor)

Nothing here validates the language code; that is the request layer's job.
sqlite3 errors propagate to the caller untouched.
"""

import logging
import sqlite3
from dataclasses import asdict, dataclass
from typing import Optional

from db.models import now_iso

logger = logging.getLogger(__name__)


@dataclass
class TranslationRecord:
    id:          int
    record_type: str
    record_id:   int
    field_name:  str
    language:    str
    value:       str
    created_at:  str
    updated_at:  str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "TranslationRecord":
        return cls(
            id=row["id"],
            record_type=row["entity_type"],
            record_id=row["entity_id"],
            field_name=row["field_name"],
            language=row["language"],
            value=row["value"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> dict:
        return asdict(self)


def get_field(conn: sqlite3.Connection, record_type: str, record_id: int,
              field_name: str, language: str) -> Optional[str]:
    """Translated value for one field, or None when there is none."""
    row = conn.execute("""
        SELECT value FROM translations
        WHERE entity_type=? AND entity_id=? AND field_name=? AND language=?
    """, (record_type, record_id, field_name, language)).fetchone()
    return row["value"] if row else None


def get_all_fields(conn: sqlite3.Connection, record_type: str, record_id: int,
                   language: str) -> dict[str, str]:
    """All translated fields of one record in one language ({} when none)."""
    rows = conn.execute("""
        SELECT field_name, value FROM translations
        WHERE entity_type=? AND entity_id=? AND language=?
    """, (record_type, record_id, language)).fetchall()
    return {r["field_name"]: r["value"] for r in rows}


def upsert(conn: sqlite3.Connection, record_type: str, record_id: int,
           field_name: str, language: str, value: str) -> TranslationRecord:
    """
    Store or overwrite one translated value and return the stored row.

    A single INSERT ... ON CONFLICT statement committed on its own, so two
    writers on the same key never produce two rows; the last commit wins.
    """
    if value is None:
        raise ValueError("translation value may be empty but not None")

    ts = now_iso()
    with conn:
        conn.execute("""
            INSERT INTO translations
                (entity_type, entity_id, field_name, language, value, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(entity_type, entity_id, field_name, language) DO UPDATE SET
                value      = excluded.value,
                updated_at = excluded.updated_at
        """, (record_type, record_id, field_name, language, value, ts, ts))

    row = conn.execute("""
        SELECT * FROM translations
        WHERE entity_type=? AND entity_id=? AND field_name=? AND language=?
    """, (record_type, record_id, field_name, language)).fetchone()
    logger.debug(f"Upserted translation: {record_type} #{record_id} - {field_name} [{language}]")
    return TranslationRecord.from_row(row)


def upsert_many(conn: sqlite3.Connection, record_type: str, record_id: int,
                language: str, fields: dict[str, str]) -> list[TranslationRecord]:
    """Upsert every field of `fields`; earlier entries stay stored if a later one fails."""
    return [
        upsert(conn, record_type, record_id, field_name, language, value)
        for field_name, value in fields.items()
    ]


def delete_all_for_record(conn: sqlite3.Connection, record_type: str,
                          record_id: int) -> int:
    """Remove every translation of a record. Returns the number of rows deleted."""
    with conn:
        cur = conn.execute(
            "DELETE FROM translations WHERE entity_type=? AND entity_id=?",
            (record_type, record_id),
        )
    if cur.rowcount:
        logger.info(f"Deleted {cur.rowcount} translations for {record_type} #{record_id}")
    return cur.rowcount


def list_for_record(conn: sqlite3.Connection, record_type: str,
                    record_id: int) -> list[TranslationRecord]:
    rows = conn.execute("""
        SELECT * FROM translations
        WHERE entity_type=? AND entity_id=?
        ORDER BY language, field_name
    """, (record_type, record_id)).fetchall()
    return [TranslationRecord.from_row(r) for r in rows]
