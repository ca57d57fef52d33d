"""
db/models.py — Portfolio Record Store
=====================================

Design principles:
  1. One table per record kind (about, projects, skills, ...), integer ids
  2. Rows travel as plain dicts with snake_case keys
  3. Translations live in their own table (see db/translations.py) and point
     back at records by (entity_type, entity_id) only, no foreign key
  4. SQLite backing store - portable, zero infra

Record kinds and their translation tags:
  about        → About        (singleton)
  projects     → Project      (+ ordered technologies list)
  skills       → Skill
  experiences  → Experience
  education    → Education
  languages    → Language
  interests    → Interest

Contact messages are not translatable and have their own helpers at the
bottom of this module.
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

DB_PATH = Path(__file__).parent / "portfolio.db"


# --- SCHEMA DDL ---

SCHEMA = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys=ON;

-- ── About section (singleton) ───────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS about_sections (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    name              TEXT NOT NULL,
    title             TEXT NOT NULL,
    description       TEXT NOT NULL,
    email             TEXT NOT NULL,
    phone             TEXT,
    location          TEXT,
    linkedin_url      TEXT,
    github_url        TEXT,
    twitter_url       TEXT,
    resume_url        TEXT,
    profile_image_url TEXT
);

-- ── Projects ────────────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS projects (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    title         TEXT NOT NULL,
    description   TEXT,
    image_url     TEXT,
    demo_url      TEXT,
    github_url    TEXT,
    category      TEXT,
    featured      INTEGER NOT NULL DEFAULT 0,
    display_order INTEGER,
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS project_technologies (
    project_id INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    position   INTEGER NOT NULL,
    technology TEXT NOT NULL,
    PRIMARY KEY (project_id, position)
);

-- ── Skills ──────────────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS skills (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    name              TEXT NOT NULL,
    category          TEXT,
    proficiency_level INTEGER,
    icon_url          TEXT,
    display_order     INTEGER
);

-- ── Work experience ─────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS experiences (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    company       TEXT NOT NULL,
    position      TEXT NOT NULL,
    location      TEXT,
    start_date    TEXT NOT NULL,
    end_date      TEXT,               -- null = ongoing
    description   TEXT,
    current       INTEGER NOT NULL DEFAULT 0,
    display_order INTEGER
);

-- ── Education ───────────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS educations (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    institution    TEXT NOT NULL,
    degree         TEXT NOT NULL,
    field_of_study TEXT,
    location       TEXT,
    start_date     TEXT NOT NULL,
    end_date       TEXT,
    description    TEXT,
    grade          TEXT,
    display_order  INTEGER
);

-- ── Spoken languages ────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS languages (
    id                     INTEGER PRIMARY KEY AUTOINCREMENT,
    name                   TEXT NOT NULL,
    proficiency            TEXT NOT NULL,
    proficiency_percentage INTEGER,
    display_order          INTEGER
);

-- ── Interests ───────────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS interests (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    name          TEXT NOT NULL,
    description   TEXT,
    icon          TEXT,
    display_order INTEGER
);

-- ── Contact messages ────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS contact_messages (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL,
    email      TEXT NOT NULL,
    subject    TEXT NOT NULL,
    message    TEXT NOT NULL,
    status     TEXT NOT NULL DEFAULT 'UNREAD',   -- UNREAD | READ
    created_at TEXT NOT NULL,
    read_at    TEXT
);
CREATE INDEX IF NOT EXISTS idx_messages_status ON contact_messages(status);

-- ── Translations (field overlay for any record kind) ────────────────────────
-- language is never the default language: those values live in the records.
CREATE TABLE IF NOT EXISTS translations (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    entity_type TEXT NOT NULL,            -- About | Project | Skill | ...
    entity_id   INTEGER NOT NULL,
    field_name  TEXT NOT NULL,            -- title | description | fieldOfStudy | ...
    language    TEXT NOT NULL,            -- ISO 639-1
    value       TEXT NOT NULL,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL,
    UNIQUE(entity_type, entity_id, field_name, language)
);
CREATE INDEX IF NOT EXISTS idx_trans_record ON translations(entity_type, entity_id, language);
"""


# --- DB CONNECTION ---

def get_db(path: Path = DB_PATH) -> sqlite3.Connection:
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def init_db(path: Path = DB_PATH):
    """Initialize database schema."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_db(path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# --- RECORD KINDS ---

class RecordNotFound(LookupError):
    """Raised when a record id does not exist for its kind."""

    def __init__(self, label: str, record_id: Any):
        self.label = label
        self.record_id = record_id
        super().__init__(f"{label} not found with ID: {record_id}")


@dataclass(frozen=True)
class RecordKind:
    name:       str
    table:      str
    tag:        str                 # entity_type used in the translations table
    columns:    tuple[str, ...]     # writable columns, id excluded
    ordered:    bool = True         # has display_order
    timestamps: bool = False        # has created_at / updated_at


RECORD_KINDS: dict[str, RecordKind] = {
    "about": RecordKind(
        "about", "about_sections", "About",
        ("name", "title", "description", "email", "phone", "location",
         "linkedin_url", "github_url", "twitter_url", "resume_url",
         "profile_image_url"),
        ordered=False,
    ),
    "projects": RecordKind(
        "projects", "projects", "Project",
        ("title", "description", "image_url", "demo_url", "github_url",
         "category", "featured", "display_order"),
        timestamps=True,
    ),
    "skills": RecordKind(
        "skills", "skills", "Skill",
        ("name", "category", "proficiency_level", "icon_url", "display_order"),
    ),
    "experiences": RecordKind(
        "experiences", "experiences", "Experience",
        ("company", "position", "location", "start_date", "end_date",
         "description", "current", "display_order"),
    ),
    "education": RecordKind(
        "education", "educations", "Education",
        ("institution", "degree", "field_of_study", "location", "start_date",
         "end_date", "description", "grade", "display_order"),
    ),
    "languages": RecordKind(
        "languages", "languages", "Language",
        ("name", "proficiency", "proficiency_percentage", "display_order"),
    ),
    "interests": RecordKind(
        "interests", "interests", "Interest",
        ("name", "description", "icon", "display_order"),
    ),
}

_BOOL_COLUMNS = {"featured", "current"}


def record_kind(kind: str) -> RecordKind:
    try:
        return RECORD_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None


def _order_clause(rk: RecordKind) -> str:
    if rk.ordered:
        return " ORDER BY display_order IS NULL, display_order, id"
    return " ORDER BY id"


def _hydrate(conn: sqlite3.Connection, rk: RecordKind, row: sqlite3.Row) -> dict:
    """Turn a row into a dict, restoring booleans and attaching technologies."""
    data = dict(row)
    for col in _BOOL_COLUMNS & data.keys():
        data[col] = bool(data[col])
    if rk.name == "projects":
        tech_rows = conn.execute(
            "SELECT technology FROM project_technologies WHERE project_id=? ORDER BY position",
            (data["id"],),
        ).fetchall()
        data["technologies"] = [t["technology"] for t in tech_rows]
    return data


def _column_values(rk: RecordKind, data: dict) -> dict:
    values = {}
    for col in rk.columns:
        value = data.get(col)
        if col in _BOOL_COLUMNS:
            value = 1 if value else 0
        values[col] = value
    return values


def _replace_technologies(conn: sqlite3.Connection, project_id: int,
                          technologies: Optional[list[str]]):
    conn.execute("DELETE FROM project_technologies WHERE project_id=?", (project_id,))
    position = 0
    for tech in technologies or []:
        if tech and tech.strip():
            conn.execute(
                "INSERT INTO project_technologies(project_id, position, technology) VALUES (?,?,?)",
                (project_id, position, tech.strip()),
            )
            position += 1


# --- RECORD CRUD ---

def list_records(conn: sqlite3.Connection, kind: str) -> list[dict]:
    """All records of one kind, in display order."""
    rk = record_kind(kind)
    rows = conn.execute(f"SELECT * FROM {rk.table}{_order_clause(rk)}").fetchall()
    return [_hydrate(conn, rk, r) for r in rows]


def get_record(conn: sqlite3.Connection, kind: str, record_id: int) -> Optional[dict]:
    rk = record_kind(kind)
    row = conn.execute(f"SELECT * FROM {rk.table} WHERE id=?", (record_id,)).fetchone()
    return _hydrate(conn, rk, row) if row else None


def save_record(conn: sqlite3.Connection, kind: str, data: dict) -> dict:
    """
    Insert or update a record and return the stored row.

    With an ``id`` in `data` the existing row is updated (RecordNotFound if it
    does not exist); without one a new row is inserted. Columns missing from
    `data` are written as NULL; callers send the full record, like a PUT.
    The caller commits.
    """
    rk = record_kind(kind)
    values = _column_values(rk, data)
    record_id = data.get("id")
    ts = now_iso()

    if record_id is not None:
        existing = conn.execute(f"SELECT id FROM {rk.table} WHERE id=?", (record_id,)).fetchone()
        if not existing:
            raise RecordNotFound(rk.tag, record_id)
        if rk.timestamps:
            values["updated_at"] = ts
        assignments = ", ".join(f"{col}=:{col}" for col in values)
        conn.execute(
            f"UPDATE {rk.table} SET {assignments} WHERE id=:id",
            {**values, "id": record_id},
        )
    else:
        if rk.timestamps:
            values["created_at"] = ts
            values["updated_at"] = ts
        cols = ", ".join(values)
        params = ", ".join(f":{col}" for col in values)
        cur = conn.execute(f"INSERT INTO {rk.table} ({cols}) VALUES ({params})", values)
        record_id = cur.lastrowid

    if rk.name == "projects":
        _replace_technologies(conn, record_id, data.get("technologies"))

    return get_record(conn, kind, record_id)


def delete_record(conn: sqlite3.Connection, kind: str, record_id: int) -> None:
    """
    Delete one record. Raises RecordNotFound for an unknown id.
    Translations are NOT removed here, see db.translations.delete_all_for_record.
    """
    rk = record_kind(kind)
    cur = conn.execute(f"DELETE FROM {rk.table} WHERE id=?", (record_id,))
    if cur.rowcount == 0:
        raise RecordNotFound(rk.tag, record_id)


def count_records(conn: sqlite3.Connection, kind: str) -> int:
    rk = record_kind(kind)
    return conn.execute(f"SELECT COUNT(*) FROM {rk.table}").fetchone()[0]


# --- ABOUT (singleton) ---

def get_about(conn: sqlite3.Connection) -> Optional[dict]:
    """The About section, or None when none has been written yet."""
    records = list_records(conn, "about")
    return records[0] if records else None


def save_about(conn: sqlite3.Connection, data: dict) -> dict:
    """Create the About section, or overwrite the existing one in place."""
    existing = get_about(conn)
    payload = {**data, "id": existing["id"] if existing else None}
    return save_record(conn, "about", payload)


# --- CONTACT MESSAGES ---

MESSAGE_UNREAD = "UNREAD"
MESSAGE_READ = "READ"
MESSAGE_STATUSES = (MESSAGE_UNREAD, MESSAGE_READ)


def create_message(conn: sqlite3.Connection, name: str, email: str,
                   subject: str, message: str) -> dict:
    cur = conn.execute("""
        INSERT INTO contact_messages (name, email, subject, message, status, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
    """, (name, email, subject, message, MESSAGE_UNREAD, now_iso()))
    return get_message(conn, cur.lastrowid)


def get_message(conn: sqlite3.Connection, message_id: int) -> Optional[dict]:
    row = conn.execute("SELECT * FROM contact_messages WHERE id=?", (message_id,)).fetchone()
    return dict(row) if row else None


def list_messages(conn: sqlite3.Connection, status: Optional[str] = None,
                  limit: Optional[int] = None) -> list[dict]:
    """Messages newest first, optionally filtered by status."""
    sql = "SELECT * FROM contact_messages"
    params: list[Any] = []
    if status:
        sql += " WHERE status=?"
        params.append(status)
    sql += " ORDER BY created_at DESC, id DESC"
    if limit:
        sql += " LIMIT ?"
        params.append(limit)
    return [dict(r) for r in conn.execute(sql, params).fetchall()]


def mark_message_read(conn: sqlite3.Connection, message_id: int) -> dict:
    cur = conn.execute(
        "UPDATE contact_messages SET status=?, read_at=? WHERE id=?",
        (MESSAGE_READ, now_iso(), message_id),
    )
    if cur.rowcount == 0:
        raise RecordNotFound("Message", message_id)
    return get_message(conn, message_id)


def delete_message(conn: sqlite3.Connection, message_id: int) -> None:
    cur = conn.execute("DELETE FROM contact_messages WHERE id=?", (message_id,))
    if cur.rowcount == 0:
        raise RecordNotFound("Message", message_id)


def count_messages(conn: sqlite3.Connection, status: Optional[str] = None) -> int:
    if status:
        return conn.execute(
            "SELECT COUNT(*) FROM contact_messages WHERE status=?", (status,)
        ).fetchone()[0]
    return conn.execute("SELECT COUNT(*) FROM contact_messages").fetchone()[0]
