"""
test_seed.py — YAML seeding CLI
===============================
"""

from pathlib import Path

import yaml

from db.models import count_records, get_about, get_db, list_records
from db.translations import get_all_fields
from seed import main

SEED_FILE = Path(__file__).parent.parent / "data" / "seed.yaml"


def test_seed_file_loads_records_and_translations(tmp_path):
    db_path = tmp_path / "seeded.db"
    summary = main(["--file", str(SEED_FILE), "--db", str(db_path)])
    assert summary["projects"][0] == 2

    conn = get_db(db_path)
    try:
        about = get_about(conn)
        assert get_all_fields(conn, "About", about["id"], "en")["title"] == "Full-Stack Developer"
        school = list_records(conn, "education")[0]
        assert get_all_fields(conn, "Education", school["id"], "en")["fieldOfStudy"] == "Software engineering"
        shop = list_records(conn, "projects")[0]
        assert shop["technologies"] == ["FastAPI", "React", "SQLite", "Docker"]
    finally:
        conn.close()


def test_seed_is_skipped_when_populated_unless_reset(tmp_path):
    db_path = tmp_path / "seeded.db"
    main(["--file", str(SEED_FILE), "--db", str(db_path)])

    again = main(["--file", str(SEED_FILE), "--db", str(db_path)])
    assert again["projects"] == (0, 0)

    reset = main(["--file", str(SEED_FILE), "--db", str(db_path), "--reset"])
    assert reset["projects"][0] == 2

    conn = get_db(db_path)
    try:
        assert count_records(conn, "projects") == 2
        assert count_records(conn, "about") == 1
    finally:
        conn.close()


def write_seed(tmp_path, content) -> Path:
    path = tmp_path / "seed.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(content, f, allow_unicode=True)
    return path


def test_invalid_entries_are_skipped_and_lists_still_render(tmp_path):
    from starlette.testclient import TestClient
    from app.main import create_app

    seed_file = write_seed(tmp_path, {"projects": [
        {"title": "Shop"},
        {"title": "Boutique en ligne", "description": "Une boutique en ligne complète."},
    ]})
    db_path = tmp_path / "seeded.db"
    summary = main(["--file", str(seed_file), "--db", str(db_path)])
    assert summary["projects"] == (1, 0)

    app = create_app(config={"rate_limit": {"enabled": False}}, db_path=db_path)
    with TestClient(app) as client:
        resp = client.get("/api/v1/projects?lang=en")
    assert resp.status_code == 200
    assert [p["title"] for p in resp.json()["data"]] == ["Boutique en ligne"]


def test_non_translatable_seed_fields_are_dropped(tmp_path):
    seed_file = write_seed(tmp_path, {"interests": [{
        "name": "Randonnée",
        "icon": "mountain",
        "translations": {"en": {"name": "Hiking", "icon": "boot", "nmae": "Typo"}},
    }]})
    db_path = tmp_path / "seeded.db"
    summary = main(["--file", str(seed_file), "--db", str(db_path)])
    assert summary["interests"] == (1, 1)

    conn = get_db(db_path)
    try:
        interest = list_records(conn, "interests")[0]
        assert get_all_fields(conn, "Interest", interest["id"], "en") == {"name": "Hiking"}
    finally:
        conn.close()
