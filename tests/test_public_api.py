"""
test_public_api.py — Public portfolio routes end to end
=======================================================
Records are written in French, only some get English translations; the
routes must overlay what exists and fall back per record and per field.
"""

import pytest
from starlette.testclient import TestClient

from app.main import create_app
from db.models import get_db, init_db, save_about, save_record
from db.translations import upsert_many

CONFIG = {
    "i18n": {"default_language": "fr", "supported_languages": ["fr", "en"]},
    "rate_limit": {"enabled": False},
}


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "portfolio.db"
    init_db(path)
    return path


@pytest.fixture
def seeded(db_path):
    conn = get_db(db_path)
    try:
        shop = save_record(conn, "projects", {
            "title": "Plateforme e-commerce",
            "description": "Boutique en ligne complète avec paiement.",
            "technologies": ["FastAPI", "React"],
            "category": "Application web",
            "featured": True,
            "display_order": 1,
        })
        tasks = save_record(conn, "projects", {
            "title": "Gestionnaire de tâches",
            "description": "Application collaborative de gestion de tâches.",
            "technologies": ["Python"],
            "category": "Application web",
            "display_order": 2,
        })
        school = save_record(conn, "education", {
            "institution": "Université Lyon 1",
            "degree": "Master Informatique",
            "field_of_study": "Génie logiciel",
            "start_date": "2019",
        })
        conn.commit()
        upsert_many(conn, "Project", shop["id"], "en", {
            "title": "E-commerce platform",
            "description": "Full online shop with payments.",
        })
        upsert_many(conn, "Education", school["id"], "en", {"fieldOfStudy": "Software engineering"})
    finally:
        conn.close()
    return {"shop": shop["id"], "tasks": tasks["id"], "school": school["id"]}


@pytest.fixture
def client(db_path):
    with TestClient(create_app(config=CONFIG, db_path=db_path)) as c:
        yield c


def test_projects_english_overlay(client, seeded):
    resp = client.get("/api/v1/projects?lang=en")
    assert resp.status_code == 200
    assert resp.headers["content-language"] == "en"
    body = resp.json()
    assert body["status"] == "success"
    assert body["meta"] == {"lang": "en", "lang_label": "English"}

    shop, tasks = body["data"]
    assert shop["title"] == "E-commerce platform"
    assert shop["description"] == "Full online shop with payments."
    assert shop["category"] == "Application web"
    assert shop["technologies"] == ["FastAPI", "React"]
    assert tasks["title"] == "Gestionnaire de tâches"


def test_projects_default_language(client, seeded):
    body = client.get("/api/v1/projects").json()
    assert body["meta"]["lang"] == "fr"
    assert [p["title"] for p in body["data"]] == ["Plateforme e-commerce", "Gestionnaire de tâches"]


def test_accept_language_header(client, seeded):
    resp = client.get("/api/v1/projects", headers={"Accept-Language": "en-US,en;q=0.9"})
    assert resp.json()["data"][0]["title"] == "E-commerce platform"

    resp = client.get("/api/v1/projects", headers={"Accept-Language": "fr;q=0.9,en"})
    assert resp.json()["data"][0]["title"] == "Plateforme e-commerce"


def test_query_param_beats_header(client, seeded):
    resp = client.get("/api/v1/projects?lang=fr", headers={"Accept-Language": "en"})
    assert resp.json()["meta"]["lang"] == "fr"


def test_unsupported_language_falls_back(client, seeded):
    resp = client.get("/api/v1/projects?lang=xx")
    body = resp.json()
    assert body["meta"]["lang"] == "fr"
    assert body["data"][0]["title"] == "Plateforme e-commerce"


def test_education_field_of_study(client, seeded):
    entry = client.get("/api/v1/education?lang=en").json()["data"][0]
    assert entry["fieldOfStudy"] == "Software engineering"
    assert entry["degree"] == "Master Informatique"


def test_about_missing_is_null(client):
    body = client.get("/api/v1/about?lang=en").json()
    assert body["status"] == "success"
    assert body["data"] is None


def test_about_overlay(client, db_path):
    conn = get_db(db_path)
    try:
        about = save_about(conn, {"name": "Camille Martin", "title": "Développeuse Full-Stack",
                                  "description": "Développeuse passionnée.",
                                  "email": "contact@example.com", "location": "Lyon"})
        conn.commit()
        upsert_many(conn, "About", about["id"], "en", {"title": "Full-Stack Developer"})
    finally:
        conn.close()

    data = client.get("/api/v1/about?lang=en").json()["data"]
    assert data["title"] == "Full-Stack Developer"
    assert data["name"] == "Camille Martin"
    assert data["location"] == "Lyon"


def test_empty_lists(client):
    for path in ("skills", "experiences", "languages", "interests"):
        body = client.get(f"/api/v1/{path}?lang=en").json()
        assert body["data"] == []


def test_contact_message(client):
    resp = client.post("/api/v1/contact", json={
        "name": "Alice",
        "email": "alice@example.com",
        "subject": "Bonjour",
        "message": "J'aimerais discuter d'un projet.",
    })
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["status"] == "UNREAD"
    assert data["email"] == "alice@example.com"


def test_contact_validation_error(client):
    resp = client.post("/api/v1/contact", json={"name": "A", "email": "nope",
                                                "subject": "Hi", "message": "short"})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["message"] == "Bad Request"
    assert {e["field"] for e in error["validationErrors"]} >= {"name", "email", "message"}


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["status"] == "error"
    assert resp.json()["error"]["path"] == "/api/v1/nothing-here"


def test_i18n_info_and_health(client):
    data = client.get("/api/v1/i18n").json()["data"]
    assert data["default"] == "fr"
    assert [lang["code"] for lang in data["supported"]] == ["fr", "en"]
    assert client.get("/health").json()["status"] == "ok"


CONTACT = {
    "name": "Alice",
    "email": "alice@example.com",
    "subject": "Bonjour",
    "message": "J'aimerais discuter d'un projet.",
}


def test_contact_rate_limit_comes_from_app_config(db_path):
    limited = create_app(config={**CONFIG, "rate_limit": {"enabled": True, "contact": "1/minute"}},
                         db_path=db_path)
    # a second app with limits off must not switch off the first one
    unlimited = create_app(config=CONFIG, db_path=db_path)

    with TestClient(limited) as c:
        codes = [c.post("/api/v1/contact", json=CONTACT).status_code for _ in range(2)]
    assert codes == [201, 429]

    with TestClient(unlimited) as c:
        codes = [c.post("/api/v1/contact", json=CONTACT).status_code for _ in range(2)]
    assert codes == [201, 201]
