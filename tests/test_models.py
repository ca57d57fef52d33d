"""
test_models.py — Record and contact message persistence
========================================================
"""

import pytest

from db.models import (
    MESSAGE_READ, MESSAGE_UNREAD, RecordNotFound, count_messages, count_records,
    create_message, delete_message, delete_record, get_about, get_db, get_record,
    init_db, list_messages, list_records, mark_message_read, record_kind,
    save_about, save_record,
)


@pytest.fixture
def conn(tmp_path):
    path = tmp_path / "nested" / "portfolio.db"
    init_db(path)
    c = get_db(path)
    yield c
    c.close()


def project(**kw):
    data = {
        "title": "Plateforme e-commerce",
        "description": "Boutique en ligne complète.",
        "technologies": ["FastAPI", "React"],
        "category": "Application web",
        "featured": True,
        "display_order": 1,
    }
    data.update(kw)
    return data


def test_insert_and_get_project(conn):
    saved = save_record(conn, "projects", project())
    conn.commit()

    fetched = get_record(conn, "projects", saved["id"])
    assert fetched["title"] == "Plateforme e-commerce"
    assert fetched["technologies"] == ["FastAPI", "React"]
    assert fetched["featured"] is True
    assert fetched["created_at"] == fetched["updated_at"]


def test_update_project_replaces_technologies(conn):
    saved = save_record(conn, "projects", project())
    updated = save_record(conn, "projects", project(id=saved["id"], title="Boutique",
                                                    technologies=["Django"], featured=False))

    assert updated["id"] == saved["id"]
    assert updated["title"] == "Boutique"
    assert updated["technologies"] == ["Django"]
    assert updated["featured"] is False
    assert updated["created_at"] == saved["created_at"]


def test_update_unknown_record_raises(conn):
    with pytest.raises(RecordNotFound) as exc:
        save_record(conn, "projects", project(id=99))
    assert str(exc.value) == "Project not found with ID: 99"


def test_list_records_in_display_order(conn):
    save_record(conn, "skills", {"name": "React", "display_order": 2})
    save_record(conn, "skills", {"name": "Python", "display_order": 1})
    save_record(conn, "skills", {"name": "Git"})

    assert [s["name"] for s in list_records(conn, "skills")] == ["Python", "React", "Git"]
    assert count_records(conn, "skills") == 3


def test_delete_record(conn):
    saved = save_record(conn, "interests", {"name": "Randonnée"})
    delete_record(conn, "interests", saved["id"])
    assert get_record(conn, "interests", saved["id"]) is None
    with pytest.raises(RecordNotFound):
        delete_record(conn, "interests", saved["id"])


def test_unknown_kind():
    with pytest.raises(ValueError):
        record_kind("widgets")


def test_about_is_a_singleton(conn):
    assert get_about(conn) is None
    about = {"name": "Camille Martin", "title": "Développeuse", "description": "Une description.",
             "email": "contact@example.com"}
    first = save_about(conn, about)
    second = save_about(conn, {**about, "title": "Ingénieure"})

    assert second["id"] == first["id"]
    assert count_records(conn, "about") == 1
    assert get_about(conn)["title"] == "Ingénieure"


def test_contact_messages_lifecycle(conn):
    first = create_message(conn, "Alice", "alice@example.com", "Hello", "A first message here.")
    second = create_message(conn, "Bob", "bob@example.com", "Hi", "A second message here.")
    assert first["status"] == MESSAGE_UNREAD
    assert first["read_at"] is None

    assert [m["id"] for m in list_messages(conn)] == [second["id"], first["id"]]

    read = mark_message_read(conn, first["id"])
    assert read["status"] == MESSAGE_READ
    assert read["read_at"] is not None
    assert count_messages(conn, MESSAGE_UNREAD) == 1
    assert [m["id"] for m in list_messages(conn, status=MESSAGE_READ)] == [first["id"]]
    assert len(list_messages(conn, limit=1)) == 1

    delete_message(conn, second["id"])
    assert count_messages(conn) == 1
    with pytest.raises(RecordNotFound):
        delete_message(conn, second["id"])
    with pytest.raises(RecordNotFound):
        mark_message_read(conn, 999)
