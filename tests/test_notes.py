import uuid
from datetime import datetime, timedelta, timezone

import pytest

from fake_store import USER_A, USER_B


def test_create_applies_defaults(client):
    res = client.post("/v1/notes", json={})

    assert res.status_code == 201
    data = res.json()["data"]
    assert data["title"] == ""
    assert data["content"] == ""
    assert data["tags"] is None
    assert data["is_favorite"] is False
    assert data["version"] == 1
    assert data["user_id"] == USER_A


def test_get_returns_note(client, database):
    note = database.seed("notes", USER_A, title="hello", content="world")

    res = client.get(f"/v1/notes/{note['id']}")

    assert res.status_code == 200
    assert res.json()["data"]["content"] == "world"


def test_get_other_users_note_is_not_found(client, database):
    theirs = database.seed("notes", USER_B, title="private")

    res = client.get(f"/v1/notes/{theirs['id']}")

    assert res.status_code == 404
    assert res.json() == {"status": 404, "message": "Note not found"}


def test_list_paginates_and_counts(client, database):
    for i in range(5):
        database.seed("notes", USER_A, title=f"n{i}")
    database.seed("notes", USER_B, title="not mine")

    res = client.get("/v1/notes", params={"limit": 2, "offset": 1})

    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 5
    assert [n["title"] for n in body["data"]] == ["n3", "n2"]


def test_list_filters(client, database):
    database.seed("notes", USER_A, title="Groceries", content="milk", tags="home")
    database.seed("notes", USER_A, title="Work", content="ship the Milkshake", is_favorite=True)
    database.seed("notes", USER_A, title="Old", tags="HOME|archive")
    database.rows("notes")[-1]["created_at"] = datetime.now(timezone.utc) - timedelta(days=30)

    def titles(**params):
        res = client.get("/v1/notes", params=params)
        assert res.status_code == 200
        return sorted(n["title"] for n in res.json()["data"])

    assert titles(search="MILK") == ["Groceries", "Work"]
    assert titles(is_favorite="true") == ["Work"]
    assert titles(tag="home") == ["Groceries", "Old"]
    assert titles(days=7) == ["Groceries", "Work"]


def test_list_sorts(client, database):
    database.seed("notes", USER_A, title="b")
    database.seed("notes", USER_A, title="a")
    database.seed("notes", USER_A, title="c")

    def order(sort):
        return [n["title"] for n in client.get("/v1/notes", params={"sort": sort}).json()["data"]]

    assert order("date_newest") == ["c", "a", "b"]
    assert order("date_oldest") == ["b", "a", "c"]
    assert order("alpha_asc") == ["a", "b", "c"]
    assert order("alpha_desc") == ["c", "b", "a"]


def test_list_modified_sort_follows_updates(client, database):
    first = database.seed("notes", USER_A, title="first")
    database.seed("notes", USER_A, title="second")

    client.put(f"/v1/notes/{first['id']}", json={"content": "touched"})
    res = client.get("/v1/notes", params={"sort": "modified"})

    assert [n["title"] for n in res.json()["data"]] == ["first", "second"]


@pytest.mark.parametrize("params", [{"limit": 0}, {"offset": -1}, {"days": 0}])
def test_list_rejects_out_of_range_params(client, params):
    assert client.get("/v1/notes", params=params).status_code == 400


def test_update_without_version(client, database):
    note = database.seed("notes", USER_A, title="t", content="c")

    res = client.put(f"/v1/notes/{note['id']}", json={"title": "new", "is_favorite": True})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["title"] == "new"
    assert data["content"] == "c"
    assert data["is_favorite"] is True
    assert data["version"] == 2


def test_update_with_matching_version(client, database):
    note = database.seed("notes", USER_A, title="t")

    res = client.put(f"/v1/notes/{note['id']}", json={"content": "x", "version": 1})

    assert res.status_code == 200
    assert res.json()["data"]["version"] == 2


def test_update_with_stale_version_returns_current_row(client, database):
    note = database.seed("notes", USER_A, title="t")
    client.put(f"/v1/notes/{note['id']}", json={"title": "from another device"})

    res = client.put(f"/v1/notes/{note['id']}", json={"title": "mine", "version": 1})

    assert res.status_code == 409
    body = res.json()
    assert body["status"] == 409
    assert body["message"] == "Version conflict - note was modified by another client"
    assert body["data"]["version"] == 2
    assert body["data"]["title"] == "from another device"
    assert database.rows("notes")[0]["title"] == "from another device"


def test_update_with_version_of_missing_note_is_not_found(client):
    res = client.put(f"/v1/notes/{uuid.uuid4()}", json={"title": "x", "version": 3})

    assert res.status_code == 404
    assert res.json()["message"] == "Note not found"


def test_update_other_users_note_with_version_is_not_found(client, database):
    theirs = database.seed("notes", USER_B, title="private")

    res = client.put(f"/v1/notes/{theirs['id']}", json={"title": "x", "version": 1})

    assert res.status_code == 404
    assert "data" not in res.json()


@pytest.mark.parametrize("body", [{}, {"version": 1}])
def test_update_without_fields_is_rejected(client, database, body):
    note = database.seed("notes", USER_A, title="t")

    res = client.put(f"/v1/notes/{note['id']}", json=body)

    assert res.status_code == 400
    assert res.json() == {"status": 400, "message": "No fields provided to update"}


def test_delete_returns_no_content_then_not_found(client, database):
    note = database.seed("notes", USER_A, title="t")

    first = client.delete(f"/v1/notes/{note['id']}")
    second = client.delete(f"/v1/notes/{note['id']}")

    assert first.status_code == 204
    assert first.content == b""
    assert second.status_code == 404
