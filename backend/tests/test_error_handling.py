import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

DB_ERROR_TEXT = "database is locked"


def _operational_error(*args, **kwargs):
    raise OperationalError("SELECT * FROM bible_readings", {}, Exception(DB_ERROR_TEXT))


def _assert_generic_500(response):
    assert response.status_code == 500
    assert response.json() == {"detail": "An error occurred"}
    # Nothing from the database reaches the client
    assert DB_ERROR_TEXT not in response.text
    assert "bible_readings" not in response.text


def test_list_readings_storage_failure_is_generic_500(auth_client, monkeypatch):
    monkeypatch.setattr(Session, "query", _operational_error)

    _assert_generic_500(auth_client.get("/readings"))


def test_create_reading_storage_failure_is_generic_500(auth_client, monkeypatch):
    monkeypatch.setattr(Session, "commit", _operational_error)

    response = auth_client.post("/readings", json={
        "bibleBook": "Genesis",
        "chapters": "1",
        "dateRead": "2026-10-03",
    })

    _assert_generic_500(response)


def test_update_reading_storage_failure_is_generic_500(auth_client, monkeypatch):
    monkeypatch.setattr(Session, "query", _operational_error)

    response = auth_client.put("/readings/some-id", json={
        "book": "Genesis",
        "chapters": "1",
        "date": "2026-10-03",
    })

    _assert_generic_500(response)


def test_delete_reading_storage_failure_is_generic_500(auth_client, monkeypatch):
    monkeypatch.setattr(Session, "query", _operational_error)

    _assert_generic_500(auth_client.delete("/readings/some-id"))


def test_calendar_storage_failure_is_generic_500(auth_client, monkeypatch):
    monkeypatch.setattr(Session, "query", _operational_error)

    _assert_generic_500(auth_client.get("/readings/calendar", params={"year": 2026, "month": 10}))


def test_login_storage_failure_is_generic_500(client, register_user, login_user, monkeypatch):
    register_user(client)
    monkeypatch.setattr(Session, "query", _operational_error)

    response = login_user(client)

    assert response.status_code == 500
    assert response.json() == {"detail": "An error occurred during login"}
    assert DB_ERROR_TEXT not in response.text


def test_register_unique_constraint_race_is_conflict(client, register_user, monkeypatch):
    # The existence check passes, then another request wins the insert
    def _unique_violation(*args, **kwargs):
        raise IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email"))

    monkeypatch.setattr(Session, "commit", _unique_violation)

    response = register_user(client)

    assert response.status_code == 409
    assert response.json() == {"detail": "User with this email already exists"}


@pytest.mark.parametrize("path", ["/auth/login", "/auth/register", "/readings"])
def test_unparseable_json_body_is_400(auth_client, path):
    response = auth_client.post(path, content="{not json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid JSON body"}
