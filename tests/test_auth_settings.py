from datetime import datetime, timedelta, timezone

import pytest

from conftest import auth_headers, user_id
from tutorcenter.config.settings import settings
from tutorcenter.modules.auth_settings.service import is_account_locked


@pytest.fixture
def teacher_settings(db):
    return db.seed("auth_settings", {
        "user_id": user_id("teacher"),
        "session_timeout_minutes": 60,
        "failed_login_attempts": 0,
        "account_locked_until": None,
    })[0]


def test_missing_settings_row(client):
    response = client.get("/api/v1/auth/settings", headers=auth_headers("teacher"))
    assert response.status_code == 404
    assert response.json() == {"error": "Brak ustawień"}


def test_get_own_settings(client, teacher_settings):
    response = client.get("/api/v1/auth/settings", headers=auth_headers("teacher"))
    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == user_id("teacher")
    assert body["is_locked"] is False


def test_partial_update_stamps_updated_at(client, db, teacher_settings):
    response = client.patch(
        "/api/v1/auth/settings",
        json={"login_notification": True},
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 200
    row = db.rows("auth_settings")[0]
    assert row["login_notification"] is True
    assert row["updated_at"]
    assert row["session_timeout_minutes"] == 60


def test_session_timeout_must_be_positive(client, teacher_settings):
    response = client.put(
        "/api/v1/auth/settings/session-timeout",
        json={"minutes": 0},
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Timeout musi być większy od 0"}

    response = client.put(
        "/api/v1/auth/settings/session-timeout",
        json={"minutes": 15},
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 200
    assert response.json()["session_timeout_minutes"] == 15


def test_failed_logins_lock_account_at_maximum(client, db, teacher_settings):
    for attempt in range(1, settings.max_failed_login_attempts):
        response = client.post("/api/v1/auth/settings/failed-login", headers=auth_headers("teacher"))
        assert response.json()["failed_login_attempts"] == attempt
        assert response.json()["is_locked"] is False

    response = client.post("/api/v1/auth/settings/failed-login", headers=auth_headers("teacher"))
    body = response.json()
    assert body["failed_login_attempts"] == settings.max_failed_login_attempts
    assert body["is_locked"] is True

    response = client.post("/api/v1/auth/settings/unlock", headers=auth_headers("teacher"))
    body = response.json()
    assert body["is_locked"] is False
    assert body["failed_login_attempts"] == 0


def test_lock_for_custom_duration(client, db, teacher_settings):
    response = client.post(
        "/api/v1/auth/settings/lock",
        json={"duration_minutes": 5},
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 200
    assert response.json()["is_locked"] is True
    locked_until = datetime.fromisoformat(db.rows("auth_settings")[0]["account_locked_until"])
    assert locked_until < datetime.now(timezone.utc) + timedelta(minutes=6)


def test_password_change_clears_requirement(client, db, teacher_settings):
    db.rows("auth_settings")[0]["require_password_change"] = True
    response = client.post("/api/v1/auth/settings/password-changed", headers=auth_headers("teacher"))
    body = response.json()
    assert body["require_password_change"] is False
    assert body["last_password_change"] is not None


def test_is_account_locked():
    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert is_account_locked({"account_locked_until": "2024-01-01T12:30:00+00:00"}, now)
    assert not is_account_locked({"account_locked_until": "2024-01-01T11:30:00+00:00"}, now)
    assert not is_account_locked({"account_locked_until": None}, now)
    assert not is_account_locked({"account_locked_until": "garbage"}, now)
    assert not is_account_locked(None, now)
