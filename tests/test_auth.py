from conftest import PASSWORD, auth_headers, user_id
from tutorcenter.config.settings import settings


def test_login_returns_token_and_records_last_login(client, db):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "nauczyciel@korepetycje.pl", "password": PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["access_token"] == "token-teacher"
    assert body["user_id"] == user_id("teacher")

    profile = next(p for p in db.rows("user_profiles") if p["user_id"] == user_id("teacher"))
    assert profile.get("last_login")


def test_login_with_wrong_password(client):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "nauczyciel@korepetycje.pl", "password": "wrong"},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_me_returns_role_and_capabilities(client):
    response = client.get("/api/v1/auth/me", headers=auth_headers("guardian"))
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "opiekun"
    assert body["role_label"] == "Opiekun"
    assert body["capabilities"]["can_view_payments"] is True
    assert body["capabilities"]["can_edit_students"] is False


def test_me_without_profile_has_no_capabilities(client, supabase, db):
    supabase.auth.add_user("no-profile", "bez@korepetycje.pl", token="token-none")
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer token-none"})
    assert response.status_code == 200
    body = response.json()
    assert body["role"] is None
    assert not any(body["capabilities"].values())


def test_logout(client, supabase):
    response = client.post("/api/v1/auth/logout", headers=auth_headers("teacher"))
    assert response.status_code == 200
    assert supabase.auth.sign_outs == 1


def test_health_endpoints(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json() == {"status": "ready"}
    assert client.get("/health").headers["X-Frame-Options"] == "DENY"


def test_default_rate_limit_applies(client):
    allowed = int(settings.rate_limit.split("/")[0])
    for _ in range(allowed):
        assert client.get("/").status_code == 200
    response = client.get("/")
    assert response.status_code == 429
    assert client.get("/health").status_code == 200
