from conftest import auth_headers, user_id

INVITE = {"email": "nowy@korepetycje.pl", "full_name": "Nowy Nauczyciel", "role": "nauczyciel"}


def profile_of(db, uid):
    return next((p for p in db.rows("user_profiles") if p["user_id"] == uid), None)


def test_invite_without_authorization_header(client, supabase):
    response = client.post("/api/v1/admin/invite", json=INVITE)
    assert response.status_code == 401
    assert response.json() == {"error": "No authorization header"}
    assert supabase.auth.admin.invites == []


def test_invite_with_invalid_token(client, supabase):
    response = client.post("/api/v1/admin/invite", json=INVITE, headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_teacher_cannot_invite(client, supabase, db):
    profiles_before = len(db.rows("user_profiles"))
    response = client.post("/api/v1/admin/invite", json=INVITE, headers=auth_headers("teacher"))
    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions"}
    assert supabase.auth.admin.invites == []
    assert len(db.rows("user_profiles")) == profiles_before


def test_admin_invites_user_with_role(client, supabase, db):
    response = client.post("/api/v1/admin/invite", json=INVITE, headers=auth_headers("admin"))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == INVITE["email"]

    profile = profile_of(db, body["user"]["id"])
    assert profile["role"] == "nauczyciel"
    assert profile["full_name"] == "Nowy Nauczyciel"
    assert supabase.auth.admin.invites[0]["options"] == {"data": {"full_name": "Nowy Nauczyciel"}}


def test_invite_rejects_unknown_role(client, supabase):
    response = client.post(
        "/api/v1/admin/invite",
        json={**INVITE, "role": "dyrektor"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 422
    assert response.json()["error"] == "Validation failed"
    assert supabase.auth.admin.invites == []


def test_list_users_merges_auth_emails(client, db):
    db.seed("user_profiles", {"user_id": "orphan", "full_name": "Bez Konta", "role": "uczen", "is_active": True})
    response = client.get("/api/v1/admin/users", headers=auth_headers("admin"))
    assert response.status_code == 200
    users = {u["user_id"]: u for u in response.json()["users"]}
    assert users[user_id("teacher")]["email"] == "nauczyciel@korepetycje.pl"
    assert users["orphan"]["email"] == "Unknown"


def test_consultant_cannot_list_users(client):
    response = client.get("/api/v1/admin/users", headers=auth_headers("consultant"))
    assert response.status_code == 403


def test_admin_changes_role(client, db):
    response = client.patch(
        f"/api/v1/admin/users/{user_id('student')}/role",
        json={"role": "opiekun"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 200
    assert profile_of(db, user_id("student"))["role"] == "opiekun"


def test_role_change_for_unknown_user(client):
    response = client.patch(
        "/api/v1/admin/users/ghost/role",
        json={"role": "opiekun"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_deactivated_user_loses_capabilities(client):
    response = client.patch(
        f"/api/v1/admin/users/{user_id('teacher')}/active",
        json={"is_active": False},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 200

    response = client.get("/api/v1/students", headers=auth_headers("teacher"))
    assert response.status_code == 403
