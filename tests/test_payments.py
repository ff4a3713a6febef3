from conftest import auth_headers, user_id


def payment(student_id, **overrides):
    return {
        "student_id": student_id,
        "data_platnosci": "2024-02-01",
        "kwota": "120.00",
        "status": "oczekuje",
        "metoda": "przelew",
        **overrides,
    }


def test_negative_amount_is_rejected_before_insert(client, db, student):
    response = client.post(
        "/api/v1/payments",
        json=payment(student["id"], kwota="-5"),
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["loc"][-1] == "kwota"
    assert db.queries_for("platnosci", "insert") == []


def test_zero_amount_is_rejected(client, db, student):
    response = client.post("/api/v1/payments", json=payment(student["id"], kwota=0), headers=auth_headers("teacher"))
    assert response.status_code == 422


def test_create_payment_defaults_currency(client, db, student):
    response = client.post(
        "/api/v1/payments",
        json=payment(student["id"], notatki=""),
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["kwota"] == 120.0
    assert body["waluta"] == "PLN"
    assert body["notatki"] is None
    assert body["created_by"] == user_id("teacher")


def test_unknown_status_is_rejected(client, student):
    response = client.post(
        "/api/v1/payments",
        json=payment(student["id"], status="paid"),
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 422


def test_guardian_can_view_but_not_create(client, db, student):
    db.seed("platnosci", {
        "student_id": student["id"], "data_platnosci": "2024-01-10", "kwota": 100,
        "waluta": "PLN", "status": "zapłacone",
    })
    response = client.get(f"/api/v1/payments?student_id={student['id']}", headers=auth_headers("guardian"))
    assert response.status_code == 200
    assert [p["status"] for p in response.json()] == ["zapłacone"]

    response = client.post("/api/v1/payments", json=payment(student["id"]), headers=auth_headers("guardian"))
    assert response.status_code == 403


def test_student_role_cannot_view_payments(client):
    response = client.get("/api/v1/payments", headers=auth_headers("student"))
    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions"}


def test_payments_newest_first(client, db, student):
    for day in ("2024-01-10", "2024-03-01", "2024-02-15"):
        client.post("/api/v1/payments", json=payment(student["id"], data_platnosci=day), headers=auth_headers("teacher"))
    response = client.get("/api/v1/payments", headers=auth_headers("consultant"))
    assert [p["data_platnosci"] for p in response.json()] == ["2024-03-01", "2024-02-15", "2024-01-10"]


def test_mark_payment_paid(client, db, student):
    created = client.post("/api/v1/payments", json=payment(student["id"]), headers=auth_headers("teacher")).json()
    response = client.patch(
        f"/api/v1/payments/{created['id']}",
        json={"status": "zapłacone"},
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "zapłacone"


def test_delete_payment(client, db, student):
    created = client.post("/api/v1/payments", json=payment(student["id"]), headers=auth_headers("teacher")).json()
    response = client.delete(f"/api/v1/payments/{created['id']}", headers=auth_headers("teacher"))
    assert response.status_code == 204
    assert db.rows("platnosci") == []


def test_null_amount_in_update_is_rejected(client, db, student):
    created = client.post("/api/v1/payments", json=payment(student["id"]), headers=auth_headers("teacher")).json()
    for field in ("kwota", "data_platnosci", "status", "waluta"):
        response = client.patch(
            f"/api/v1/payments/{created['id']}",
            json={field: None},
            headers=auth_headers("teacher"),
        )
        assert response.status_code == 422
    assert db.queries_for("platnosci", "update") == []
    assert db.rows("platnosci")[0]["kwota"] == 120.0
