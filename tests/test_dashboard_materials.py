from datetime import date, timedelta

from conftest import auth_headers, user_id


def test_upcoming_classes_from_today(client, db, student):
    today = date.today()
    yesterday = (today - timedelta(days=1)).isoformat()
    tomorrow = (today + timedelta(days=1)).isoformat()
    db.seed(
        "zajecia",
        {"student_id": student["id"], "subject": "fizyka", "start_at": f"{tomorrow}T10:00:00", "status_pd": "brak"},
        {"student_id": student["id"], "subject": "fizyka", "start_at": f"{today.isoformat()}T08:00:00", "status_pd": "brak"},
        {"student_id": student["id"], "subject": "fizyka", "start_at": f"{yesterday}T10:00:00", "status_pd": "brak"},
    )
    response = client.get("/api/v1/dashboard/upcoming-classes", headers=auth_headers("teacher"))
    assert response.status_code == 200
    classes = response.json()
    assert [c["countdown"] for c in classes] == ["dziś", "jutro"]
    assert classes[0]["is_today"] is True
    assert classes[0]["student_name"] == "Jan Kowalski"


def test_upcoming_classes_limit(client, db, student):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    for hour in range(10, 15):
        db.seed("zajecia", {"student_id": student["id"], "subject": "fizyka", "start_at": f"{tomorrow}T{hour}:00:00"})
    response = client.get("/api/v1/dashboard/upcoming-classes?limit=2", headers=auth_headers("teacher"))
    assert len(response.json()) == 2


def test_books_crud_through_resource_router(client, db):
    response = client.post(
        "/api/v1/books",
        json={"tytul": "Zbiór zadań", "created_by": "someone-else"},
        headers=auth_headers("teacher"),
    )
    assert response.status_code == 201
    book = response.json()
    assert book["created_by"] == user_id("teacher")

    response = client.get("/api/v1/books", headers=auth_headers("guardian"))
    assert [b["tytul"] for b in response.json()] == ["Zbiór zadań"]

    response = client.patch(f"/api/v1/books/{book['id']}", json={}, headers=auth_headers("teacher"))
    assert response.status_code == 400

    response = client.delete(f"/api/v1/books/{book['id']}", headers=auth_headers("guardian"))
    assert response.status_code == 403
    response = client.delete(f"/api/v1/books/{book['id']}", headers=auth_headers("teacher"))
    assert response.status_code == 204


def test_created_book_reads_back_unchanged(client, db):
    fields = {"tytul": "Matematyka 2", "wydawnictwo": "Nowa Era", "url": "https://ksiegarnia.example/m2"}
    created = client.post("/api/v1/books", json=fields, headers=auth_headers("teacher")).json()

    response = client.get(f"/api/v1/books/{created['id']}", headers=auth_headers("teacher"))
    assert response.status_code == 200
    stored = response.json()
    assert stored == created
    assert {key: stored[key] for key in fields} == fields
    assert stored["created_by"] == user_id("teacher")
    assert stored["created_at"]
    assert set(stored) == set(fields) | {"id", "created_at", "created_by"}


def test_null_title_in_book_update_is_rejected(client, db):
    created = client.post("/api/v1/books", json={"tytul": "Zbiór zadań"}, headers=auth_headers("teacher")).json()
    response = client.patch(f"/api/v1/books/{created['id']}", json={"tytul": None}, headers=auth_headers("teacher"))
    assert response.status_code == 422
    assert db.queries_for("ksiazki", "update") == []

    response = client.patch(f"/api/v1/books/{created['id']}", json={"url": None}, headers=auth_headers("teacher"))
    assert response.status_code == 200
    assert response.json()["tytul"] == "Zbiór zadań"


def test_diagnoses_filtered_by_student(client, db, student):
    db.seed(
        "diagnozy",
        {"student_id": student["id"], "data_testu": "2024-01-01", "wynik": 40},
        {"student_id": student["id"], "data_testu": "2024-02-01", "wynik": 55},
        {"student_id": "other", "data_testu": "2024-03-01", "wynik": 90},
    )
    response = client.get(f"/api/v1/diagnoses?student_id={student['id']}", headers=auth_headers("teacher"))
    assert response.status_code == 200
    assert [d["data_testu"] for d in response.json()] == ["2024-02-01", "2024-01-01"]


def test_links_with_null_owner(client, db):
    db.seed(
        "linki",
        {"url": "https://a.example", "owner_type": None, "owner_id": None},
        {"url": "https://b.example", "owner_type": "student", "owner_id": "s1"},
    )
    response = client.get("/api/v1/links?owner_type=null", headers=auth_headers("teacher"))
    assert [link["url"] for link in response.json()] == ["https://a.example"]


def test_missing_record_is_404(client):
    response = client.get("/api/v1/books/ghost", headers=auth_headers("teacher"))
    assert response.status_code == 404
    assert response.json() == {"error": "Nie znaleziono rekordu"}
