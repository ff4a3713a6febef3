import pytest
from fastapi import HTTPException

from fake_supabase import FakeSupabase
from tutorcenter.core.resource import (
    NOT_AUTHENTICATED_MESSAGE, NOT_FOUND_MESSAGE, UNSET, OrderBy, define_resource
)

NOTES = define_resource(
    "notatki",
    filter_columns=("student_id", "archived_at"),
    order_by=OrderBy("title"),
    auto_created_by=True,
    error_messages={"fetch": "Błąd pobierania notatek", "delete": "Błąd usuwania notatki"},
)


@pytest.fixture
def notes():
    fake = FakeSupabase()
    fake.db.seed(
        "notatki",
        {"title": "b", "student_id": "s1", "archived_at": None},
        {"title": "a", "student_id": "s1", "archived_at": "2024-01-01"},
        {"title": "c", "student_id": "s2", "archived_at": None},
    )
    return NOTES.bind(fake), fake.db


def test_default_channel_name():
    assert NOTES.channel == "notatki_changes"
    assert define_resource("x", channel="custom").channel == "custom"


def test_list_is_ordered(notes):
    resource, _ = notes
    result = resource.list()
    assert result.ok
    assert [r["title"] for r in result.data] == ["a", "b", "c"]


def test_unset_none_and_value_filters_differ(notes):
    resource, db = notes
    assert len(resource.list({"archived_at": UNSET}).data) == 3
    assert [r["title"] for r in resource.list({"archived_at": None}).data] == ["b", "c"]
    assert [r["title"] for r in resource.list({"student_id": "s1"}).data] == ["a", "b"]

    filters = [q["filters"] for q in db.queries_for("notatki", "select")]
    assert filters[0] == []
    assert filters[1] == [("is", "archived_at", "null")]
    assert filters[2] == [("eq", "student_id", "s1")]


def test_non_filterable_column_is_ignored(notes):
    resource, _ = notes
    assert len(resource.list({"title": "a"}).data) == 3


def test_get_missing_row_is_not_an_error(notes):
    resource, _ = notes
    result = resource.get("missing")
    assert result.ok
    assert result.data is None


def test_insert_stamps_created_by_over_caller_value(notes):
    resource, _ = notes
    result = resource.insert({"title": "d", "created_by": "someone-else"}, "user-1")
    assert result.ok
    assert result.data["created_by"] == "user-1"
    assert result.data["id"]


def test_insert_without_user_is_rejected_before_query(notes):
    resource, db = notes
    result = resource.insert({"title": "d"}, None)
    assert result.error == NOT_AUTHENTICATED_MESSAGE
    assert db.queries_for("notatki", "insert") == []


def test_update_missing_row_is_not_found(notes):
    resource, _ = notes
    result = resource.update("missing", {"title": "z"})
    assert result.not_found
    with pytest.raises(HTTPException) as exc:
        result.unwrap()
    assert exc.value.status_code == 404
    assert exc.value.detail == NOT_FOUND_MESSAGE


def test_remove_missing_row_succeeds(notes):
    resource, _ = notes
    assert resource.remove("missing").ok


def test_backend_error_message_is_kept(notes):
    resource, db = notes
    db.fail("notatki", "select", message="permission denied for table notatki")
    result = resource.list()
    assert result.data is None
    assert result.error == "permission denied for table notatki"


def test_unexpected_error_uses_configured_message(notes):
    resource, db = notes
    db.fail("notatki", "select")
    assert resource.list().error == "Błąd pobierania notatek"
    db.fail("notatki", "delete")
    assert resource.remove("x").error == "Błąd usuwania notatki"


def test_unwrap_uses_given_status(notes):
    resource, db = notes
    db.fail("notatki", "insert", message="duplicate key")
    with pytest.raises(HTTPException) as exc:
        resource.insert({"title": "x"}, "u").unwrap(status_code=400)
    assert exc.value.status_code == 400
    assert exc.value.detail == "duplicate key"
