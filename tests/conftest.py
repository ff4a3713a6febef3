import pytest
from fastapi.testclient import TestClient

from fake_supabase import FakeChannelBackend, FakeDatabase, FakeSupabase
from tutorcenter.core.realtime import ChangeRegistry, get_change_registry
from tutorcenter.database.supabase_client import (
    get_supabase, get_service_supabase, get_optional_service_supabase, get_user_supabase
)
from tutorcenter.main import app, limiter
from tutorcenter.modules.auth.service import clear_auth_cache
from tutorcenter.modules.live.routes import get_token_client_factory

# role key -> (user id, email, stored role)
USERS = {
    "admin": ("user-admin", "admin@korepetycje.pl", "administrator"),
    "consultant": ("user-consultant", "konsultant@korepetycje.pl", "konsultant"),
    "teacher": ("user-teacher", "nauczyciel@korepetycje.pl", "nauczyciel"),
    "other_teacher": ("user-teacher-2", "nauczyciel2@korepetycje.pl", "nauczyciel"),
    "guardian": ("user-guardian", "opiekun@korepetycje.pl", "opiekun"),
    "student": ("user-student", "uczen@korepetycje.pl", "uczen"),
}

PASSWORD = "correct-horse"


def auth_headers(role: str) -> dict:
    return {"Authorization": f"Bearer token-{role}"}


def user_id(role: str) -> str:
    return USERS[role][0]


@pytest.fixture(autouse=True)
def reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def supabase(db):
    fake = FakeSupabase(db)
    for role, (uid, email, stored_role) in USERS.items():
        fake.auth.add_user(uid, email, token=f"token-{role}", password=PASSWORD)
        db.seed("user_profiles", {
            "user_id": uid,
            "full_name": role.replace("_", " ").title(),
            "role": stored_role,
            "is_active": True,
        })
    return fake


@pytest.fixture
def channel_backend():
    return FakeChannelBackend()


@pytest.fixture
def registry(channel_backend):
    return ChangeRegistry(channel_backend)


@pytest.fixture
def client(supabase, registry):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_service_supabase] = lambda: supabase
    app.dependency_overrides[get_optional_service_supabase] = lambda: supabase
    app.dependency_overrides[get_user_supabase] = lambda: supabase
    app.dependency_overrides[get_change_registry] = lambda: registry
    app.dependency_overrides[get_token_client_factory] = lambda: (lambda token: supabase)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def student(db):
    """A student owned by the teacher"""
    return db.seed("uczniowie", {
        "imie": "Jan",
        "nazwisko": "Kowalski",
        "created_by": user_id("teacher"),
    })[0]
