"""Shared fixtures: a seeded temporary database and an API client bound to it."""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

from catalyst_journal.api.deps import get_database
from catalyst_journal.api.middleware.rate_limit import limiter
from catalyst_journal.db.database import JournalDatabase
from catalyst_journal.db.repositories.response_repository import ResponseRepository
from catalyst_journal.db.repositories.training_repository import TrainingRepository
from catalyst_journal.db.repositories.user_repository import UserRepository
from catalyst_journal.main import app
from catalyst_journal.services.response_service import ResponseStore


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest.fixture
def db(temp_db_path):
    """A freshly created and seeded database."""
    return JournalDatabase(temp_db_path)


@pytest.fixture
def training(db):
    return TrainingRepository(db)


@pytest.fixture
def store(db, training):
    return ResponseStore(ResponseRepository(db), training)


@pytest.fixture
def user(db):
    return UserRepository(db).create_user("ana@example.com", "Ana", "not-a-real-hash")


@pytest.fixture
def step_at(training):
    """Look up a seeded step by (day number, step number)."""
    index = training.step_index()

    def _at(day: int, step: int):
        return index.at(day, step)

    return _at


@pytest.fixture
def client(db):
    """API client whose database is the temporary one."""
    app.dependency_overrides[get_database] = lambda: db
    limiter.enabled = False
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True


def register(client, email="ana@example.com", name="Ana", password="secret123"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "name": name, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    """Bearer headers for a newly registered user."""
    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(client):
    """Bearer headers for a second, unrelated user."""
    token = register(client, email="ben@example.com", name="Ben")["token"]
    return {"Authorization": f"Bearer {token}"}
