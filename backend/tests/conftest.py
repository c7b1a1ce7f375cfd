"""Shared test configuration, fixtures and pytest markers."""

import pytest
from fastapi.testclient import TestClient

from api import dependencies
from api.router import limiter
from main import app
from services.application_store import InMemoryApplicationStore
from services.gemini_client import TextGenerator
from services.notification_store import InMemoryNotificationStore
from services.profile_store import InMemoryProfileStore

limiter.enabled = False

TEST_USER = "user-1"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "e2e: full HTTP round trip through the FastAPI app"
    )


class ScriptedGenerator(TextGenerator):
    """Returns ``reply`` for every prompt and records the prompts it saw."""

    def __init__(self, reply: str = "[]", live: bool = True) -> None:
        self.reply = reply
        self.live = live
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def generator():
    return ScriptedGenerator()


@pytest.fixture
def notification_store():
    return InMemoryNotificationStore()


@pytest.fixture
def profile_store():
    return InMemoryProfileStore()


@pytest.fixture
def application_store():
    return InMemoryApplicationStore()


def _override_stores(notification_store, profile_store, application_store, generator):
    app.dependency_overrides[dependencies.get_notification_store] = lambda: notification_store
    app.dependency_overrides[dependencies.get_profile_store] = lambda: profile_store
    app.dependency_overrides[dependencies.get_application_store] = lambda: application_store
    app.dependency_overrides[dependencies.get_text_generator] = lambda: generator


@pytest.fixture
def client(notification_store, profile_store, application_store, generator):
    """Client whose session belongs to TEST_USER."""
    _override_stores(notification_store, profile_store, application_store, generator)
    app.dependency_overrides[dependencies.get_optional_user_id] = lambda: TEST_USER
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(notification_store, profile_store, application_store, generator):
    """Client with no session cookie."""
    _override_stores(notification_store, profile_store, application_store, generator)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def create_profile(client):
    """Create TEST_USER's CV profile with the given skills through the API."""

    def _create(skills: list[str] | None = None, summary: str = "Backend engineer") -> dict:
        response = client.post(
            "/api/cv-profile",
            json={
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@example.com",
                "summary": summary,
            },
        )
        assert response.status_code == 200
        if skills is not None:
            response = client.post("/api/cv-profile/skills", json=skills)
            assert response.status_code == 200
        return client.get("/api/cv-profile/full").json()

    return _create
