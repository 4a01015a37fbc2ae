"""Pytest configuration and shared fixtures"""
from typing import Callable, List, Optional

import pytest
from fastapi.testclient import TestClient

from main import create_app
from portfolio_api.core.config import Settings
from portfolio_api.database.contact_store import InMemoryContactStore, PersistenceError
from portfolio_api.utils.email_service import EmailTransport


VALID_PAYLOAD = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "subject": "Hello",
    "message": "I would like to discuss a project opportunity.",
}


class RecordingTransport(EmailTransport):
    """Transport double that keeps sent messages, or fails on demand"""

    name = "recording"

    def __init__(self, events: Optional[List[str]] = None, fail: bool = False):
        self.events = events if events is not None else []
        self.fail = fail
        self.messages = []

    async def send(self, message) -> None:
        self.events.append("send")
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.messages.append(message)


class SpyStore(InMemoryContactStore):
    """In-memory store that counts calls and can fail on create"""

    def __init__(self, events: Optional[List[str]] = None, fail: bool = False):
        super().__init__()
        self.events = events if events is not None else []
        self.fail = fail
        self.create_calls = 0

    def create(self, data):
        self.create_calls += 1
        self.events.append("create")
        if self.fail:
            raise PersistenceError("Failed to save your message. Please try again later.")
        return super().create(data)


def make_settings(**overrides) -> Settings:
    values = dict(LOG_LEVEL="WARNING", CONTACT_STORE_BACKEND="memory", ADMIN_API_TOKEN=None)
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def valid_payload() -> dict:
    return dict(VALID_PAYLOAD)


@pytest.fixture
def events() -> List[str]:
    return []


@pytest.fixture
def transport(events) -> RecordingTransport:
    return RecordingTransport(events=events)


@pytest.fixture
def store(events) -> SpyStore:
    return SpyStore(events=events)


@pytest.fixture
def make_client(transport, store) -> Callable[..., TestClient]:
    """Build a TestClient around a fresh app; keyword args override settings"""

    def _make(**overrides) -> TestClient:
        app = create_app(make_settings(**overrides), store=store, transport=transport)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
