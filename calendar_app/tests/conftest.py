from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from calendar_app.client.api import EventsApiClient
from calendar_app.config import Settings
from calendar_app.main import create_app
from calendar_app.services.events.store import InMemoryEventStore


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def client(store) -> Generator[TestClient, None, None]:
    app = create_app(Settings(STORE_BACKEND="memory"), store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api(client) -> EventsApiClient:
    return EventsApiClient(base_url="http://testserver/api", http=client)
