import asyncio
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from calendar_app.config import Settings
from calendar_app.core.errors import NotFoundError, StoreError, ValidationError
from calendar_app.domain.schemas.event import EventCreate, EventUpdate
from calendar_app.main import create_app
from calendar_app.services.events.service import EventService, apply_update
from calendar_app.services.events.store import InMemoryEventStore

CREATED_AT = datetime(2024, 3, 1, 12, tzinfo=timezone.utc)


def _service() -> EventService:
    return EventService(InMemoryEventStore(), now=lambda: CREATED_AT)


def _payload(**overrides) -> EventCreate:
    data = {"title": "Standup", "start": "2024-03-11T09:00:00Z", "end": "2024-03-11T09:15:00Z", "category": "mle"}
    data.update(overrides)
    return EventCreate(**data)


def test_create_sets_id_and_created_at() -> None:
    service = _service()

    created = asyncio.run(service.create_event(_payload()))

    assert created.id
    assert created.created_at == CREATED_AT
    assert created.start == datetime(2024, 3, 11, 9, tzinfo=timezone.utc)


def test_naive_timestamps_are_read_as_utc() -> None:
    service = _service()

    created = asyncio.run(service.create_event(_payload(start="2024-03-11T09:00:00", end="2024-03-11T10:00:00")))

    assert created.start.tzinfo is not None
    assert created.start.hour == 9


def test_id_is_stable_across_updates() -> None:
    service = _service()

    async def scenario():
        created = await service.create_event(_payload())
        first = await service.update_event(created.id, EventUpdate(title="Retro"))
        second = await service.update_event(created.id, EventUpdate(description="notes"))
        return created, first, second

    created, first, second = asyncio.run(scenario())
    assert created.id == first.id == second.id
    assert second.title == "Retro"
    assert second.created_at == created.created_at


def test_missing_event_raises_not_found() -> None:
    service = _service()

    with pytest.raises(NotFoundError):
        asyncio.run(service.get_event("65f0c0ffee0000000000beef"))
    with pytest.raises(NotFoundError):
        asyncio.run(service.update_event("65f0c0ffee0000000000beef", EventUpdate(title="x")))
    with pytest.raises(NotFoundError):
        asyncio.run(service.delete_event("65f0c0ffee0000000000beef"))


def test_apply_update_only_overwrites_truthy_fields() -> None:
    document = {
        "title": "Standup",
        "start": datetime(2024, 3, 11, 9, tzinfo=timezone.utc),
        "end": datetime(2024, 3, 11, 9, 15, tzinfo=timezone.utc),
        "category": "mle",
        "description": "daily",
        "createdAt": CREATED_AT,
    }

    updated = apply_update(document, EventUpdate(end="2024-03-11T09:30:00Z", description="", category="nope"))

    assert updated["end"] == datetime(2024, 3, 11, 9, 30, tzinfo=timezone.utc)
    assert updated["description"] == "daily"
    assert updated["category"] == "other"
    assert updated["start"] == document["start"]
    assert document["end"] == datetime(2024, 3, 11, 9, 15, tzinfo=timezone.utc)


def test_apply_update_rejects_bad_timestamp() -> None:
    with pytest.raises(ValidationError):
        apply_update({"title": "x"}, EventUpdate(start="tomorrow-ish"))


class _DeletedDuringUpdateStore(InMemoryEventStore):
    async def replace_event(self, event_id, document):
        await self.delete_event(event_id)
        return await super().replace_event(event_id, document)


def test_update_racing_delete_is_not_found() -> None:
    service = EventService(_DeletedDuringUpdateStore())

    async def scenario():
        created = await service.create_event(_payload())
        await service.update_event(created.id, EventUpdate(title="Late"))

    with pytest.raises(NotFoundError):
        asyncio.run(scenario())


class _BrokenStore(InMemoryEventStore):
    async def list_events(self):
        raise StoreError("connection refused")


def test_store_errors_surface_as_500() -> None:
    app = create_app(Settings(STORE_BACKEND="memory"), store=_BrokenStore())

    with TestClient(app) as client:
        response = client.get("/api/events")

    assert response.status_code == 500
    assert response.json() == {"message": "connection refused"}
