from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Callable

from calendar_app.core.errors import NotFoundError, ValidationError
from calendar_app.domain.categories import normalize_category
from calendar_app.domain.schemas.event import EventCreate, EventOut, EventUpdate, coerce_timestamp
from calendar_app.services.events.store import EventStore

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Event deleted"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def apply_update(document: dict[str, Any], update: EventUpdate) -> dict[str, Any]:
    """Overwrite the fields of ``document`` that are present and truthy in ``update``.

    Empty strings, zero and null are ignored rather than clearing the stored
    value, so a client cannot blank out a description through this path.
    """
    updated = dict(document)
    if update.title:
        title = str(update.title).strip()
        if not title:
            raise ValidationError("Path `title` is required.")
        updated["title"] = title
    if update.start:
        updated["start"] = coerce_timestamp(update.start, "start")
    if update.end:
        updated["end"] = coerce_timestamp(update.end, "end")
    if update.category:
        updated["category"] = normalize_category(update.category)
    if update.description:
        updated["description"] = str(update.description).strip()
    return updated


class EventService:
    def __init__(self, store: EventStore, now: Callable[[], datetime] = _utcnow) -> None:
        self.store = store
        self._now = now

    async def list_events(self) -> list[EventOut]:
        documents = await self.store.list_events()
        return [EventOut.from_document(doc) for doc in documents]

    async def get_event(self, event_id: str) -> EventOut:
        document = await self.store.get_event(event_id)
        if document is None:
            raise NotFoundError()
        return EventOut.from_document(document)

    async def create_event(self, payload: EventCreate) -> EventOut:
        document = {
            "title": payload.title,
            "start": payload.start,
            "end": payload.end,
            "category": payload.category,
            "description": payload.description,
            "createdAt": self._now(),
        }
        if payload.start >= payload.end:
            logger.info("Accepting event %r with start >= end", payload.title)
        created = await self.store.insert_event(document)
        logger.info("Created event id=%s category=%s", created["_id"], created["category"])
        return EventOut.from_document(created)

    async def update_event(self, event_id: str, update: EventUpdate) -> EventOut:
        document = await self.store.get_event(event_id)
        if document is None:
            raise NotFoundError()
        updated = apply_update(document, update)
        saved = await self.store.replace_event(event_id, updated)
        if saved is None:
            # deleted between load and save
            raise NotFoundError()
        logger.info("Updated event id=%s", event_id)
        return EventOut.from_document(saved)

    async def delete_event(self, event_id: str) -> dict[str, str]:
        document = await self.store.get_event(event_id)
        if document is None:
            raise NotFoundError()
        if not await self.store.delete_event(event_id):
            raise NotFoundError()
        logger.info("Deleted event id=%s", event_id)
        return {"message": DELETED_MESSAGE}
