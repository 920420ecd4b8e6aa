from __future__ import annotations

import copy
import logging
from typing import Any, Protocol

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from calendar_app.config import Settings, settings
from calendar_app.core.errors import StoreError

logger = logging.getLogger(__name__)


class EventStore(Protocol):
    async def list_events(self) -> list[dict[str, Any]]:
        ...

    async def get_event(self, event_id: str) -> dict[str, Any] | None:
        ...

    async def insert_event(self, document: dict[str, Any]) -> dict[str, Any]:
        ...

    async def replace_event(self, event_id: str, document: dict[str, Any]) -> dict[str, Any] | None:
        ...

    async def delete_event(self, event_id: str) -> bool:
        ...


def parse_object_id(event_id: str) -> ObjectId | None:
    if not isinstance(event_id, str) or not ObjectId.is_valid(event_id):
        return None
    return ObjectId(event_id)


class MongoEventStore:
    def __init__(self, collection, client=None) -> None:
        self.collection = collection
        self.client = client

    async def list_events(self) -> list[dict[str, Any]]:
        try:
            cursor = self.collection.find().sort("start", ASCENDING)
            return await cursor.to_list(length=None)
        except PyMongoError as exc:
            logger.error("Listing events failed: %s", exc)
            raise StoreError(str(exc)) from exc

    async def get_event(self, event_id: str) -> dict[str, Any] | None:
        oid = parse_object_id(event_id)
        if oid is None:
            return None
        try:
            return await self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            logger.error("Loading event id=%s failed: %s", event_id, exc)
            raise StoreError(str(exc)) from exc

    async def insert_event(self, document: dict[str, Any]) -> dict[str, Any]:
        document = dict(document)
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as exc:
            logger.error("Inserting event failed: %s", exc)
            raise StoreError(str(exc)) from exc
        document["_id"] = result.inserted_id
        return document

    async def replace_event(self, event_id: str, document: dict[str, Any]) -> dict[str, Any] | None:
        oid = parse_object_id(event_id)
        if oid is None:
            return None
        body = {key: value for key, value in document.items() if key != "_id"}
        try:
            return await self.collection.find_one_and_replace(
                {"_id": oid},
                body,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.error("Replacing event id=%s failed: %s", event_id, exc)
            raise StoreError(str(exc)) from exc

    async def delete_event(self, event_id: str) -> bool:
        oid = parse_object_id(event_id)
        if oid is None:
            return False
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            logger.error("Deleting event id=%s failed: %s", event_id, exc)
            raise StoreError(str(exc)) from exc
        return result.deleted_count == 1

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


class InMemoryEventStore:
    """Process-local store with the same ordering and id shape as the Mongo one."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    async def list_events(self) -> list[dict[str, Any]]:
        documents = sorted(self._documents.values(), key=lambda doc: doc["start"])
        return [copy.deepcopy(doc) for doc in documents]

    async def get_event(self, event_id: str) -> dict[str, Any] | None:
        oid = parse_object_id(event_id)
        if oid is None or str(oid) not in self._documents:
            return None
        return copy.deepcopy(self._documents[str(oid)])

    async def insert_event(self, document: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(document)
        stored["_id"] = ObjectId()
        self._documents[str(stored["_id"])] = stored
        return copy.deepcopy(stored)

    async def replace_event(self, event_id: str, document: dict[str, Any]) -> dict[str, Any] | None:
        oid = parse_object_id(event_id)
        if oid is None or str(oid) not in self._documents:
            return None
        stored = copy.deepcopy(document)
        stored["_id"] = oid
        self._documents[str(oid)] = stored
        return copy.deepcopy(stored)

    async def delete_event(self, event_id: str) -> bool:
        oid = parse_object_id(event_id)
        if oid is None:
            return False
        return self._documents.pop(str(oid), None) is not None

    def close(self) -> None:
        return None


def build_event_store(config: Settings | None = None) -> EventStore:
    config = config or settings
    backend = config.STORE_BACKEND.strip().lower()
    if backend == "memory":
        logger.warning("Using in-memory event store; events are lost on restart")
        return InMemoryEventStore()
    if backend != "mongo":
        raise ValueError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND}")

    from calendar_app.database.mongo import create_client, get_events_collection

    client = create_client(config)
    return MongoEventStore(get_events_collection(client, config), client=client)
