from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError

from calendar_app.config import Settings, settings

logger = logging.getLogger(__name__)

EVENTS_COLLECTION = "events"


def create_client(config: Settings | None = None) -> AsyncIOMotorClient:
    config = config or settings
    # tz_aware so stored timestamps come back as UTC datetimes
    return AsyncIOMotorClient(config.MONGODB_URI, tz_aware=True)


def get_database(client: AsyncIOMotorClient, config: Settings | None = None) -> AsyncIOMotorDatabase:
    config = config or settings
    try:
        return client.get_default_database()
    except ConfigurationError:
        logger.debug("No database in MONGODB_URI, using %s", config.MONGODB_DATABASE)
        return client.get_database(config.MONGODB_DATABASE)


def get_events_collection(client: AsyncIOMotorClient, config: Settings | None = None) -> AsyncIOMotorCollection:
    return get_database(client, config)[EVENTS_COLLECTION]
