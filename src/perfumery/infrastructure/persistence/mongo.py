"""MongoDB client helpers shared by the repositories."""

from __future__ import annotations

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from perfumery.infrastructure.config import Settings

logger = structlog.get_logger(__name__)

DEFAULT_DATABASE = "herman_perfume"


def connect(settings: Settings) -> MongoClient:
    """Create a lazily-connecting client; no I/O happens here."""
    return MongoClient(
        settings.mongodb_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )


def database(client: MongoClient, settings: Settings) -> Database:
    if settings.database_name:
        return client[settings.database_name]
    return client.get_default_database(default=DEFAULT_DATABASE)


def is_available(client: MongoClient) -> bool:
    """Connectivity probe: a ``ping`` round-trip."""
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        logger.warning("mongo_unavailable", error=str(exc))
        return False
    return True


def object_id(raw_id: str) -> ObjectId | None:
    """Parse a record ID; malformed IDs simply match nothing."""
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError):
        return None
