"""
Document store collaborators for booking records.

``MongoBookingStore`` talks to MongoDB through pymongo. ``InMemoryBookingStore``
keeps documents in a process-local dict and stands in when no
``MONGODB_URI`` is configured, and in tests.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Protocol

from bson import ObjectId
from pymongo import MongoClient

from carepair.config import StorageConfig

logger = logging.getLogger(__name__)

SortSpec = list[tuple[str, int]]


class BookingStore(Protocol):
    """Narrow storage interface consumed by the submission handler."""

    def insert_record(self, collection: str, document: dict[str, Any]) -> str: ...

    def query_records(
        self,
        collection: str,
        filter: Optional[dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> list[dict[str, Any]]: ...


def serialize_doc(doc: dict[str, Any]) -> dict[str, Any]:
    """Make a stored document JSON-friendly: ``_id`` -> ``id``, datetimes -> ISO."""
    if not doc:
        return doc
    d = {**doc}
    if d.get("_id") is not None:
        d["id"] = str(d.pop("_id"))
    for k, v in list(d.items()):
        if isinstance(v, datetime):
            d[k] = v.isoformat()
        elif isinstance(v, dict):
            d[k] = serialize_doc(v)
    return d


class MongoBookingStore:
    """pymongo-backed store. Connection is lazy; the client is created once."""

    def __init__(
        self,
        uri: str,
        database: str,
        timeout_ms: int = 5000,
        client: Optional[MongoClient] = None,
    ) -> None:
        self._client = client or MongoClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            tz_aware=True,
        )
        self._db = self._client[database]

    @classmethod
    def from_config(cls, config: StorageConfig) -> "MongoBookingStore":
        return cls(config.mongodb_uri, config.database_name, config.timeout_ms)

    def insert_record(self, collection: str, document: dict[str, Any]) -> str:
        # insert_one mutates its argument by adding _id
        result = self._db[collection].insert_one(dict(document))
        return str(result.inserted_id)

    def query_records(
        self,
        collection: str,
        filter: Optional[dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        cursor = self._db[collection].find(filter or {})
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def ping(self) -> bool:
        try:
            self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False

    def close(self) -> None:
        self._client.close()


class InMemoryBookingStore:
    """Process-local store. Equality filters only; no persistence across restarts."""

    def __init__(self) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {}

    def insert_record(self, collection: str, document: dict[str, Any]) -> str:
        record_id = str(ObjectId())
        self._collections.setdefault(collection, []).append({**document, "_id": record_id})
        logger.debug("Stored %s/%s", collection, record_id)
        return record_id

    def query_records(
        self,
        collection: str,
        filter: Optional[dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        docs = [
            dict(doc)
            for doc in self._collections.get(collection, [])
            if all(doc.get(k) == v for k, v in (filter or {}).items())
        ]
        # Apply keys last-to-first so the first key is the primary order
        for key, direction in reversed(sort or []):
            docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return docs[:limit] if limit else docs

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, []))

    def ping(self) -> bool:
        return True

    def reset(self) -> None:
        """Clear all collections. Used by test fixtures for isolation."""
        self._collections.clear()


def create_store(config: StorageConfig) -> BookingStore:
    """Pick the Mongo store when a URI is configured, else the in-memory one."""
    if config.mongodb_uri:
        logger.info("Using MongoDB store (database=%s)", config.database_name)
        return MongoBookingStore.from_config(config)
    logger.warning("MONGODB_URI not set - bookings are kept in memory only")
    return InMemoryBookingStore()
