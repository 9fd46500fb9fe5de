"""Key-value stores for the serialized intake session."""

from typing import Dict, Optional, Protocol
from datetime import datetime
from pymongo.collection import Collection
from clinical_intake.config.database import get_sessions_collection
import logging

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Synchronous get/set/remove store holding JSON session blobs."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemorySessionStore:
    """Process-local store; the default and the one tests use."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class MongoSessionStore:
    """Session blobs in a MongoDB collection, one document per key."""

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_sessions_collection()
        return self._collection

    def get(self, key: str) -> Optional[str]:
        doc = self.collection.find_one({"key": key})
        if doc:
            return doc.get("value")
        return None

    def set(self, key: str, value: str) -> None:
        # Idempotent upsert on the fixed key
        self.collection.replace_one(
            {"key": key},
            {"key": key, "value": value, "updated_at": datetime.utcnow()},
            upsert=True,
        )
        logger.debug(f"Upserted session document {key}")

    def remove(self, key: str) -> None:
        self.collection.delete_one({"key": key})
