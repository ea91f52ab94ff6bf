"""MongoDB-backed short URL store."""

from __future__ import annotations

from typing import Any

from pymongo import MongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from .config import Config
from .models import ShortUrl
from .storage import NotFoundError, ShortUrlStore, StorageError, resolve_short_code

_TIMEOUT_MS = 2000


def _to_document(short_url: ShortUrl) -> dict[str, Any]:
    return {
        "url": short_url.url,
        "short_code": short_url.short_code,
        "created_at": short_url.created_at,
        "updated_at": short_url.updated_at,
        "access_count": short_url.access_count,
    }


class MongoStore(ShortUrlStore):
    """Store records as documents in one MongoDB collection."""

    def __init__(self, collection: Any, client: Any = None) -> None:
        self.collection = collection
        self.client = client

    @classmethod
    def connect(cls, config: Config) -> "MongoStore":
        """Connect to the server named in the configuration and check it answers."""
        try:
            client = MongoClient(
                f"mongodb://{config.storage_address()}",
                serverSelectionTimeoutMS=_TIMEOUT_MS,
                connectTimeoutMS=_TIMEOUT_MS,
                tz_aware=True,
            )
        except PyMongoError as exc:
            raise StorageError(f"Could not connect to DB {exc}") from exc
        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise StorageError(f"Could not PING to DB {exc}") from exc
        collection = client[config.database.name][config.database.collection]
        return cls(collection, client)

    def close(self) -> None:
        """Close the client connection, if this store owns one."""
        if self.client is not None:
            self.client.close()

    def _find(self, short_code: str) -> ShortUrl | None:
        try:
            document = self.collection.find_one({"short_code": short_code})
        except PyMongoError as exc:
            raise StorageError(f"Could not find URL {exc}") from exc
        return None if document is None else ShortUrl.from_dict(document)

    def unique_short_url(self, unique_hash: str, original_url: str) -> ShortUrl:
        return resolve_short_code(unique_hash, original_url, self._find)

    def save(self, short_url: ShortUrl) -> None:
        try:
            self.collection.insert_one(_to_document(short_url))
        except DuplicateKeyError:
            return
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc

    def update(self, short_url: ShortUrl) -> ShortUrl:
        query = {"short_code": short_url.short_code}
        try:
            self.collection.update_one(query, {"$set": _to_document(short_url)})
        except PyMongoError as exc:
            raise StorageError(f"Could Not update {exc}") from exc
        stored = self._find(short_url.short_code)
        if stored is None:
            raise NotFoundError(f"Could Not FIND {short_url.short_code}")
        return stored

    def delete(self, short_code: str) -> None:
        try:
            self.collection.delete_one({"short_code": short_code})
        except PyMongoError as exc:
            raise StorageError(f"Could not delete data {exc}") from exc

    def get(self, short_code: str) -> ShortUrl:
        stored = self._find(short_code)
        if stored is None:
            raise NotFoundError("Could not find URL")
        return stored


def init_store(config: Config) -> MongoStore:
    """Open the database the configuration points at."""
    return MongoStore.connect(config)