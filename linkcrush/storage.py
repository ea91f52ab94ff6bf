"""Storage interface for short URLs and an in-memory implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from .keys import hash_window
from .models import ShortUrl


class StorageError(Exception):
    """A storage operation failed."""


class NotFoundError(StorageError):
    """No short URL is stored under the requested code."""


class UrlExistsError(StorageError):
    """The URL is already stored; ``short_url`` holds the existing record."""

    def __init__(self, short_url: ShortUrl):
        super().__init__("Original URL exists in DB")
        self.short_url = short_url


def resolve_short_code(
    unique_hash: str, original_url: str, lookup: Callable[[str], ShortUrl | None]
) -> ShortUrl:
    """Pick the first free window of the hash as the short code for a URL.

    Raises UrlExistsError if the URL already owns one of the windows and
    StorageError if every window is taken by other URLs.
    """
    start = 0
    while key := hash_window(unique_hash, start):
        existing = lookup(key)
        if existing is None:
            now = datetime.now(timezone.utc)
            return ShortUrl(
                url=original_url,
                short_code=key,
                created_at=now,
                updated_at=now,
                access_count=1,
            )
        if existing.url == original_url:
            raise UrlExistsError(existing)
        start += 1
    raise StorageError("no free short code is left for this URL")


class ShortUrlStore(ABC):
    """Persistence operations the web layer relies on."""

    def unique_short_url(self, unique_hash: str, original_url: str) -> ShortUrl:
        """Return a new, unsaved record with a free short code for the URL."""

        def lookup(code: str) -> ShortUrl | None:
            try:
                return self.get(code)
            except NotFoundError:
                return None

        return resolve_short_code(unique_hash, original_url, lookup)

    @abstractmethod
    def save(self, short_url: ShortUrl) -> None:
        """Store a record; a record with the same short code is left as is."""

    @abstractmethod
    def update(self, short_url: ShortUrl) -> ShortUrl:
        """Overwrite the record with the same short code and return it."""

    @abstractmethod
    def delete(self, short_code: str) -> None:
        """Remove the record with this short code, if any."""

    @abstractmethod
    def get(self, short_code: str) -> ShortUrl:
        """Return the record with this short code."""


class MemoryStore(ShortUrlStore):
    """Thread-safe store that keeps records in a dictionary."""

    def __init__(self) -> None:
        self._records: dict[str, ShortUrl] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def unique_short_url(self, unique_hash: str, original_url: str) -> ShortUrl:
        with self._lock:
            return resolve_short_code(
                unique_hash,
                original_url,
                lambda code: self._copy(self._records.get(code)),
            )

    def save(self, short_url: ShortUrl) -> None:
        with self._lock:
            self._records.setdefault(short_url.short_code, replace(short_url))

    def update(self, short_url: ShortUrl) -> ShortUrl:
        with self._lock:
            if short_url.short_code not in self._records:
                raise NotFoundError(f"Could Not FIND {short_url.short_code}")
            self._records[short_url.short_code] = replace(short_url)
            return replace(short_url)

    def delete(self, short_code: str) -> None:
        with self._lock:
            self._records.pop(short_code, None)

    def get(self, short_code: str) -> ShortUrl:
        with self._lock:
            record = self._records.get(short_code)
        if record is None:
            raise NotFoundError("Could not find URL")
        return replace(record)

    @staticmethod
    def _copy(record: ShortUrl | None) -> ShortUrl | None:
        return None if record is None else replace(record)