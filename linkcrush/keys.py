"""Short-key generation."""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Sequence

CHARSET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
KEY_LENGTH = 7


def generate_unique_key() -> str:
    """Return a random key of KEY_LENGTH characters from CHARSET."""
    return "".join(secrets.choice(CHARSET) for _ in range(KEY_LENGTH))


def generate_hash_key(long_url: str) -> str:
    """Return the hex MD5 digest of a URL."""
    return hashlib.md5(long_url.encode("utf-8")).hexdigest()


def hash_window(unique_hash: str | Sequence[str], start_index: int) -> str:
    """Return KEY_LENGTH characters of the hash from start_index, or "" past the end."""
    if start_index < 0:
        raise ValueError("start_index must not be negative")
    window = unique_hash[start_index:start_index + KEY_LENGTH]
    if len(window) < KEY_LENGTH:
        return ""
    return "".join(window)