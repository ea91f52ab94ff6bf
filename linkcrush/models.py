"""Data models exchanged with clients and stored in the database."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


def _parse_time(value: Any) -> datetime:
    if value is None:
        return ZERO_TIME
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid timestamp: {value!r}") from exc
    else:
        raise ValueError(f"invalid timestamp: {value!r}")
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass
class ShortUrl:
    """A shortened URL and its bookkeeping."""

    url: str = ""
    short_code: str = ""
    created_at: datetime = field(default=ZERO_TIME)
    updated_at: datetime = field(default=ZERO_TIME)
    access_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, with RFC 3339 timestamps."""
        return {
            "url": self.url,
            "short_code": self.short_code,
            "created_at": _format_time(self.created_at),
            "updated_at": _format_time(self.updated_at),
            "access_count": self.access_count,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShortUrl":
        """Build from a JSON or database document; unknown keys are ignored."""
        return cls(
            url=str(data.get("url") or ""),
            short_code=str(data.get("short_code") or ""),
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
            access_count=int(data.get("access_count") or 0),
        )


@dataclass
class ApiResponse:
    """Envelope for every JSON response body."""

    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the envelope."""
        to_dict = getattr(self.data, "to_dict", None)
        data = to_dict() if callable(to_dict) else self.data
        return {"message": self.message, "data": data}


def parse_url_payload(payload: str | bytes | Mapping | None) -> str:
    """Extract the ``url`` field from a request body.

    A missing field yields an empty string; malformed bodies raise ValueError.
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON body: {exc}") from exc
    if payload is None:
        return ""
    if not isinstance(payload, Mapping):
        raise ValueError("request body must be a JSON object")
    url = payload.get("url")
    if url is None:
        return ""
    if not isinstance(url, str):
        raise ValueError("field 'url' must be a string")
    return url