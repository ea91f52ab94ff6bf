"""HTTP routes for creating, resolving, updating and deleting short URLs."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from flask import Flask, Response, jsonify, redirect, request

from .keys import generate_hash_key
from .models import ApiResponse, parse_url_payload
from .storage import ShortUrlStore, StorageError, UrlExistsError

log = logging.getLogger(__name__)

_FORM_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})
_NOT_FOUND = ("Short Code Not Found", "This short code is not associated with any data")


def _reply(status: int, message: str, data: Any = None) -> tuple[Response, int]:
    return jsonify(ApiResponse(message, data).to_dict()), status


def _requested_url() -> str:
    """Read the ``url`` field from the request body; raises ValueError."""
    if request.mimetype in _FORM_TYPES:
        return parse_url_payload(request.form.to_dict())
    return parse_url_payload(request.get_data())


def _public_view(record_dict: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in record_dict.items() if key != "access_count"}


def register_routes(app: Flask, store: ShortUrlStore) -> None:
    """Attach the short URL endpoints to a Flask application."""

    def create_short_url():
        try:
            url = _requested_url()
        except ValueError as exc:
            return _reply(400, "Bad Request", str(exc))

        try:
            record = store.unique_short_url(generate_hash_key(url), url)
        except UrlExistsError as exc:
            return _reply(200, "Success", exc.short_url)
        except StorageError as exc:
            return _reply(500, "Could not shorten URL", str(exc))

        try:
            store.save(record)
        except StorageError as exc:
            return _reply(500, "Could save short url to DB", str(exc))
        return _reply(201, "Success", record)

    def fetch_original_url(short_url: str):
        try:
            record = store.get(short_url)
        except StorageError:
            return _reply(200, *_NOT_FOUND)

        record = replace(record, access_count=record.access_count + 1)
        try:
            store.update(record)
        except StorageError as exc:
            log.error("%s", exc)
            return _reply(500, "Failed", "Failed to update data")
        return redirect(record.url, code=302)

    def update_short_url(short_url: str):
        try:
            url = _requested_url()
        except ValueError as exc:
            return _reply(400, "Bad Request", str(exc))

        try:
            record = store.get(short_url)
        except StorageError:
            return _reply(200, *_NOT_FOUND)

        record = replace(record, url=url, updated_at=datetime.now(timezone.utc))
        try:
            stored = store.update(record)
        except StorageError as exc:
            log.error("%s", exc)
            return _reply(500, "Failed", "Failed to update data")
        return _reply(200, "Success", _public_view(stored.to_dict()))

    def delete_short_url(short_url: str):
        try:
            store.delete(short_url)
        except StorageError:
            return _reply(500, "Failed", "Failed to delete data")
        return Response(status=204)

    def short_url_stats(short_url: str):
        try:
            record = store.get(short_url)
        except StorageError:
            return _reply(500, "Failed", "Could not find data")
        return _reply(200, "Success", record)

    app.add_url_rule("/shorten", "create_short_url", create_short_url, methods=["POST"])
    app.add_url_rule(
        "/shorten/<short_url>", "fetch_original_url", fetch_original_url, methods=["GET"]
    )
    app.add_url_rule(
        "/<short_url>", "redirect_short_url", fetch_original_url, methods=["GET"]
    )
    app.add_url_rule(
        "/shorten/<short_url>", "update_short_url", update_short_url, methods=["PUT"]
    )
    app.add_url_rule(
        "/shorten/<short_url>", "delete_short_url", delete_short_url, methods=["DELETE"]
    )
    app.add_url_rule(
        "/shorten/<short_url>/stats", "short_url_stats", short_url_stats, methods=["GET"]
    )


def create_app(store: ShortUrlStore) -> Flask:
    """Build a Flask application serving the given store."""
    app = Flask(__name__)
    register_routes(app, store)
    return app