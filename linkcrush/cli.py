"""Command-line entry point that starts the URL shortener service."""

from __future__ import annotations

import logging

from .config import ConfigError, load_config
from .mongo_store import init_store
from .storage import StorageError
from .web import create_app

log = logging.getLogger(__name__)

DEFAULT_PORT = 8080


def main(argv: list[str] | None = None) -> int:
    """Load the configuration, open the database and serve HTTP requests."""
    logging.basicConfig(level=logging.INFO)
    try:
        config = load_config(argv)
    except ConfigError as exc:
        log.error("%s", exc)
        return 1

    try:
        store = init_store(config)
    except StorageError as exc:
        log.error("%s", exc)
        return 1

    port_text = config.http_server.port
    try:
        port = int(port_text) if port_text else DEFAULT_PORT
    except ValueError:
        log.error("invalid port %r", port_text)
        store.close()
        return 1

    app = create_app(store)
    try:
        app.run(host=config.http_server.host or "0.0.0.0", port=port)
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())