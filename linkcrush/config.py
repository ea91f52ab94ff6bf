"""Service configuration: loading and validation."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

DEFAULT_ENV = "production"
_SUPPORTED_SUFFIXES = frozenset({".yaml", ".yml", ".json"})


class ConfigError(Exception):
    """Raised when the configuration cannot be found, read or validated."""


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _section(data: Mapping, key: str) -> Mapping:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"section {key!r} must be a mapping")
    return value


@dataclass(frozen=True)
class HTTPServer:
    """Address the HTTP server listens on."""

    host: str = ""
    port: str = ""


@dataclass(frozen=True)
class DatabaseSettings:
    """Where and how short URLs are stored."""

    name: str = ""
    path: str = ""
    version: str = ""
    collection: str = ""


@dataclass(frozen=True)
class Config:
    """Complete service configuration."""

    storage_path: str
    env: str = DEFAULT_ENV
    http_server: HTTPServer = field(default_factory=HTTPServer)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)

    def host_address(self) -> str:
        """Return the ``host:port`` address the server binds to."""
        return f"{self.http_server.host}:{self.http_server.port}"

    def storage_address(self) -> str:
        """Return the address of the database server."""
        return self.database.path

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Config":
        """Build a configuration from parsed file contents.

        The ``ENV`` environment variable overrides the ``env`` key.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")

        env = os.environ["ENV"] if "ENV" in os.environ else _text(data.get("env"))
        if not env:
            env = DEFAULT_ENV

        storage_path = _text(data.get("storage_path"))
        if not storage_path:
            raise ConfigError(
                'field "storage_path" is required but the value is not provided'
            )

        server = _section(data, "http_server")
        database = _section(data, "database")
        return cls(
            storage_path=storage_path,
            env=env,
            http_server=HTTPServer(
                host=_text(server.get("host")),
                port=_text(server.get("port")),
            ),
            database=DatabaseSettings(
                name=_text(database.get("name")),
                path=_text(database.get("path")),
                version=_text(database.get("version")),
                collection=_text(database.get("collection")),
            ),
        )


def read_config(path: str | os.PathLike) -> Config:
    """Read and validate a YAML or JSON configuration file."""
    config_file = Path(path)
    if not config_file.exists():
        raise ConfigError(f"config file does not exist {path}")
    if config_file.suffix.lower() not in _SUPPORTED_SUFFIXES:
        raise ConfigError(f"file format '{config_file.suffix}' doesn't supported")
    try:
        with config_file.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file : {exc}") from exc
    return Config.from_mapping({} if data is None else data)


def load_config(argv: list[str] | None = None) -> Config:
    """Locate the configuration file and load it.

    ``CONFIG_PATH`` in the environment wins; otherwise ``-config`` on the
    command line is used.
    """
    config_path = os.environ.get("CONFIG_PATH", "")
    log.info("Config Path : %s", config_path)
    if not config_path:
        parser = argparse.ArgumentParser(description="URL shortener service")
        parser.add_argument(
            "-config",
            "--config",
            dest="config",
            default="",
            help="path to the configuration file",
        )
        config_path = parser.parse_args(argv).config
        log.info("Config Path : %s", config_path)
        if not config_path:
            raise ConfigError("Config path is not set")
    return read_config(config_path)