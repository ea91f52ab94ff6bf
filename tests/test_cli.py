from unittest import mock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from linkcrush.cli import main

CONFIG_TEXT = """\
env: local
storage_path: ./storage
http_server:
  host: 127.0.0.1
  port: "8085"
database:
  name: shortener
  path: localhost:27017
  collection: urls
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    monkeypatch.delenv("ENV", raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path


def test_missing_config_path_fails():
    assert main([]) == 1


def test_nonexistent_config_file_fails(tmp_path):
    assert main(["-config", str(tmp_path / "absent.yaml")]) == 1


def test_unreachable_database_fails(config_file):
    with mock.patch("linkcrush.mongo_store.MongoClient") as client_cls, mock.patch(
        "flask.Flask.run"
    ) as run:
        client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError(
            "down"
        )
        assert main(["-config", str(config_file)]) == 1
    assert run.call_count == 0


def test_serves_on_configured_address(config_file):
    with mock.patch("linkcrush.mongo_store.MongoClient") as client_cls, mock.patch(
        "flask.Flask.run"
    ) as run:
        assert main(["-config", str(config_file)]) == 0
    run.assert_called_once_with(host="127.0.0.1", port=8085)
    assert client_cls.call_args.args[0] == "mongodb://localhost:27017"
    assert client_cls.return_value.close.call_count == 1


def test_config_path_from_environment(config_file, monkeypatch):
    monkeypatch.setenv("CONFIG_PATH", str(config_file))
    with mock.patch("linkcrush.mongo_store.MongoClient"), mock.patch(
        "flask.Flask.run"
    ) as run:
        assert main([]) == 0
    assert run.call_args.kwargs["port"] == 8085