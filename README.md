# linkcrush

linkcrush is a small web service that turns long URLs into seven-character
short codes. It stores them in MongoDB, redirects visitors who follow a short
code, and counts how often each one is followed.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Configuration

The service reads a YAML file (a `.yaml`, `.yml` or `.json` file is accepted).
Give its path in the `CONFIG_PATH` environment variable or with `--config`
(also spelled `-config`). `CONFIG_PATH` wins when both are given.

```yaml
env: local
storage_path: ./storage
http_server:
  host: localhost
  port: "8082"
database:
  name: linkcrush
  path: localhost:27017
  version: "1"
  collection: urls
```

- `storage_path` is required; loading fails without it.
- `env` defaults to `production`. If the `ENV` environment variable is set, it
  overrides `env`.
- `database.path` is the host and port of the MongoDB server. The connection
  URI is built as `mongodb://<path>`, and the records live in the collection
  `database.collection` of the database `database.name`.

Problems with the file raise `linkcrush.config.ConfigError`.

## Running

```
linkcrush --config config/local.yaml
```

or

```
CONFIG_PATH=config/local.yaml linkcrush
```

The command connects to MongoDB (giving up after about two seconds if the
server does not answer a ping) and then serves HTTP on `host:port` from the
`http_server` section. An empty host means `0.0.0.0`; an empty port means
`8080`. It exits with status 1 if the configuration cannot be loaded, the
database cannot be reached, or the port is not a number. The server is
Flask's built-in development server.

## HTTP API

JSON responses have the form `{"message": ..., "data": ...}`. Request bodies
may be JSON (`{"url": "..."}`) or a form with a `url` field.

| Method | Path                    | What it does                                              |
|--------|-------------------------|-----------------------------------------------------------|
| POST   | `/shorten`              | Makes a short code for `url`.                             |
| GET    | `/shorten/<code>`       | Counts the visit and redirects (302) to the stored URL.   |
| GET    | `/<code>`               | Same as above.                                            |
| PUT    | `/shorten/<code>`       | Changes the stored URL and returns the record.            |
| DELETE | `/shorten/<code>`       | Removes the short code; answers `204` with an empty body. |
| GET    | `/shorten/<code>/stats` | Returns the record, including `access_count`.             |

Details worth knowing:

- A new URL gets `201 Created` with the new record, whose `access_count`
  starts at 1. Shortening a URL that is already stored returns `200 OK` with
  the existing record.
- A body that is not valid JSON, not an object, or has a non-string `url`
  gets `400 Bad Request`.
- An unknown code on the redirect or update routes gets `200 OK` with the
  message `Short Code Not Found`; on the stats route it gets `500` with
  `Could not find data`.
- The record returned by `PUT` leaves out `access_count`.
- Timestamps are RFC 3339 strings in UTC.

Short codes come from the MD5 hex digest of the URL. The first seven hex
characters are used. If those are already taken by a different URL, the window
moves one character along the digest; if no window is free, shortening fails
with `500`.

## Using it from Python

```python
from linkcrush.storage import MemoryStore
from linkcrush.web import create_app

app = create_app(MemoryStore())
client = app.test_client()
response = client.post("/shorten", json={"url": "https://example.com/some/long/path"})
print(response.get_json())
```

- `linkcrush.web.create_app(store)` builds a Flask app; `register_routes(app, store)`
  adds the routes to an existing one.
- `linkcrush.storage.ShortUrlStore` is the storage interface (`unique_short_url`,
  `save`, `update`, `delete`, `get`). Lookups of unknown codes raise
  `NotFoundError`; other failures raise `StorageError`.
- `MemoryStore` keeps everything in a dictionary and suits tests.
- `linkcrush.mongo_store.MongoStore.connect(config)` (or `init_store(config)`)
  connects to the configured MongoDB server; `close()` closes the connection.
- `linkcrush.config.load_config(argv)` and `read_config(path)` load a `Config`.
- `linkcrush.keys` has `generate_hash_key(url)`, `hash_window(hash, start)` and
  `generate_unique_key()` for random seven-character keys.