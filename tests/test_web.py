from datetime import datetime, timezone

import pytest

from linkcrush.keys import KEY_LENGTH, generate_hash_key
from linkcrush.models import ShortUrl
from linkcrush.storage import MemoryStore
from linkcrush.web import create_app

URL = "https://example.com/some/long/path"


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    return create_app(store).test_client()


def _create(client, url=URL):
    return client.post("/shorten", json={"url": url})


def test_create_returns_created_record(client):
    response = _create(client)
    assert response.status_code == 201
    body = response.get_json()
    assert body["message"] == "Success"
    assert body["data"]["url"] == URL
    assert body["data"]["short_code"] == generate_hash_key(URL)[:KEY_LENGTH]
    assert body["data"]["access_count"] == 1


def test_create_stores_record(client, store):
    code = _create(client).get_json()["data"]["short_code"]
    assert store.get(code).url == URL
    assert len(store) == 1


def test_create_same_url_twice_returns_existing(client, store):
    first = _create(client).get_json()["data"]["short_code"]
    response = _create(client)
    assert response.status_code == 200
    assert response.get_json()["data"]["short_code"] == first
    assert len(store) == 1


def test_create_with_form_body(client):
    response = client.post("/shorten", data={"url": URL})
    assert response.status_code == 201
    assert response.get_json()["data"]["url"] == URL


@pytest.mark.parametrize("body", [b"{not json", b"", b"[1, 2]", b'{"url": 5}'])
def test_create_rejects_bad_body(client, body):
    response = client.post("/shorten", data=body, content_type="application/json")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Bad Request"


def test_create_skips_window_taken_by_other_url(client, store):
    digest = generate_hash_key(URL)
    store.save(ShortUrl(url="https://example.com/other", short_code=digest[:KEY_LENGTH]))
    response = _create(client)
    assert response.status_code == 201
    assert response.get_json()["data"]["short_code"] == digest[1:1 + KEY_LENGTH]


def test_create_fails_when_every_window_taken(client, store):
    digest = generate_hash_key(URL)
    for start in range(len(digest) - KEY_LENGTH + 1):
        code = digest[start:start + KEY_LENGTH]
        store.save(ShortUrl(url=f"https://example.com/{start}", short_code=code))
    response = _create(client)
    assert response.status_code == 500
    assert response.get_json()["message"] == "Could not shorten URL"


@pytest.mark.parametrize("prefix", ["/shorten/", "/"])
def test_fetch_redirects_and_counts(client, store, prefix):
    code = _create(client).get_json()["data"]["short_code"]
    response = client.get(prefix + code)
    assert response.status_code == 302
    assert response.headers["Location"] == URL
    assert store.get(code).access_count == 2


def test_fetch_unknown_code(client):
    response = client.get("/shorten/missing")
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Short Code Not Found"
    assert body["data"] == "This short code is not associated with any data"


def test_update_changes_url_and_hides_count(client, store):
    code = _create(client).get_json()["data"]["short_code"]
    new_url = "https://example.com/new"
    response = client.put(f"/shorten/{code}", json={"url": new_url})
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Success"
    assert body["data"]["url"] == new_url
    assert body["data"]["short_code"] == code
    assert "access_count" not in body["data"]
    assert store.get(code).url == new_url


def test_update_sets_updated_at(client, store):
    code = _create(client).get_json()["data"]["short_code"]
    before = store.get(code).updated_at
    client.put(f"/shorten/{code}", json={"url": "https://example.com/new"})
    record = store.get(code)
    assert record.updated_at >= before
    assert record.created_at <= record.updated_at
    assert record.updated_at <= datetime.now(timezone.utc)


def test_update_unknown_code(client):
    response = client.put("/shorten/missing", json={"url": URL})
    assert response.status_code == 200
    assert response.get_json()["message"] == "Short Code Not Found"


def test_update_rejects_bad_body(client):
    code = _create(client).get_json()["data"]["short_code"]
    response = client.put(
        f"/shorten/{code}", data=b"{oops", content_type="application/json"
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Bad Request"


def test_delete_removes_record(client, store):
    code = _create(client).get_json()["data"]["short_code"]
    response = client.delete(f"/shorten/{code}")
    assert response.status_code == 204
    assert response.data == b""
    assert len(store) == 0


def test_stats_reports_record(client):
    code = _create(client).get_json()["data"]["short_code"]
    client.get(f"/{code}")
    client.get(f"/{code}")
    body = client.get(f"/shorten/{code}/stats").get_json()
    assert body["message"] == "Success"
    assert body["data"]["access_count"] == 3
    assert body["data"]["url"] == URL


def test_stats_after_delete_fails(client):
    code = _create(client).get_json()["data"]["short_code"]
    client.delete(f"/shorten/{code}")
    response = client.get(f"/shorten/{code}/stats")
    assert response.status_code == 500
    body = response.get_json()
    assert body["message"] == "Failed"
    assert body["data"] == "Could not find data"