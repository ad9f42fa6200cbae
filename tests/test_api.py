"""HTTP endpoint tests."""

import time

from fastapi.testclient import TestClient

from conftest import FakeSolr, blip, wavelet
from wavesearch.app import create_app
from wavesearch.config import Settings
from wavesearch.lifecycle import SearchRuntime
from wavesearch.model import WaveletName
from wavesearch.store.memory import InMemoryWaveStore


def test_liveness_returns_alive(client: TestClient) -> None:
    response = client.get("/api/v1/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness_checks_scheduler_and_solr(client: TestClient) -> None:
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()["checks"]] == ["index_scheduler", "solr"]


def test_search_endpoint(client: TestClient, store: InMemoryWaveStore, fake_solr: FakeSolr) -> None:
    store.create_wavelet(wavelet("w1", "conv+root", documents={"b+1": blip("Hello there")}))
    fake_solr.add_hit("w1", "conv+root")

    response = client.get("/api/v1/search", params={"user": "alice@example.com", "q": "hello"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["results"][0]["title"] == "Hello there"
    assert body["failed"] is False


def test_search_backend_down_is_empty(client: TestClient, fake_solr: FakeSolr) -> None:
    fake_solr.fail_select = True
    response = client.get("/api/v1/search", params={"user": "alice@example.com"})
    assert response.status_code == 200
    assert response.json()["failed"] is True
    assert response.json()["results"] == []


def test_search_requires_user(client: TestClient) -> None:
    assert client.get("/api/v1/search", params={"q": "x"}).status_code == 422


def test_rebuild_endpoint(client: TestClient, store: InMemoryWaveStore, fake_solr: FakeSolr) -> None:
    store.create_wavelet(wavelet("w1", "conv+root"))
    fake_solr.documents.clear()

    response = client.post("/api/v1/admin/reindex")

    assert response.status_code == 200
    assert response.json() == {"cleared": True, "wavelets": 1, "failed": 0}
    assert list(fake_solr.documents) == ["w1/~/conv+root/b+1"]


def test_reindex_unknown_wave(client: TestClient) -> None:
    assert client.post("/api/v1/admin/reindex/nope").status_code == 404


def test_store_events_update_index(client: TestClient, store: InMemoryWaveStore, fake_solr: FakeSolr) -> None:
    store.create_wavelet(wavelet("w1", "conv+root", version=1))
    store.update_wavelet(wavelet("w1", "conv+root", version=2, documents={"b+1": blip("edited")}))
    store.commit(WaveletName.of("w1", "conv+root"))

    deadline = time.monotonic() + 5
    while time.monotonic() < deadline:
        doc = fake_solr.documents.get("w1/~/conv+root/b+1")
        if doc is not None and doc["text_t"] == "\nedited":
            break
        time.sleep(0.02)
    assert fake_solr.documents["w1/~/conv+root/b+1"]["text_t"] == "\nedited"


def test_api_key_required(settings: Settings, runtime: SearchRuntime) -> None:
    settings.key = "secret"
    app = create_app(settings, runtime=runtime)
    with TestClient(app) as test_client:
        assert test_client.get("/api/v1/health/live").status_code == 200
        assert test_client.get("/api/v1/search", params={"user": "a"}).status_code == 401
        response = test_client.get(
            "/api/v1/search", params={"user": "a"}, headers={"X-API-Key": "secret"}
        )
        assert response.status_code == 200
