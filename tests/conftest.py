"""Pytest configuration and fixtures."""

import json
import sys
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import httpx
import pytest
from fastapi.testclient import TestClient

from wavesearch.app import create_app
from wavesearch.config import Settings
from wavesearch.lifecycle import SearchRuntime
from wavesearch.model import BlipData, Characters, ElementEnd, ElementStart, WaveletData
from wavesearch.search.client import SolrClient
from wavesearch.search.scheduler import IndexUpdateScheduler
from wavesearch.store.memory import InMemoryWaveStore

SOLR_URL = "http://solr.test/solr"


class FakeSolr:
    """In-process stand-in for a Solr core, served through httpx.MockTransport.

    Select ignores the filter query and pages over every stored document in
    insertion order.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_update = False
        self.fail_delete = False
        self.fail_select = False
        self.raise_on_select = False
        self.delete_gate: threading.Event | None = None
        self.delete_entered = threading.Event()
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        path = request.url.path
        if path.endswith("/update/json"):
            if self.fail_update:
                return httpx.Response(500)
            with self._lock:
                for doc in json.loads(request.content):
                    self.documents[doc["id"]] = doc
            return httpx.Response(200, json={"responseHeader": {"status": 0}})
        if path.endswith("/update"):
            body = json.loads(request.content)
            if "delete" in body:
                self.delete_entered.set()
                if self.delete_gate is not None:
                    self.delete_gate.wait(timeout=5)
                if self.fail_delete:
                    return httpx.Response(503)
                with self._lock:
                    self.documents.clear()
            return httpx.Response(200, json={"responseHeader": {"status": 0}})
        if path.endswith("/select"):
            if self.raise_on_select:
                raise httpx.ConnectError("connection refused", request=request)
            if self.fail_select:
                return httpx.Response(500)
            start = int(request.url.params["start"])
            rows = int(request.url.params["rows"])
            with self._lock:
                docs = list(self.documents.values())[start : start + rows]
            return httpx.Response(
                200, json={"response": {"numFound": len(self.documents), "docs": docs}}
            )
        if path.endswith("/admin/ping"):
            return httpx.Response(200, json={"status": "OK"})
        return httpx.Response(404)

    def selects(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/select")]

    def updates(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/update/json")]

    def add_hit(self, wave_id: str, wavelet_id: str, doc_name: str = "b+1") -> None:
        doc_id = f"{wave_id}/~/conv+root/{doc_name}"
        self.documents[doc_id] = {
            "id": doc_id,
            "waveId_s": wave_id,
            "waveletId_s": wavelet_id,
            "docName_s": doc_name,
        }


def blip(*lines: str) -> BlipData:
    """Blip whose body holds one line element per given line."""
    content: list[Any] = [ElementStart(type="body")]
    for line in lines:
        content.append(ElementStart(type="line"))
        content.append(ElementEnd())
        if line:
            content.append(Characters(text=line))
    content.append(ElementEnd())
    return BlipData(author="alice@example.com", content=content)


def wavelet(
    wave_id: str = "example.com!w+1",
    wavelet_id: str = "example.com!conv+root",
    documents: dict[str, BlipData] | None = None,
    version: int = 1,
    participants: list[str] | None = None,
) -> WaveletData:
    return WaveletData(
        wave_id=wave_id,
        wavelet_id=wavelet_id,
        creator="alice@example.com",
        participants=participants or ["alice@example.com", "bob@example.com"],
        version=version,
        last_modified_time=1_700_000_000_000 + version,
        documents=documents if documents is not None else {"b+1": blip("hello")},
    )


@pytest.fixture
def fake_solr() -> FakeSolr:
    return FakeSolr()


@pytest.fixture
def solr_client(fake_solr: FakeSolr) -> Iterator[SolrClient]:
    client = SolrClient(SOLR_URL, transport=httpx.MockTransport(fake_solr.handler))
    yield client
    client.close()


@pytest.fixture
def store() -> InMemoryWaveStore:
    return InMemoryWaveStore()


@pytest.fixture
def scheduler() -> Iterator[IndexUpdateScheduler]:
    s = IndexUpdateScheduler()
    s.start()
    yield s
    s.shutdown(wait=True)


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=True,
        solr_base_url=SOLR_URL,
        wave_domain="example.com",
    )


@pytest.fixture
def runtime(
    settings: Settings, store: InMemoryWaveStore, solr_client: SolrClient
) -> SearchRuntime:
    return SearchRuntime(settings, store=store, client=solr_client)


@pytest.fixture
def client(settings: Settings, runtime: SearchRuntime) -> Iterator[TestClient]:
    """Create test client with the app lifespan running."""
    app = create_app(settings, runtime=runtime)
    with TestClient(app) as test_client:
        yield test_client
