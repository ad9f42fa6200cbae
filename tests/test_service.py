"""Search facade tests."""

import httpx
import pytest

from conftest import FakeSolr, blip, wavelet
from wavesearch.search.client import SolrClient
from wavesearch.search.provider import SearchQueryExecutor
from wavesearch.search.reconcile import ViewReconciler
from wavesearch.search.service import SearchService
from wavesearch.store.memory import InMemoryWaveStore


@pytest.fixture
def service(store: InMemoryWaveStore, solr_client: SolrClient) -> SearchService:
    return SearchService(
        SearchQueryExecutor(solr_client, "@example.com"),
        ViewReconciler(store),
    )


def test_results_digested(service: SearchService, store: InMemoryWaveStore, fake_solr: FakeSolr) -> None:
    store.create_wavelet(
        wavelet(
            "w1",
            "conv+root",
            documents={
                "conversation": blip("manifest"),
                "b+1": blip("Weekly sync", "agenda   items here"),
                "b+2": blip("reply"),
            },
        )
    )
    fake_solr.add_hit("w1", "conv+root")
    fake_solr.add_hit("gone", "conv+root")

    response = service.search("alice@example.com", "sync", limit=5)

    assert not response.failed
    assert response.total == 1
    (result,) = response.results
    assert result.wave_id == "w1"
    assert result.title == "Weekly sync"
    assert result.snippet == "agenda items here"
    assert result.blip_count == 2
    assert result.wavelet_ids == ["conv+root"]
    assert result.participants == ["alice@example.com", "bob@example.com"]


def test_backend_failure_returns_empty(service: SearchService, fake_solr: FakeSolr) -> None:
    fake_solr.fail_select = True
    response = service.search("alice@example.com", "hello", offset=3, limit=5)
    assert response.failed
    assert response.results == []
    assert response.total == 0
    assert response.offset == 3
    assert response.query == "hello"


@pytest.mark.parametrize("body", [["oops"], {"response": {"docs": ["oops"]}}])
def test_malformed_backend_body_returns_failed(store: InMemoryWaveStore, body: object) -> None:
    client = SolrClient(
        "http://solr.test/solr",
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json=body)),
    )
    service = SearchService(
        SearchQueryExecutor(client, "@example.com"), ViewReconciler(store)
    )
    response = service.search("alice@example.com", "hello", limit=5)
    assert response.failed
    assert response.results == []
