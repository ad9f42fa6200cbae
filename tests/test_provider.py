"""Search candidate pagination tests."""

import pytest

from conftest import FakeSolr
from wavesearch.search.client import SolrClient
from wavesearch.search.errors import SearchBackendError
from wavesearch.search.provider import CandidateSet, SearchQueryExecutor, _field

USER = "alice@example.com"


@pytest.fixture
def executor(solr_client: SolrClient) -> SearchQueryExecutor:
    return SearchQueryExecutor(solr_client, "@example.com", min_page_size=10)


def test_stops_once_enough_waves_found(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    for i in range(10):
        fake_solr.add_hit(f"w{i}", "conv+root")

    candidates = executor.execute(USER, "", 0, 5)

    assert candidates.wave_ids() == ["w0", "w1", "w2", "w3", "w4"]
    (request,) = fake_solr.selects()
    assert request.url.params["rows"] == "10"
    assert request.url.params["start"] == "0"


def test_short_page_ends_scan(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    for i in range(3):
        fake_solr.add_hit(f"w{i}", "conv+root")

    candidates = executor.execute(USER, "hello", 0, 5)

    assert len(candidates) == 3
    assert len(fake_solr.selects()) == 1


def test_pages_until_empty(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    for i in range(20):
        fake_solr.add_hit(f"w{i % 2}", f"conv+{i}", f"b{i}")

    candidates = executor.execute(USER, "", 0, 3)

    assert candidates.wave_ids() == ["w0", "w1"]
    assert candidates.wavelet_count == 20
    assert [r.url.params["start"] for r in fake_solr.selects()] == ["0", "10", "20"]


def test_page_size_follows_large_limits(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    fake_solr.add_hit("w0", "conv+root")
    executor.execute(USER, "", 7, 25)
    (request,) = fake_solr.selects()
    assert request.url.params["rows"] == "25"
    assert request.url.params["start"] == "7"


def test_wavelets_grouped_in_discovery_order(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    fake_solr.add_hit("w1", "conv+a", "b1")
    fake_solr.add_hit("w2", "conv+a", "b2")
    fake_solr.add_hit("w1", "conv+b", "b3")
    fake_solr.add_hit("w1", "conv+a", "b4")

    candidates = executor.execute(USER, "", 0, 10)

    assert list(candidates.items()) == [("w1", ["conv+a", "conv+b"]), ("w2", ["conv+a"])]


def test_filter_query_scopes_user(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    executor.execute(USER, "with:bob hello", 0, 5)
    fq = fake_solr.selects()[0].url.params["fq"]
    assert fq.endswith("(alice@example.com OR @example.com) AND (with_txt:bob hello)")


def test_backend_error_aborts(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    fake_solr.fail_select = True
    with pytest.raises(SearchBackendError):
        executor.execute(USER, "", 0, 5)


def test_transport_error_aborts(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    fake_solr.raise_on_select = True
    with pytest.raises(SearchBackendError):
        executor.execute(USER, "", 0, 5)


def test_no_results_requested(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    assert len(executor.execute(USER, "", 0, 0)) == 0
    assert fake_solr.requests == []


def test_incomplete_hits_skipped(executor: SearchQueryExecutor, fake_solr: FakeSolr) -> None:
    fake_solr.documents["broken"] = {"id": "broken", "waveId_s": "w9"}
    fake_solr.add_hit("w1", "conv+root")
    assert executor.execute(USER, "", 0, 5).wave_ids() == ["w1"]


def test_candidate_set_first_write_wins() -> None:
    candidates = CandidateSet()
    assert candidates.add("w1", "a")
    assert candidates.add("w1", "b")
    assert not candidates.add("w1", "a")
    assert candidates.wavelet_ids("w1") == ["a", "b"]
    assert "w1" in candidates
    assert len(candidates) == 1


def test_non_object_hits_ignored() -> None:
    assert _field("oops", "waveId_s") is None
    assert _field(["w1"], "waveId_s") is None
    assert _field({"waveId_s": ["w1"]}, "waveId_s") == "w1"
