"""Wave search: index synchronization and query reconciliation."""

from wavesearch.search.client import SolrClient
from wavesearch.search.errors import (
    IndexBuildError,
    RebuildInProgressError,
    SearchBackendError,
)
from wavesearch.search.indexer import WaveIndexer, build_records
from wavesearch.search.provider import CandidateSet, SearchQueryExecutor
from wavesearch.search.rebuild import IndexRebuildCoordinator
from wavesearch.search.reconcile import ViewReconciler
from wavesearch.search.scheduler import IndexUpdateScheduler
from wavesearch.search.schemas import (
    IndexRecord,
    RebuildReport,
    SearchResponse,
    SearchResult,
)
from wavesearch.search.service import SearchService
from wavesearch.search.subscriber import dispatch_event, run_index_subscriber
from wavesearch.search.text import extract_text

__all__ = [
    "CandidateSet",
    "IndexBuildError",
    "IndexRebuildCoordinator",
    "IndexRecord",
    "IndexUpdateScheduler",
    "RebuildInProgressError",
    "RebuildReport",
    "SearchBackendError",
    "SearchQueryExecutor",
    "SearchResponse",
    "SearchResult",
    "SearchService",
    "SolrClient",
    "ViewReconciler",
    "WaveIndexer",
    "build_records",
    "dispatch_event",
    "extract_text",
    "run_index_subscriber",
]
