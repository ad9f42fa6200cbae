"""Search facade combining candidate collection and reconciliation."""

import structlog

from wavesearch.search.digest import digest
from wavesearch.search.errors import SearchBackendError
from wavesearch.search.provider import SearchQueryExecutor
from wavesearch.search.reconcile import ViewReconciler
from wavesearch.search.schemas import SearchResponse

logger = structlog.get_logger()


class SearchService:
    """Answers user searches; backend failures yield an empty response."""

    def __init__(self, executor: SearchQueryExecutor, reconciler: ViewReconciler) -> None:
        self._executor = executor
        self._reconciler = reconciler

    def search(self, user: str, query: str, offset: int = 0, limit: int = 20) -> SearchResponse:
        """Run a search for a participant.

        Args:
            user: Address of the searching participant.
            query: Raw user query.
            offset: Backend offset to start from.
            limit: Maximum number of waves to return.

        Returns:
            Digested results, or an empty response flagged as failed if the
            backend could not be queried.
        """
        try:
            candidates = self._executor.execute(user, query, offset, limit)
        except SearchBackendError as e:
            logger.warning(
                "search_backend_failed",
                user=user,
                query=query,
                error=str(e),
                status=e.status_code,
            )
            return SearchResponse(query=query, limit=limit, offset=offset, failed=True)

        views = self._reconciler.reconcile(candidates)
        results = [digest(view) for view in views]
        logger.info("search_completed", user=user, query=query, results=len(results))
        return SearchResponse(
            query=query,
            results=results,
            total=len(results),
            limit=limit,
            offset=offset,
        )
