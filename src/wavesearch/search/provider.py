"""Paginated candidate collection from the search backend."""

from collections.abc import Iterator
from typing import Any

import structlog

from wavesearch.search.client import SolrClient
from wavesearch.search.query import build_filter_query
from wavesearch.search.schemas import WAVE_ID, WAVELET_ID

logger = structlog.get_logger()

# Floor on the backend page size; small searches still fetch a full page.
MIN_PAGE_SIZE = 10


class CandidateSet:
    """Waves and their matching wavelets in discovery order.

    A wavelet reported twice keeps its first position.
    """

    def __init__(self) -> None:
        self._waves: dict[str, dict[str, None]] = {}

    def add(self, wave_id: str, wavelet_id: str) -> bool:
        """Record a hit. Returns True if the wavelet was not seen before."""
        wavelets = self._waves.setdefault(wave_id, {})
        if wavelet_id in wavelets:
            return False
        wavelets[wavelet_id] = None
        return True

    def wave_ids(self) -> list[str]:
        return list(self._waves)

    def wavelet_ids(self, wave_id: str) -> list[str]:
        return list(self._waves.get(wave_id, {}))

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for wave_id, wavelets in self._waves.items():
            yield wave_id, list(wavelets)

    @property
    def wavelet_count(self) -> int:
        return sum(len(wavelets) for wavelets in self._waves.values())

    def __len__(self) -> int:
        return len(self._waves)

    def __contains__(self, wave_id: object) -> bool:
        return wave_id in self._waves


def _field(doc: Any, name: str) -> str | None:
    if not isinstance(doc, dict):
        return None
    value = doc.get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, str) and value else None


class SearchQueryExecutor:
    """Pages through backend hits until enough distinct waves are found."""

    def __init__(
        self,
        client: SolrClient,
        shared_participant: str,
        min_page_size: int = MIN_PAGE_SIZE,
    ) -> None:
        """Initialize executor.

        Args:
            client: Backend client.
            shared_participant: Domain broadcast participant address.
            min_page_size: Smallest page requested from the backend.
        """
        self._client = client
        self._shared_participant = shared_participant
        self._min_page_size = min_page_size

    def execute(self, user: str, query: str, start_at: int, num_results: int) -> CandidateSet:
        """Collect candidate wavelets for a user's query.

        Scanning stops once num_results distinct waves are found, or when
        the backend returns a short or empty page.

        Args:
            user: Address of the searching participant.
            query: Raw user query.
            start_at: Backend offset to start from.
            num_results: Number of distinct waves wanted.

        Returns:
            Candidates in the order the backend reported them.

        Raises:
            SearchBackendError: If any page request fails. No partial set
                is returned.
        """
        candidates = CandidateSet()
        if num_results <= 0:
            return candidates

        fq = build_filter_query(user, query, self._shared_participant)
        rows = max(num_results, self._min_page_size)
        start = start_at
        pages = 0

        while True:
            docs = self._client.select(start=start, rows=rows, fq=fq)
            pages += 1
            if not docs:
                break

            for doc in docs:
                wave_id = _field(doc, WAVE_ID)
                wavelet_id = _field(doc, WAVELET_ID)
                if wave_id is None or wavelet_id is None:
                    logger.warning(
                        "search_hit_incomplete",
                        doc_id=doc.get("id") if isinstance(doc, dict) else None,
                    )
                    continue
                candidates.add(wave_id, wavelet_id)
                if len(candidates) >= num_results:
                    break

            if len(candidates) >= num_results or len(docs) < rows:
                break
            start += rows

        logger.debug(
            "search_candidates_collected",
            user=user,
            query=query,
            waves=len(candidates),
            wavelets=candidates.wavelet_count,
            pages=pages,
        )
        return candidates
