"""Full index rebuild from the wave store."""

import threading
from concurrent.futures import Future, wait

import structlog

from wavesearch.model.ids import WaveletName
from wavesearch.search.client import SolrClient
from wavesearch.search.errors import RebuildInProgressError, SearchBackendError
from wavesearch.search.indexer import WaveIndexer
from wavesearch.search.scheduler import IndexUpdateScheduler
from wavesearch.search.schemas import RebuildReport
from wavesearch.store.base import WaveStore

logger = structlog.get_logger()


class IndexRebuildCoordinator:
    """Clears the index and reindexes every wavelet in the store.

    Only one rebuild runs at a time; a concurrent request is rejected.
    Must not be called from the scheduler's worker thread.
    """

    def __init__(
        self,
        store: WaveStore,
        client: SolrClient,
        scheduler: IndexUpdateScheduler,
        indexer: WaveIndexer,
    ) -> None:
        self._store = store
        self._client = client
        self._scheduler = scheduler
        self._indexer = indexer
        self._running = threading.Lock()

    @property
    def in_progress(self) -> bool:
        return self._running.locked()

    def rebuild(self) -> RebuildReport:
        """Delete the whole index, then reindex every known wavelet.

        A failed delete is logged and the reindex still runs.

        Returns:
            Report of the clear step and the per-wavelet outcomes.

        Raises:
            RebuildInProgressError: If another rebuild is running.
        """
        if not self._running.acquire(blocking=False):
            raise RebuildInProgressError()
        try:
            logger.info("index_rebuild_started")
            cleared = self._scheduler.submit(self._clear_index, entity="*").result()

            futures: list[Future[int]] = []
            for wave_id in self._store.wave_ids():
                for wavelet_id in self._store.wavelet_ids(wave_id):
                    futures.append(
                        self._indexer.on_wave_init(WaveletName.of(wave_id, wavelet_id))
                    )
            wait(futures)
            failed = sum(1 for f in futures if f.exception() is not None)

            report = RebuildReport(cleared=cleared, wavelets=len(futures), failed=failed)
            logger.info("index_rebuild_finished", **report.model_dump())
            return report
        finally:
            self._running.release()

    def _clear_index(self) -> bool:
        try:
            self._client.delete_all()
            self._client.commit()
        except SearchBackendError as e:
            logger.warning("index_clear_failed", error=str(e), status=e.status_code)
            return False
        return True
