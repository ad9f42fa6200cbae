"""Keeps the search index in step with wave store mutations."""

from concurrent.futures import Future

import structlog

from wavesearch.model.ids import WaveletName
from wavesearch.model.wavelet import WaveletData
from wavesearch.search.client import SolrClient
from wavesearch.search.errors import IndexBuildError, SearchBackendError
from wavesearch.search.scheduler import IndexUpdateScheduler
from wavesearch.search.schemas import IndexRecord, record_id
from wavesearch.search.text import extract_text
from wavesearch.store.base import WaveStore, WaveStoreError

logger = structlog.get_logger()

# Non-blip documents that never reach the index.
RESERVED_DOCUMENTS: frozenset[str] = frozenset({"conversation", "m/read"})


def build_records(wavelet: WaveletData) -> list[IndexRecord]:
    """Build one index record per indexable blip of a wavelet.

    Reserved documents and blips without extracted text are skipped.

    Args:
        wavelet: Wavelet snapshot to index.

    Returns:
        Records in document order.
    """
    records: list[IndexRecord] = []
    for doc_name in wavelet.document_ids():
        if doc_name in RESERVED_DOCUMENTS:
            continue
        blip = wavelet.get_document(doc_name)
        if blip is None:
            continue
        text = extract_text(blip)
        if not text:
            continue
        records.append(
            IndexRecord(
                record_id=record_id(wavelet.wave_id, doc_name),
                wave_id=wavelet.wave_id,
                wavelet_id=wavelet.wavelet_id,
                doc_name=doc_name,
                last_modified_time=wavelet.last_modified_time,
                creator=wavelet.creator,
                participants=list(wavelet.participants),
                text=text,
            )
        )
    return records


class WaveIndexer:
    """Decides when wavelets are (re)indexed and schedules the writes.

    Every trigger only submits work to the scheduler; store reads and
    backend writes happen on the worker thread, never on the caller's.
    """

    def __init__(
        self,
        store: WaveStore,
        client: SolrClient,
        scheduler: IndexUpdateScheduler,
    ) -> None:
        self._store = store
        self._client = client
        self._scheduler = scheduler

    def on_wave_init(self, name: WaveletName) -> "Future[int]":
        """Index a newly created wavelet unconditionally."""
        return self._scheduler.submit(self._index_wavelet, name, entity=str(name))

    def on_wavelet_committed(self, name: WaveletName, version: int) -> "Future[int]":
        """Reindex a wavelet if the store still holds the committed version.

        The version is compared on the worker, against the snapshot read
        there, so a commit overtaken by a later one is dropped.
        """
        return self._scheduler.submit(
            self._index_committed, name, version, entity=str(name)
        )

    def on_wavelet_update(self, name: WaveletName, delta_count: int | None = None) -> None:
        """Ignored: the next commit reindexes the wavelet."""

    def on_participant_added(self, name: WaveletName, participant: str) -> None:
        """Ignored: the next commit reindexes the wavelet."""

    def on_participant_removed(self, name: WaveletName, participant: str) -> None:
        """Ignored: the next commit reindexes the wavelet."""

    def reindex_wave(self, wave_id: str) -> "Future[int]":
        """Index every wavelet of a wave as a single batch."""
        return self._scheduler.submit(self._index_wave, wave_id, entity=wave_id)

    def _index_wavelet(self, name: WaveletName) -> int:
        try:
            wavelet = self._store.get_wavelet(name)
            return self._send(build_records(wavelet), str(name))
        except (WaveStoreError, SearchBackendError) as e:
            raise IndexBuildError(str(name), e) from e

    def _index_committed(self, name: WaveletName, version: int) -> int:
        try:
            wavelet = self._store.get_wavelet(name)
            if wavelet.version != version:
                logger.debug(
                    "index_commit_stale",
                    wavelet=str(name),
                    committed_version=version,
                    current_version=wavelet.version,
                )
                return 0
            return self._send(build_records(wavelet), str(name))
        except (WaveStoreError, SearchBackendError) as e:
            raise IndexBuildError(str(name), e) from e

    def _index_wave(self, wave_id: str) -> int:
        try:
            records: list[IndexRecord] = []
            for wavelet_id in self._store.wavelet_ids(wave_id):
                wavelet = self._store.get_wavelet(WaveletName.of(wave_id, wavelet_id))
                records.extend(build_records(wavelet))
            return self._send(records, wave_id)
        except (WaveStoreError, SearchBackendError) as e:
            raise IndexBuildError(wave_id, e) from e

    def _send(self, records: list[IndexRecord], entity: str) -> int:
        if not records:
            logger.debug("index_batch_empty", entity=entity)
            return 0
        self._client.update(records, entity=entity)
        logger.info("index_batch_sent", entity=entity, documents=len(records))
        return len(records)
