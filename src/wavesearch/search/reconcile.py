"""Resolves search candidates against the wave store."""

import structlog

from wavesearch.model.ids import WaveletName
from wavesearch.model.wavelet import WaveViewData
from wavesearch.search.provider import CandidateSet
from wavesearch.store.base import WaveletContainer, WaveStore, WaveStoreError

logger = structlog.get_logger()


class ViewReconciler:
    """Builds one wave view per candidate wave from live store snapshots."""

    def __init__(self, store: WaveStore) -> None:
        self._store = store

    def _lookup(self, name: WaveletName) -> WaveletContainer | None:
        container = self._store.get_remote_wavelet(name)
        if container is not None:
            return container
        return self._store.get_local_wavelet(name)

    def reconcile(self, candidates: CandidateSet) -> list[WaveViewData]:
        """Merge candidate wavelets into per-wave views.

        An unreadable wavelet is logged and skipped on its own; waves left
        without any readable wavelet are dropped. Output follows the
        candidates' discovery order.

        Args:
            candidates: Candidates collected from the backend.

        Returns:
            Wave views in discovery order.
        """
        views: list[WaveViewData] = []
        for wave_id, wavelet_ids in candidates.items():
            view: WaveViewData | None = None
            for wavelet_id in wavelet_ids:
                name = WaveletName.of(wave_id, wavelet_id)
                try:
                    container = self._lookup(name)
                    if container is None:
                        logger.debug("search_wavelet_missing", wavelet=str(name))
                        continue
                    snapshot = container.copy_wavelet_data()
                except WaveStoreError as e:
                    logger.warning(
                        "search_wavelet_lookup_failed", wavelet=str(name), error=str(e)
                    )
                    continue
                if view is None:
                    view = WaveViewData(wave_id=wave_id)
                view.add_wavelet(snapshot)
            if view is not None:
                views.append(view)
        return views
