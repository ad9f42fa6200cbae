"""Thread-safe in-memory wave store.

Used as the default store of the service and in tests. Mutations are
reported to an optional listener as domain events, mirroring the
notifications a persistent wave server emits.
"""

import threading
from collections.abc import Callable

import structlog

from wavesearch.events.types import DomainEvent, EventType, wave_event
from wavesearch.model.ids import WaveletName
from wavesearch.model.wavelet import WaveletData
from wavesearch.store.base import (
    WaveletNotFoundError,
    WaveletStateError,
    WaveStoreError,
)

logger = structlog.get_logger()

EventListener = Callable[[DomainEvent], None]


class InMemoryWaveletContainer:
    """Holds the latest snapshot of one wavelet."""

    def __init__(self, data: WaveletData, remote: bool = False) -> None:
        self._data = data
        self._lock = threading.Lock()
        self.remote = remote
        self.corrupted = False

    @property
    def name(self) -> WaveletName:
        return self._data.name

    @property
    def version(self) -> int:
        return self._data.version

    def replace(self, data: WaveletData) -> None:
        with self._lock:
            self._data = data

    def copy_wavelet_data(self) -> WaveletData:
        with self._lock:
            if self.corrupted:
                raise WaveletStateError(f"wavelet {self.name} is corrupted")
            return self._data.model_copy(deep=True)


class InMemoryWaveStore:
    """Wave store keeping every wavelet in process memory."""

    def __init__(self, listener: EventListener | None = None) -> None:
        """Initialize store.

        Args:
            listener: Called with a DomainEvent after each mutation.
        """
        self._waves: dict[str, dict[str, InMemoryWaveletContainer]] = {}
        self._lock = threading.RLock()
        self.listener = listener

    def _emit(self, event: DomainEvent) -> None:
        if self.listener is not None:
            self.listener(event)

    def _container(self, name: WaveletName) -> InMemoryWaveletContainer | None:
        with self._lock:
            return self._waves.get(name.wave_id, {}).get(name.wavelet_id)

    def create_wavelet(self, data: WaveletData, remote: bool = False) -> None:
        """Store a new wavelet and announce it with a wave.init event.

        Raises:
            WaveStoreError: If the wavelet already exists.
        """
        with self._lock:
            wavelets = self._waves.setdefault(data.wave_id, {})
            if data.wavelet_id in wavelets:
                raise WaveStoreError(f"wavelet already exists: {data.name}")
            wavelets[data.wavelet_id] = InMemoryWaveletContainer(
                data.model_copy(deep=True), remote=remote
            )
        logger.debug("wavelet_created", wavelet=str(data.name), remote=remote)
        self._emit(wave_event(EventType.WAVE_INIT, data.name, version=data.version))

    def update_wavelet(self, data: WaveletData, delta_count: int = 1) -> None:
        """Replace a wavelet snapshot with a newer version.

        Raises:
            WaveletNotFoundError: If the wavelet does not exist.
            WaveStoreError: If the new version does not advance.
        """
        container = self._container(data.name)
        if container is None:
            raise WaveletNotFoundError(data.name)
        with self._lock:
            if data.version <= container.version:
                raise WaveStoreError(
                    f"version {data.version} does not advance {data.name} "
                    f"past {container.version}"
                )
            container.replace(data.model_copy(deep=True))
        self._emit(
            wave_event(
                EventType.WAVELET_UPDATE,
                data.name,
                version=data.version,
                delta_count=delta_count,
            )
        )

    def commit(self, name: WaveletName) -> int:
        """Mark the wavelet's current version durable and announce it.

        Returns:
            The committed version.

        Raises:
            WaveletNotFoundError: If the wavelet does not exist.
        """
        container = self._container(name)
        if container is None:
            raise WaveletNotFoundError(name)
        version = container.version
        self._emit(wave_event(EventType.WAVELET_COMMITTED, name, version=version))
        return version

    def mark_corrupted(self, name: WaveletName) -> None:
        """Make subsequent reads of a wavelet fail."""
        container = self._container(name)
        if container is None:
            raise WaveletNotFoundError(name)
        container.corrupted = True

    def get_wavelet(self, name: WaveletName) -> WaveletData:
        container = self._container(name)
        if container is None:
            raise WaveletNotFoundError(name)
        return container.copy_wavelet_data()

    def get_remote_wavelet(self, name: WaveletName) -> InMemoryWaveletContainer | None:
        container = self._container(name)
        if container is None or not container.remote:
            return None
        return container

    def get_local_wavelet(self, name: WaveletName) -> InMemoryWaveletContainer | None:
        container = self._container(name)
        if container is None or container.remote:
            return None
        return container

    def wave_ids(self) -> list[str]:
        with self._lock:
            return list(self._waves)

    def wavelet_ids(self, wave_id: str) -> list[str]:
        with self._lock:
            return list(self._waves.get(wave_id, {}))
