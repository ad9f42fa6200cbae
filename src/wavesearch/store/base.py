"""Primary wave store boundary consumed by the indexer and search."""

from collections.abc import Iterable
from typing import Protocol

from wavesearch.model.ids import WaveletName
from wavesearch.model.wavelet import WaveletData


class WaveStoreError(Exception):
    """Base error raised by the primary wave store."""


class WaveletNotFoundError(WaveStoreError):
    """Raised when a wavelet is not known to the store."""

    def __init__(self, name: WaveletName) -> None:
        super().__init__(f"wavelet not found: {name}")
        self.name = name


class WaveletStateError(WaveStoreError):
    """Raised when a wavelet exists but cannot be read in its current state."""


class WaveletContainer(Protocol):
    """Live handle on a stored wavelet."""

    @property
    def name(self) -> WaveletName: ...

    def copy_wavelet_data(self) -> WaveletData:
        """Snapshot the wavelet's current state.

        Raises:
            WaveletStateError: If the wavelet cannot be read.
        """
        ...


class WaveStore(Protocol):
    """Point lookups and enumeration over the system of record."""

    def get_wavelet(self, name: WaveletName) -> WaveletData:
        """Return the current readable snapshot of a wavelet.

        Raises:
            WaveletNotFoundError: If the wavelet does not exist.
            WaveStoreError: If the wavelet cannot be read.
        """
        ...

    def get_remote_wavelet(self, name: WaveletName) -> WaveletContainer | None:
        """Look up a wavelet hosted by another domain.

        Returns None when the wavelet is not a remote one.

        Raises:
            WaveletStateError: If the wavelet is known but unreadable.
        """
        ...

    def get_local_wavelet(self, name: WaveletName) -> WaveletContainer | None:
        """Look up a wavelet hosted locally.

        Returns None when the wavelet is not a local one.

        Raises:
            WaveletStateError: If the wavelet is known but unreadable.
        """
        ...

    def wave_ids(self) -> Iterable[str]:
        """Every wave id known to the store."""
        ...

    def wavelet_ids(self, wave_id: str) -> Iterable[str]:
        """Wavelet ids of a wave."""
        ...
