"""Primary wave store boundary and in-memory implementation."""

from wavesearch.store.base import (
    WaveletContainer,
    WaveletNotFoundError,
    WaveletStateError,
    WaveStore,
    WaveStoreError,
)
from wavesearch.store.memory import InMemoryWaveStore

__all__ = [
    "InMemoryWaveStore",
    "WaveStore",
    "WaveStoreError",
    "WaveletContainer",
    "WaveletNotFoundError",
    "WaveletStateError",
]
