"""Thread-safe bridge from synchronous store callbacks onto the event bus."""
import asyncio
from concurrent.futures import Future

import structlog

from wavesearch.events.bus import EventBus
from wavesearch.events.types import DomainEvent

logger = structlog.get_logger()


class EventPublisher:
    """Publishes store events onto an async bus from any thread.

    Never blocks the caller: the store may invoke it while holding its own
    locks, so delivery is scheduled on the loop and not awaited.
    """

    def __init__(self, event_bus: EventBus, loop: asyncio.AbstractEventLoop) -> None:
        """Initialize publisher.

        Args:
            event_bus: Bus to publish onto.
            loop: Event loop that owns the bus.
        """
        self._bus = event_bus
        self._loop = loop

    def __call__(self, event: DomainEvent) -> None:
        if self._loop.is_closed():
            logger.warning("event_publish_skipped", event_type=event.type.value)
            return
        future = asyncio.run_coroutine_threadsafe(self._bus.publish(event), self._loop)
        future.add_done_callback(lambda f: self._on_published(event, f))

    @staticmethod
    def _on_published(event: DomainEvent, future: "Future[int]") -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(
                "event_publish_failed",
                event_type=event.type.value,
                wave_id=event.wave_id,
                error=str(error),
            )
            return
        logger.debug(
            "event_published",
            event_type=event.type.value,
            wave_id=event.wave_id,
            wavelet_id=event.wavelet_id,
            delivered_to=future.result(),
        )
