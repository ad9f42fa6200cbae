"""In-memory bus fanning wave store events out to subscribers."""
import asyncio
import uuid
from collections.abc import AsyncIterator

import structlog

from wavesearch.events.types import DomainEvent

logger = structlog.get_logger()


class _Subscription:
    def __init__(self, queue: "asyncio.Queue[DomainEvent]", wave_id: str | None = None) -> None:
        self.queue = queue
        self.wave_id = wave_id

    def wants(self, event: DomainEvent) -> bool:
        return self.wave_id is None or self.wave_id == event.wave_id


class EventBus:
    """Async fan-out of wave events with per-subscriber backpressure.

    Each subscriber gets a bounded queue and may restrict itself to one
    wave. A full queue drops its oldest event, so a slow subscriber never
    stalls the store that publishes.
    """

    def __init__(self, queue_size: int = 1000, max_subscribers: int = 100) -> None:
        """Initialize event bus.

        Args:
            queue_size: Maximum items per subscriber queue.
            max_subscribers: Maximum concurrent subscribers allowed.
        """
        self._subscriptions: dict[str, _Subscription] = {}
        self._queue_size = queue_size
        self._max_subscribers = max_subscribers
        self._dropped_count = 0
        self._lock = asyncio.Lock()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @property
    def dropped_events(self) -> int:
        """Total number of events dropped due to queue overflow."""
        return self._dropped_count

    async def publish(self, event: DomainEvent) -> int:
        """Deliver an event to every subscriber interested in its wave.

        Returns:
            Number of subscribers that received the event.
        """
        delivered = 0
        for subscriber_id, subscription in list(self._subscriptions.items()):
            if not subscription.wants(event):
                continue
            queue = subscription.queue
            if queue.full():
                queue.get_nowait()
                self._dropped_count += 1
                logger.warning(
                    "event_dropped",
                    subscriber_id=subscriber_id,
                    wave_id=event.wave_id,
                )
            queue.put_nowait(event)
            delivered += 1
        return delivered

    async def subscribe(
        self,
        wave_id: str | None = None,
    ) -> tuple[str, AsyncIterator[DomainEvent]]:
        """Subscribe to wave events.

        Args:
            wave_id: Only receive events for this wave; all waves if None.

        Returns:
            Tuple of (subscriber_id, event_iterator). Closing the iterator
            removes the subscription.

        Raises:
            ValueError: If maximum subscribers reached.
        """
        async with self._lock:
            if self.subscriber_count >= self._max_subscribers:
                raise ValueError("Maximum subscribers reached")
            subscriber_id = str(uuid.uuid4())
            subscription = _Subscription(
                queue=asyncio.Queue(maxsize=self._queue_size), wave_id=wave_id
            )
            self._subscriptions[subscriber_id] = subscription

        async def event_iterator() -> AsyncIterator[DomainEvent]:
            try:
                while True:
                    yield await subscription.queue.get()
            finally:
                await self.unsubscribe(subscriber_id)

        return subscriber_id, event_iterator()

    async def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a subscriber from the bus."""
        async with self._lock:
            if self._subscriptions.pop(subscriber_id, None) is not None:
                logger.debug("subscriber_removed", subscriber_id=subscriber_id)
