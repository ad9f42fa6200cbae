"""Event bus subscriber for keeping the search index in sync."""

import asyncio

import structlog

from wavesearch.events.bus import EventBus
from wavesearch.events.types import DomainEvent, EventType
from wavesearch.search.indexer import WaveIndexer

logger = structlog.get_logger()


def dispatch_event(indexer: WaveIndexer, event: DomainEvent) -> None:
    """Route one store event to the matching indexer trigger.

    Args:
        indexer: Indexer receiving the trigger.
        event: Store mutation event.
    """
    name = event.wavelet_name
    if name is None:
        return

    if event.type is EventType.WAVE_INIT:
        indexer.on_wave_init(name)
    elif event.type is EventType.WAVELET_COMMITTED:
        if event.version is None:
            logger.warning("commit_event_without_version", wavelet=str(name))
            return
        indexer.on_wavelet_committed(name, event.version)
    elif event.type is EventType.WAVELET_UPDATE:
        indexer.on_wavelet_update(name, event.delta_count)
    elif event.type is EventType.PARTICIPANT_ADDED:
        indexer.on_participant_added(name, event.participant or "")
    elif event.type is EventType.PARTICIPANT_REMOVED:
        indexer.on_participant_removed(name, event.participant or "")


async def run_index_subscriber(event_bus: EventBus, indexer: WaveIndexer) -> None:
    """Subscribe to store events and schedule index updates.

    Runs as a long-lived asyncio task. Dispatching only submits work to the
    index scheduler, so it never blocks the loop.

    Args:
        event_bus: Application event bus instance.
        indexer: Indexer to notify.
    """
    subscriber_id, events = await event_bus.subscribe()
    logger.info("index_subscriber_started", subscriber_id=subscriber_id)

    try:
        async for event in events:
            try:
                dispatch_event(indexer, event)
            except RuntimeError as e:
                logger.error(
                    "index_dispatch_failed",
                    event_type=event.type.value,
                    wave_id=event.wave_id,
                    error=str(e),
                )
    except asyncio.CancelledError:
        logger.info("index_subscriber_stopped", subscriber_id=subscriber_id)
        raise
