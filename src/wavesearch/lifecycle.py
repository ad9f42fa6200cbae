"""Ownership and lifecycle of the indexing and search components."""
import asyncio
import contextlib

import structlog

from wavesearch.config import Settings
from wavesearch.events.bus import EventBus
from wavesearch.events.publisher import EventPublisher
from wavesearch.search.client import SolrClient
from wavesearch.search.indexer import WaveIndexer
from wavesearch.search.provider import SearchQueryExecutor
from wavesearch.search.rebuild import IndexRebuildCoordinator
from wavesearch.search.reconcile import ViewReconciler
from wavesearch.search.scheduler import IndexUpdateScheduler
from wavesearch.search.service import SearchService
from wavesearch.search.subscriber import run_index_subscriber
from wavesearch.store.base import WaveStore
from wavesearch.store.memory import InMemoryWaveStore

logger = structlog.get_logger()


class SearchRuntime:
    """Wires the store, backend client, scheduler and search pipeline.

    start() launches the index worker and the event subscriber; stop()
    cancels the subscriber and drains the worker before closing the client.

    Attributes:
        store: Primary wave store.
        client: Solr client shared by reads and writes.
        scheduler: Worker owning every index mutation.
        indexer: Index update triggers.
        rebuilder: Full rebuild coordinator.
        search: Search facade.
        event_bus: Bus carrying store events.
    """

    def __init__(
        self,
        settings: Settings,
        store: WaveStore | None = None,
        client: SolrClient | None = None,
    ) -> None:
        """Initialize runtime.

        Args:
            settings: Service configuration.
            store: Wave store; an in-memory store is created if None.
            client: Solr client; built from settings if None.
        """
        self.settings = settings
        self.store: WaveStore = store if store is not None else InMemoryWaveStore()
        self.client = client or SolrClient(
            settings.solr_base_url, timeout=settings.solr_timeout
        )
        self.scheduler = IndexUpdateScheduler()
        self.indexer = WaveIndexer(self.store, self.client, self.scheduler)
        self.rebuilder = IndexRebuildCoordinator(
            self.store, self.client, self.scheduler, self.indexer
        )
        self.search = SearchService(
            SearchQueryExecutor(
                self.client,
                settings.shared_participant,
                min_page_size=settings.min_page_size,
            ),
            ViewReconciler(self.store),
        )
        self.event_bus = EventBus(
            queue_size=settings.event_queue_size,
            max_subscribers=settings.event_max_subscribers,
        )
        self._subscriber: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the index worker and subscribe the indexer to store events."""
        self.scheduler.start()
        if isinstance(self.store, InMemoryWaveStore):
            self.store.listener = EventPublisher(
                self.event_bus, asyncio.get_running_loop()
            )
        self._subscriber = asyncio.create_task(
            run_index_subscriber(self.event_bus, self.indexer)
        )
        if self.settings.rebuild_on_startup:
            report = await asyncio.to_thread(self.rebuilder.rebuild)
            logger.info("startup_rebuild_done", **report.model_dump())

    async def stop(self) -> None:
        """Stop the subscriber, drain queued index tasks and close the client."""
        if self._subscriber is not None:
            self._subscriber.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._subscriber
            self._subscriber = None

        if isinstance(self.store, InMemoryWaveStore):
            self.store.listener = None

        # Writes still queued after the timeout are cancelled, never sent on a closed client.
        await asyncio.to_thread(self.scheduler.drain, self.settings.shutdown_timeout)
        self.client.close()
        logger.info("search_runtime_stopped", dropped_events=self.event_bus.dropped_events)
