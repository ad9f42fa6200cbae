"""Single-worker queue owning every index mutation."""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class IndexUpdateScheduler:
    """Runs index tasks one at a time, in submission order.

    Submitting never blocks and is safe while holding store locks: the work
    runs later on the dedicated worker thread. Failures are logged here even
    when nobody waits on the returned future.
    """

    def __init__(self, name: str = "index-update") -> None:
        self._name = name
        self._executor: ThreadPoolExecutor | None = None
        self._pending: set[Future[Any]] = set()
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._executor is not None

    def start(self) -> None:
        """Start the worker. Idempotent."""
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix=self._name
                )
                logger.info("index_scheduler_started", name=self._name)

    def submit(
        self,
        fn: Callable[..., T],
        *args: Any,
        entity: str | None = None,
    ) -> "Future[T]":
        """Queue a task for the worker.

        Args:
            fn: Callable to run on the worker thread.
            *args: Positional arguments for fn.
            entity: Identity the task concerns, used in failure logs.

        Returns:
            Future completing with fn's result or exception.

        Raises:
            RuntimeError: If the scheduler is not running.
        """
        with self._lock:
            if self._executor is None:
                raise RuntimeError("index scheduler is not running")
            future = self._executor.submit(fn, *args)
            self._pending.add(future)
        future.add_done_callback(lambda f: self._on_done(f, fn, entity))
        return future

    def _on_done(self, future: Future, fn: Callable[..., Any], entity: str | None) -> None:
        with self._lock:
            self._pending.discard(future)
        if future.cancelled():
            logger.info("index_task_cancelled", task=fn.__name__, entity=entity)
            return
        error = future.exception()
        if error is not None:
            logger.error(
                "index_task_failed",
                task=fn.__name__,
                entity=entity,
                error=str(error),
                exc_info=error,
            )

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop the worker after draining queued tasks.

        Args:
            wait: Block until queued tasks finish.
            cancel_pending: Drop tasks that have not started yet.
        """
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait, cancel_futures=cancel_pending)
            logger.info("index_scheduler_stopped", name=self._name)

    def drain(self, timeout: float) -> bool:
        """Stop accepting tasks and wait for queued ones to finish.

        Tasks still queued when the timeout expires are cancelled and
        reported as dropped. A task already running cannot be interrupted.

        Args:
            timeout: Seconds to wait for the queue to empty.

        Returns:
            True if every queued task finished within the timeout.
        """
        with self._lock:
            executor, self._executor = self._executor, None
            pending = list(self._pending)
        if executor is None:
            return True

        executor.shutdown(wait=False)
        _, not_done = wait(pending, timeout=timeout)
        if not_done:
            executor.shutdown(wait=False, cancel_futures=True)
            logger.warning(
                "index_tasks_dropped",
                name=self._name,
                count=len(not_done),
                timeout_seconds=timeout,
            )
            return False
        logger.info("index_scheduler_stopped", name=self._name)
        return True
