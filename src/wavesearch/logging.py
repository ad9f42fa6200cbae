"""Structured logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.types import Processor

# Libraries whose stdlib loggers are routed through the root handler.
_ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "httpcore")


def configure_logging(debug: bool = False, json_output: bool = True) -> None:
    """Configure structlog and the stdlib root logger.

    Index workers and request handlers log from different threads, so the
    configuration is process-wide and set once at startup.

    Args:
        debug: Enable debug-level logging when True.
        json_output: Render JSON lines; otherwise use the console renderer.
    """
    level = logging.DEBUG if debug else logging.INFO
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(name)s %(levelname)s %(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _ROUTED_LOGGERS:
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
    # httpx logs every request at INFO; Solr paging would flood the output.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
