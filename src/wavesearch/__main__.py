"""Entry point for the search server."""

import asyncio
import contextlib
import sys

import structlog
import uvicorn

from wavesearch.app import create_app
from wavesearch.config import Settings
from wavesearch.logging import configure_logging

logger = structlog.get_logger()


async def serve(settings: Settings) -> None:
    """Run uvicorn until it receives SIGTERM or SIGINT.

    Uvicorn's own signal handling stops the server, after which the app
    lifespan drains the index worker.

    Args:
        settings: Server configuration.
    """
    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
        timeout_graceful_shutdown=int(settings.shutdown_timeout),
    )
    await uvicorn.Server(config).serve()
    logger.info("server_exited")


def main() -> None:
    """Entry point for python -m wavesearch."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_output=not settings.debug)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve(settings))

    sys.exit(0)


if __name__ == "__main__":
    main()
