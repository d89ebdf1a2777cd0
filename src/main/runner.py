#!/usr/bin/env python3
"""
Headless Runner - Main Layer

Runs the sync engine without the HTTP API until SIGINT or SIGTERM.
Like app.py, it initializes logging, settings and the container; both are
application entry points that belong to the Main layer.
"""

import asyncio
import signal

from src.main.config import get_settings
from src.main.container import app_lifespan, init_container
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

# Get structured logger
logger = get_logger(__name__)


async def run(stop_event: asyncio.Event | None = None) -> None:
    """Start the engine and keep it running until ``stop_event`` is set."""
    stop_event = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError):
            # add_signal_handler is unavailable on Windows and off the main thread
            logger.debug("runner.signal_handler_unavailable", signal=sig.name)

    init_container(get_settings())

    async with app_lifespan():
        logger.info("runner.started")
        await stop_event.wait()

    logger.info("runner.stopped")


def main():
    """Main entry point for the headless engine."""

    logger.info("Starting SwitchBot sync engine")
    asyncio.run(run())


if __name__ == "__main__":
    main()
