#!/usr/bin/env python3
"""Watchdog entrypoint — loads settings and runs the sampling loop.

Usage::

    # Run with default config
    python scripts/run.py

    # Custom config file (YAML or JSON)
    python scripts/run.py --config config.json

    # Override log level
    python scripts/run.py --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys

import structlog

from src.core.config import load_settings
from src.core.exceptions import SettingsError
from src.core.logging import setup_logging
from src.monitor.factory import create_watchdog

logger = structlog.get_logger(__name__)


async def run(args: argparse.Namespace) -> int:
    """Start the watchdog and run until interrupted."""
    try:
        settings = load_settings(args.config)
    except SettingsError as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        return 2

    setup_logging(settings.log, level=args.log_level)

    logger.info(
        "watchdog_starting",
        resources=settings.resources,
        interval=settings.interval,
        log_to_file=settings.log.enabled,
    )

    watchdog = create_watchdog(settings)

    # ── Wait for shutdown signal ─────────────────────────────────
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("shutdown_signal_received")
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows: signal handlers not supported on ProactorEventLoop
            pass

    try:
        code = await watchdog.serve(stop_event)
    except KeyboardInterrupt:
        logger.info("keyboard_interrupt")
        await watchdog.stop()
        code = 0

    if code != 0:
        logger.error("watchdog_exited_unexpectedly", cycles=watchdog.cycle_count)
    return code


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Watch host resource usage and fire HTTP alerts on violations.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML/JSON (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    args = parser.parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
