"""GPSD client entry point.

Single-fix mode checks the connection: it prints the first fix and exits.
Continuous mode prints every fix until interrupted and can serve the
read-only status API while it runs.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Callable, Optional

from aiohttp import web

from gpsd_locator.cli.common import add_common_cli_arguments, configure_logging, install_signal_handlers
from gpsd_locator.core.logging_utils import get_module_logger

from .api import create_app
from .config import GPSDConfig, load_config
from .gpsd_core import FixTracker, GPSDError, GPSDSession, OperatingMode

logger = get_module_logger("MainGPSD")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Read position fixes from a GPSD server")

    add_common_cli_arguments(parser)

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="GPSD hostname (default: localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="GPSD port (default: 2947)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in OperatingMode],
        default=None,
        help="Stop after the first fix, or keep printing fixes",
    )
    parser.add_argument(
        "--connect-timeout",
        dest="connect_timeout",
        type=float,
        default=None,
        help="Seconds allowed for the TCP connect (default: 10)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop the session after this many seconds; fails if no fix arrived by then",
    )
    parser.add_argument(
        "--api-host",
        dest="api_host",
        type=str,
        default=None,
        help="Bind address of the status API",
    )
    parser.add_argument(
        "--api-port",
        dest="api_port",
        type=int,
        default=None,
        help="Serve the status API on this port (0 disables it)",
    )

    return parser.parse_args(argv)


async def _start_api(config: GPSDConfig, tracker: FixTracker) -> web.AppRunner:
    runner = web.AppRunner(create_app(tracker))
    await runner.setup()
    site = web.TCPSite(runner, config.api_host, config.api_port)
    await site.start()
    logger.info("Status API listening on http://%s:%d/api/v1/gpsd/status", config.api_host, config.api_port)
    return runner


async def run_session(
    config: GPSDConfig,
    *,
    timeout: Optional[float] = None,
    out: Callable[[str], None] = print,
    install_signals: bool = True,
) -> int:
    """Run one GPSD session from ``config`` and return a process exit code."""
    mode = config.operating_mode
    tracker = FixTracker(config.endpoint, mode)

    def on_fix(fix):
        tracker.on_fix(fix)
        out(fix.describe())

    session = GPSDSession(
        config.endpoint,
        mode,
        on_fix=on_fix,
        on_status=tracker.on_status,
        on_state_change=tracker.on_state_change,
        connect_timeout=config.connect_timeout_s,
    )

    loop = asyncio.get_running_loop()
    interrupted = False
    timed_out = False

    def on_signal() -> None:
        nonlocal interrupted
        interrupted = True
        session.cancel()

    def on_deadline() -> None:
        nonlocal timed_out
        timed_out = True
        session.cancel()

    if install_signals:
        install_signal_handlers(on_signal, loop)
    deadline = loop.call_later(timeout, on_deadline) if timeout else None

    runner: Optional[web.AppRunner] = None
    try:
        if config.api_port:
            runner = await _start_api(config, tracker)
        await session.run()
    except GPSDError:
        # Already reported by the session
        return EXIT_FAILED
    finally:
        if deadline is not None:
            deadline.cancel()
        if runner is not None:
            await runner.cleanup()

    if interrupted:
        return EXIT_INTERRUPTED
    if session.fixes_delivered == 0:
        if timed_out:
            logger.error("Connection failed: timed out waiting for fix from %s", config.endpoint)
        return EXIT_FAILED
    return EXIT_OK


async def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the GPSD client."""
    args = parse_args(argv)
    try:
        config = load_config(args.config_path, args)
    except ValueError as exc:
        configure_logging("info")
        logger.error("Invalid configuration: %s", exc)
        return EXIT_FAILED

    configure_logging(config.log_level, config.log_file, console_output=config.console_output)
    return await run_session(config, timeout=args.timeout)


def run(argv: Optional[list[str]] = None) -> int:
    """Synchronous wrapper used by ``python -m gpsd_locator``."""
    return asyncio.run(main(argv))


__all__ = ["main", "parse_args", "run", "run_session"]
