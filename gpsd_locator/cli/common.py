"""Shared helpers for building consistent CLI entry points."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
from pathlib import Path
from typing import Callable, Iterable, Optional

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(
    level_name: str,
    log_file: Optional[Path | str] = None,
    *,
    suppressed_loggers: Iterable[str] = ("asyncio", "aiohttp.access"),
    fmt: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt: str = "%H:%M:%S",
    console_output: bool = True,
) -> None:
    """
    Configure root logging with optional file output.

    Args:
        level_name: Logging level (debug, info, warning, error, critical)
        log_file: Optional path to write logs to file
        suppressed_loggers: Logger names to suppress (set to ERROR level)
        fmt: Log message format
        datefmt: Date/time format
        console_output: If True, also log to console. If False, only log to file.
    """
    level = LOG_LEVELS.get(level_name.lower())
    if level is None:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Invalid log level '{level_name}'. Choose from: {valid}")

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(level)
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    if console_output:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if log_file:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    for name in suppressed_loggers:
        logging.getLogger(name).setLevel(logging.ERROR)


def add_common_cli_arguments(parser: argparse.ArgumentParser) -> None:
    """Add config and logging options. Defaults are None so config files win."""
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Optional key = value configuration file (CLI arguments override it)",
    )

    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS.keys()),
        default=None,
        help="Logging verbosity (default: info)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path to write logs to",
    )

    console_group = parser.add_mutually_exclusive_group()
    console_group.add_argument(
        "--console",
        dest="console_output",
        action="store_true",
        default=None,
        help="Log to console (default)",
    )
    console_group.add_argument(
        "--no-console",
        dest="console_output",
        action="store_false",
        help="Log to file only (no console output)",
    )


def install_signal_handlers(stop: Callable[[], None], loop: asyncio.AbstractEventLoop) -> None:
    """Register SIGINT/SIGTERM handlers that call ``stop``."""
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop)


__all__ = ["LOG_LEVELS", "add_common_cli_arguments", "configure_logging", "install_signal_handlers"]
