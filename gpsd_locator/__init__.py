"""Top-level package for the GPSD locator client."""

from __future__ import annotations

from importlib import metadata

from .gpsd import Endpoint, Fix, GPSDSession, OperatingMode, SessionState, check_gpsd

try:
    __version__ = metadata.version("gpsd-locator")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


__all__ = [
    "__version__",
    "Endpoint",
    "Fix",
    "GPSDSession",
    "OperatingMode",
    "SessionState",
    "check_gpsd",
]
