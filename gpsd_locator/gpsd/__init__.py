"""GPSD client: protocol core, configuration, status API and CLI."""

from .config import GPSDConfig, load_config
from .gpsd_core import Endpoint, Fix, GPSDSession, OperatingMode, SessionState, check_gpsd

__all__ = [
    "Endpoint",
    "Fix",
    "GPSDConfig",
    "GPSDSession",
    "OperatingMode",
    "SessionState",
    "check_gpsd",
    "load_config",
]
