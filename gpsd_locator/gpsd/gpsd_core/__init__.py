"""GPSD core package - protocol client components."""

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_GPSD_HOST,
    DEFAULT_GPSD_PORT,
    WATCH_COMMAND,
)
from .errors import (
    GPSDConnectionError,
    GPSDEndOfStream,
    GPSDError,
    GPSDReadError,
    GPSDWriteError,
    IncompleteFixError,
    MalformedRecordWarning,
)
from .parsers import (
    Endpoint,
    Fix,
    GPSDStreamParser,
    OperatingMode,
    RecordClass,
    SessionState,
    extract_fix,
)
from .transports import BaseGPSDTransport, TCPGPSDTransport
from .handlers import GPSDSession, check_gpsd, send_watch
from .sinks import FixTracker, ObserverSite, ObserverSiteSink

__all__ = [
    # Constants
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_GPSD_HOST",
    "DEFAULT_GPSD_PORT",
    "WATCH_COMMAND",
    # Errors
    "GPSDConnectionError",
    "GPSDEndOfStream",
    "GPSDError",
    "GPSDReadError",
    "GPSDWriteError",
    "IncompleteFixError",
    "MalformedRecordWarning",
    # Types
    "Endpoint",
    "Fix",
    "OperatingMode",
    "RecordClass",
    "SessionState",
    # Parsing
    "GPSDStreamParser",
    "extract_fix",
    # Transport
    "BaseGPSDTransport",
    "TCPGPSDTransport",
    # Session
    "GPSDSession",
    "check_gpsd",
    "send_watch",
    # Sinks
    "FixTracker",
    "ObserverSite",
    "ObserverSiteSink",
]
