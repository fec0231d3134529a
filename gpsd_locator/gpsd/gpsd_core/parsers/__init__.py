"""GPSD record parsing components."""

from .fix_extractor import extract_fix
from .gpsd_types import Endpoint, Fix, OperatingMode, RawRecord, RecordClass, SessionState
from .stream_parser import GPSDStreamParser

__all__ = [
    "Endpoint",
    "Fix",
    "GPSDStreamParser",
    "OperatingMode",
    "RawRecord",
    "RecordClass",
    "SessionState",
    "extract_fix",
]
