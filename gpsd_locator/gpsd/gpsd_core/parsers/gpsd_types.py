"""GPSD data types and structures."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..constants import (
    CLASS_DEVICE,
    CLASS_DEVICES,
    CLASS_ERROR,
    CLASS_SKY,
    CLASS_TPV,
    CLASS_VERSION,
    CLASS_WATCH,
    DEFAULT_GPSD_PORT,
    MODE_CONTINUOUS,
    MODE_SINGLE_FIX,
    UNKNOWN_TIME,
)

# A decoded GPSD JSON object, untyped until a checker looks at it
RawRecord = Dict[str, Any]


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Address of a GPSD server."""

    hostname: str
    port: int = DEFAULT_GPSD_PORT

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"


class RecordClass(Enum):
    """Value of the ``class`` member of a GPSD record."""

    TPV = CLASS_TPV
    VERSION = CLASS_VERSION
    WATCH = CLASS_WATCH
    SKY = CLASS_SKY
    DEVICES = CLASS_DEVICES
    DEVICE = CLASS_DEVICE
    ERROR = CLASS_ERROR
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "RecordClass":
        value = record.get("class")
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class SessionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    AWAITING_FIX = "awaiting_fix"
    FIX_ACQUIRED = "fix_acquired"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is SessionState.FAILED


class OperatingMode(Enum):
    """Whether a session stops after the first fix or keeps tracking."""

    SINGLE_FIX = MODE_SINGLE_FIX
    CONTINUOUS = MODE_CONTINUOUS

    @classmethod
    def parse(cls, value: "str | OperatingMode") -> "OperatingMode":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Invalid mode '{value}'. Choose from: {valid}") from None


@dataclass(frozen=True, slots=True)
class Fix:
    """Position fix extracted from one TPV record.

    ``timestamp`` is the server's ISO-8601 string, kept verbatim; it is
    empty when the record carried no time.
    """

    latitude: float
    longitude: float
    altitude_m: float
    timestamp: str = UNKNOWN_TIME

    @property
    def has_timestamp(self) -> bool:
        return bool(self.timestamp)

    def as_datetime(self) -> Optional[dt.datetime]:
        """Parse ``timestamp`` into an aware UTC datetime, None if absent or invalid."""
        if not self.timestamp:
            return None
        text = self.timestamp
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=dt.timezone.utc)
        return parsed.astimezone(dt.timezone.utc)

    def describe(self) -> str:
        time_text = self.timestamp or "unknown"
        return (
            f"Latitude: {self.latitude}, Longitude: {self.longitude}, "
            f"Time: {time_text}, Altitude: {self.altitude_m}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["Endpoint", "Fix", "OperatingMode", "RawRecord", "RecordClass", "SessionState"]
