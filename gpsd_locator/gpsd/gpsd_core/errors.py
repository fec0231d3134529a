"""Error taxonomy for the GPSD client.

Fatal errors (connect, write, read, end of stream) end a session.
``IncompleteFixError`` and ``MalformedRecordWarning`` never leave the
parser/extractor boundary; the session reports them and keeps reading.
"""

from __future__ import annotations

from typing import Optional

from .constants import MAX_LINE_PREVIEW


class GPSDError(Exception):
    """Base class for GPSD client errors."""


class GPSDConnectionError(GPSDError, ConnectionError):
    """Host unreachable, refused, DNS failure or connect timeout."""


class GPSDWriteError(GPSDError):
    """Sending the watch command failed."""


class GPSDReadError(GPSDError):
    """Transport-level failure while reading."""


class GPSDEndOfStream(GPSDReadError):
    """The server closed the stream."""

    def __init__(self, message: str = "GPSD closed the connection") -> None:
        super().__init__(message)


class IncompleteFixError(GPSDError, ValueError):
    """A TPV record lacks a usable latitude or longitude."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class MalformedRecordWarning(UserWarning):
    """A line that could not be turned into a usable record."""

    def __init__(self, reason: str, line: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line

    @property
    def preview(self) -> str:
        if not self.line:
            return ""
        if len(self.line) <= MAX_LINE_PREVIEW:
            return self.line
        return self.line[:MAX_LINE_PREVIEW] + "..."

    def __str__(self) -> str:
        return self.reason


__all__ = [
    "GPSDError",
    "GPSDConnectionError",
    "GPSDWriteError",
    "GPSDReadError",
    "GPSDEndOfStream",
    "IncompleteFixError",
    "MalformedRecordWarning",
]
