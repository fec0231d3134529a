"""Abstract transport interface for GPSD connections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class BaseGPSDTransport(ABC):
    """Line-based bidirectional stream to a GPSD server.

    Implementations raise the errors from ``gpsd_core.errors``:
    ``connect`` -> GPSDConnectionError, ``write_line`` -> GPSDWriteError,
    ``read_line`` -> GPSDReadError / GPSDEndOfStream.
    """

    def __init__(self) -> None:
        self._connected = False
        self._last_error: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def last_error(self) -> Optional[str]:
        """Text of the most recent failure, if any."""
        return self._last_error

    @abstractmethod
    async def connect(self) -> None:
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the stream. Safe to call more than once."""
        ...

    def close_nowait(self) -> None:
        """Start closing the stream from synchronous code.

        A pending ``read_line`` then observes end of stream. ``disconnect``
        must still be awaited afterwards to finish the close.
        """
        self._connected = False

    @abstractmethod
    async def write_line(self, text: str) -> None:
        ...

    @abstractmethod
    async def read_line(self) -> str:
        """Return the next line without its terminator."""
        ...

    async def __aenter__(self) -> "BaseGPSDTransport":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
