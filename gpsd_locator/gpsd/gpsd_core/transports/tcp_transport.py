"""TCP transport for GPSD servers.

Uses asyncio streams for non-blocking I/O. Reads carry no timeout: a
silent server blocks ``read_line`` until the caller closes the stream.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Optional

from gpsd_locator.core.logging_utils import get_module_logger

from ..constants import CLOSE_TIMEOUT, DEFAULT_CONNECT_TIMEOUT, STREAM_LIMIT_BYTES
from ..errors import GPSDConnectionError, GPSDEndOfStream, GPSDReadError, GPSDWriteError
from ..parsers.gpsd_types import Endpoint
from .base_transport import BaseGPSDTransport

logger = get_module_logger("TCPGPSDTransport")


class TCPGPSDTransport(BaseGPSDTransport):
    """TCP stream to a GPSD daemon.

    Example:
        transport = TCPGPSDTransport(Endpoint("localhost"))
        async with transport:
            await transport.write_line(WATCH_COMMAND)
            while True:
                line = await transport.read_line()
    """

    def __init__(
        self,
        endpoint: Endpoint,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        limit: int = STREAM_LIMIT_BYTES,
    ):
        """Initialize the transport.

        Args:
            endpoint: GPSD host and port
            connect_timeout: Seconds allowed for the TCP connect
            limit: Longest line accepted, in bytes
        """
        super().__init__()
        self.endpoint = endpoint
        self.connect_timeout = connect_timeout
        self.limit = limit

        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None

    @property
    def is_connected(self) -> bool:
        return self._connected and self._reader is not None

    async def connect(self) -> None:
        """Open the TCP connection.

        Raises:
            GPSDConnectionError: DNS failure, refusal, unreachable host or timeout
        """
        if self.is_connected:
            logger.debug("Already connected to %s", self.endpoint)
            return

        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(
                    self.endpoint.hostname,
                    self.endpoint.port,
                    limit=self.limit,
                ),
                timeout=self.connect_timeout,
            )
        except asyncio.TimeoutError as exc:
            self._fail_connect(f"timed out after {self.connect_timeout:g}s", exc)
        except OSError as exc:
            self._fail_connect(str(exc) or exc.__class__.__name__, exc)

        self._connected = True
        self._last_error = None
        logger.info("Connected to GPSD at %s", self.endpoint)

    def _fail_connect(self, cause: str, exc: BaseException) -> None:
        self._connected = False
        self._last_error = cause
        logger.warning("Connecting to %s failed: %s", self.endpoint, cause)
        raise GPSDConnectionError(f"Cannot connect to GPSD at {self.endpoint}: {cause}") from exc

    async def disconnect(self) -> None:
        """Close the connection: reader first, then the writer that owns the socket."""
        writer = self._writer
        self._reader = None
        self._writer = None
        self._connected = False

        if writer is None:
            return

        with contextlib.suppress(OSError, RuntimeError):
            writer.close()

        try:
            await asyncio.wait_for(writer.wait_closed(), timeout=CLOSE_TIMEOUT)
        except asyncio.TimeoutError:
            logger.debug("Timeout waiting for socket close on %s", self.endpoint)
        except OSError as exc:
            # Peer already gone; the socket is closed either way
            logger.debug("Error closing socket on %s: %s", self.endpoint, exc)

        logger.info("Disconnected from GPSD at %s", self.endpoint)

    def close_nowait(self) -> None:
        super().close_nowait()
        if self._writer is not None:
            with contextlib.suppress(OSError, RuntimeError):
                self._writer.close()

    async def write_line(self, text: str) -> None:
        """Send ``text`` followed by a newline.

        Raises:
            GPSDWriteError: not connected or the peer dropped the connection
        """
        if self._writer is None:
            raise GPSDWriteError(f"Not connected to GPSD at {self.endpoint}")

        try:
            self._writer.write(f"{text}\n".encode("ascii"))
            await self._writer.drain()
        except (OSError, RuntimeError) as exc:
            self._last_error = str(exc) or exc.__class__.__name__
            logger.warning("Write error on %s: %s", self.endpoint, self._last_error)
            raise GPSDWriteError(f"Failed to write to GPSD at {self.endpoint}: {self._last_error}") from exc

    async def read_line(self) -> str:
        """Read the next line from GPSD.

        Returns:
            The decoded line, stripped of surrounding whitespace (may be empty)

        Raises:
            GPSDEndOfStream: the server closed the stream
            GPSDReadError: socket failure or a line longer than ``limit``
        """
        reader = self._reader
        if reader is None:
            raise GPSDReadError(f"Not connected to GPSD at {self.endpoint}")

        try:
            raw = await reader.readline()
        except (OSError, ValueError) as exc:
            # ValueError is the StreamReader limit overrun
            self._last_error = str(exc) or exc.__class__.__name__
            logger.warning("Read error on %s: %s", self.endpoint, self._last_error)
            raise GPSDReadError(f"Failed to read from GPSD at {self.endpoint}: {self._last_error}") from exc

        if not raw:
            self._last_error = "Stream ended (EOF)"
            logger.warning("GPSD stream ended on %s (EOF)", self.endpoint)
            raise GPSDEndOfStream(f"GPSD at {self.endpoint} closed the connection")

        return raw.decode("utf-8", errors="replace").strip()
