"""Watch-mode subscription handshake."""

from __future__ import annotations

from gpsd_locator.core.logging_utils import get_module_logger

from ..constants import WATCH_COMMAND
from ..transports import BaseGPSDTransport

logger = get_module_logger("GPSDWatch")


async def send_watch(transport: BaseGPSDTransport) -> str:
    """Send the watch-enable command and return the line written.

    Fire-and-forget: any VERSION or WATCH reply is left to the stream
    parser like every other line.

    Raises:
        GPSDWriteError: the command could not be sent
    """
    await transport.write_line(WATCH_COMMAND)
    logger.debug("Sent watch command: %s", WATCH_COMMAND)
    return WATCH_COMMAND


__all__ = ["send_watch"]
