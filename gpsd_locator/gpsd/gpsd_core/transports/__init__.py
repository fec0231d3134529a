"""GPSD transport implementations."""

from .base_transport import BaseGPSDTransport
from .tcp_transport import TCPGPSDTransport

__all__ = ["BaseGPSDTransport", "TCPGPSDTransport"]
