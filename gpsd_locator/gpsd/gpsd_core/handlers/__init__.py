"""GPSD session handlers."""

from .session import GPSDSession, check_gpsd
from .watch import send_watch

__all__ = ["GPSDSession", "check_gpsd", "send_watch"]
