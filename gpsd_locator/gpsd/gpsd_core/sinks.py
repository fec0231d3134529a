"""Collaborators that receive fixes from a session.

Sessions only know plain callbacks; the objects here are ready-made
receivers. ``ObserverSiteSink`` turns fixes into an observer location the
way an astronomy host application would use them. ``FixTracker`` keeps
the latest session picture for the status API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from gpsd_locator.core.logging_utils import get_module_logger

from .parsers.gpsd_types import Endpoint, Fix, OperatingMode, SessionState

logger = get_module_logger("GPSDSinks")


@dataclass(frozen=True, slots=True)
class ObserverSite:
    """Observer location in the host application's terms."""

    latitude: float
    longitude: float
    elevation_m: float

    @classmethod
    def from_fix(cls, fix: Fix) -> "ObserverSite":
        return cls(latitude=fix.latitude, longitude=fix.longitude, elevation_m=fix.altitude_m)


class ObserverSiteSink:
    """Fix callback that replaces the current observer site on every fix."""

    def __init__(self, site: Optional[ObserverSite] = None) -> None:
        self._site = site
        self._pending: Optional[Fix] = None
        self.status_message: Optional[str] = None

    @property
    def site(self) -> Optional[ObserverSite]:
        return self._site

    def __call__(self, fix: Fix) -> None:
        self._pending = fix
        self.apply()

    def apply(self) -> Optional[ObserverSite]:
        """Apply the most recently received fix to the observer site."""
        if self._pending is None:
            self.status_message = "Location data is not available."
            logger.warning(self.status_message)
            return None

        self._site = ObserverSite.from_fix(self._pending)
        self.status_message = "Location data applied to observer site"
        logger.info(
            "%s: lat=%.6f, lon=%.6f, elevation=%.1fm",
            self.status_message,
            self._site.latitude,
            self._site.longitude,
            self._site.elevation_m,
        )
        return self._site


class FixTracker:
    """Latest fix, state and status of one session, for status reporting.

    Wire it up with ``on_fix=tracker.on_fix, on_status=tracker.on_status,
    on_state_change=tracker.on_state_change``.
    """

    def __init__(self, endpoint: Endpoint, mode: OperatingMode) -> None:
        self.endpoint = endpoint
        self.mode = mode
        self.state = SessionState.DISCONNECTED
        self.last_fix: Optional[Fix] = None
        self.last_status: Optional[str] = None
        self.last_error: Optional[str] = None
        self.fixes_received = 0

    def on_fix(self, fix: Fix) -> None:
        self.last_fix = fix
        self.fixes_received += 1

    def on_status(self, message: str) -> None:
        self.last_status = message

    def on_state_change(self, state: SessionState) -> None:
        self.state = state
        if state is SessionState.FAILED:
            self.last_error = self.last_status

    def status(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "endpoint": {"hostname": self.endpoint.hostname, "port": self.endpoint.port},
            "mode": self.mode.value,
            "fixes_received": self.fixes_received,
            "last_status": self.last_status,
            "last_error": self.last_error,
        }

    def fix(self) -> Optional[Dict[str, Any]]:
        return self.last_fix.to_dict() if self.last_fix else None


__all__ = ["FixTracker", "ObserverSite", "ObserverSiteSink"]
