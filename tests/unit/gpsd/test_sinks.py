"""Unit tests for the fix receivers: observer site sink and tracker."""

import logging

import pytest

from gpsd_locator.gpsd.gpsd_core.handlers.session import GPSDSession
from gpsd_locator.gpsd.gpsd_core.parsers.gpsd_types import Fix, OperatingMode, SessionState
from gpsd_locator.gpsd.gpsd_core.sinks import FixTracker, ObserverSite, ObserverSiteSink
from tests.infrastructure.mocks.gpsd_mocks import ScriptedTransport, scripted_factory, tpv_line


@pytest.fixture
def fix() -> Fix:
    return Fix(40.0, -105.25, 1600.0, "2024-01-01T00:00:00Z")


class TestObserverSiteSink:
    """Fixes replace the observer site."""

    def test_apply_without_fix(self):
        sink = ObserverSiteSink()

        assert sink.apply() is None
        assert sink.site is None
        assert sink.status_message == "Location data is not available."

    def test_fix_replaces_site(self, fix):
        sink = ObserverSiteSink(ObserverSite(0.0, 0.0, 0.0))

        sink(fix)

        assert sink.site == ObserverSite(40.0, -105.25, 1600.0)
        assert sink.status_message == "Location data applied to observer site"

    def test_later_fix_wins(self, fix):
        sink = ObserverSiteSink()
        sink(fix)
        sink(Fix(41.0, -104.0, 10.0))

        assert sink.site == ObserverSite(41.0, -104.0, 10.0)

    def test_apply_logs(self, fix, caplog):
        sink = ObserverSiteSink()
        with caplog.at_level(logging.INFO, logger="gpsd_locator"):
            sink(fix)

        assert "lat=40.000000, lon=-105.250000, elevation=1600.0m" in caplog.text

    @pytest.mark.asyncio
    async def test_used_as_session_callback(self, endpoint):
        sink = ObserverSiteSink()
        transport = ScriptedTransport([tpv_line(lat=51.5, lon=-0.1, alt=35.0)])
        session = GPSDSession(endpoint, on_fix=sink, transport_factory=scripted_factory(transport))

        await session.run()

        assert sink.site == ObserverSite(51.5, -0.1, 35.0)


class TestFixTracker:
    """Tracker mirrors the session for status reporting."""

    def test_initial_status(self, endpoint):
        tracker = FixTracker(endpoint, OperatingMode.CONTINUOUS)

        assert tracker.status() == {
            "state": "disconnected",
            "endpoint": {"hostname": "gpsd.test", "port": 2947},
            "mode": "continuous",
            "fixes_received": 0,
            "last_status": None,
            "last_error": None,
        }
        assert tracker.fix() is None

    def test_records_fixes(self, endpoint, fix):
        tracker = FixTracker(endpoint, OperatingMode.CONTINUOUS)
        tracker.on_fix(fix)
        tracker.on_fix(fix)

        assert tracker.fixes_received == 2
        assert tracker.fix() == {
            "latitude": 40.0,
            "longitude": -105.25,
            "altitude_m": 1600.0,
            "timestamp": "2024-01-01T00:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_failure_message_recorded(self, endpoint):
        tracker = FixTracker(endpoint, OperatingMode.SINGLE_FIX)
        transport = ScriptedTransport(connect_error="Connection refused")
        session = GPSDSession(
            endpoint,
            on_fix=tracker.on_fix,
            on_status=tracker.on_status,
            on_state_change=tracker.on_state_change,
            transport_factory=scripted_factory(transport),
        )

        with pytest.raises(ConnectionError):
            await session.run()

        assert tracker.state is SessionState.FAILED
        assert tracker.last_error.startswith("Connection failed: ")
        assert "Connection refused" in tracker.last_error
