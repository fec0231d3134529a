"""GPSD client status routes."""

from aiohttp import web

from ..gpsd_core.sinks import FixTracker

TRACKER_KEY = web.AppKey("gpsd_tracker", FixTracker)

_NO_FIX = ("GPSD_NO_FIX", "No GPS fix acquired yet")


def result_to_response(result, error_code: str, error_msg: str) -> web.Response:
    """Convert result to JSON response, handling None as error."""
    if result is None:
        return web.json_response(
            {"error": {"code": error_code, "message": error_msg}},
            status=404
        )
    return web.json_response(result)


def setup_gpsd_routes(app: web.Application, tracker: FixTracker) -> None:
    """Register the read-only GPSD routes."""
    app[TRACKER_KEY] = tracker
    app.router.add_get("/api/v1/gpsd/status", gpsd_status_handler)
    app.router.add_get("/api/v1/gpsd/fix", gpsd_fix_handler)


def create_app(tracker: FixTracker) -> web.Application:
    app = web.Application()
    setup_gpsd_routes(app, tracker)
    return app


async def gpsd_status_handler(request: web.Request) -> web.Response:
    """GET /api/v1/gpsd/status - Session state, endpoint and last status."""
    tracker = request.app[TRACKER_KEY]
    return web.json_response(tracker.status())


async def gpsd_fix_handler(request: web.Request) -> web.Response:
    """GET /api/v1/gpsd/fix - Latest fix delivered by the session."""
    tracker = request.app[TRACKER_KEY]
    return result_to_response(tracker.fix(), *_NO_FIX)
