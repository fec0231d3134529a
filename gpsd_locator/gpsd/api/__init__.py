"""
GPSD status API package.

Read-only aiohttp endpoints exposing the latest fix and session state.
"""

from .routes import create_app, setup_gpsd_routes

__all__ = ["create_app", "setup_gpsd_routes"]
