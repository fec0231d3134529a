"""Shared pytest configuration and fixtures for the GPSD locator test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gpsd_locator.gpsd.gpsd_core.parsers.gpsd_types import Endpoint  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "network: mark test as requiring a live GPSD server"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--gpsd-host",
        action="store",
        default=None,
        help="Run network tests against the GPSD server at this host",
    )


def pytest_collection_modifyitems(config, items):
    """Skip live-server tests unless --gpsd-host is specified."""
    if config.getoption("--gpsd-host"):
        return

    skip_network = pytest.mark.skip(reason="Need --gpsd-host option to run")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def endpoint() -> Endpoint:
    """A placeholder endpoint for sessions driven by scripted transports."""
    return Endpoint("gpsd.test", 2947)


@pytest.fixture
def live_endpoint(request) -> Endpoint:
    """Endpoint of a real GPSD server given with --gpsd-host."""
    return Endpoint(request.config.getoption("--gpsd-host"))
