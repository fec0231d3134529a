"""Mock GPSD transports and servers."""
