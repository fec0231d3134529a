"""Typed configuration for the GPSD client."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

from gpsd_locator.cli.common import LOG_LEVELS
from gpsd_locator.core.config_loader import ConfigLoader
from gpsd_locator.core.logging_utils import get_module_logger

from .gpsd_core.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_GPSD_HOST, DEFAULT_GPSD_PORT
from .gpsd_core.parsers.gpsd_types import Endpoint, OperatingMode

logger = get_module_logger("GPSDConfig")


@dataclass(slots=True)
class GPSDConfig:
    """Typed configuration for the GPSD client."""

    # GPSD server
    hostname: str = DEFAULT_GPSD_HOST
    port: int = DEFAULT_GPSD_PORT
    mode: str = OperatingMode.SINGLE_FIX.value
    connect_timeout_s: float = DEFAULT_CONNECT_TIMEOUT

    # Logging
    log_level: str = "info"
    log_file: Optional[str] = None
    console_output: bool = True

    # Status API (port 0 disables it)
    api_host: str = "127.0.0.1"
    api_port: int = 0

    @classmethod
    def from_file(cls, config_path: Optional[Path], args: Any = None) -> "GPSDConfig":
        """Build config from a ``key = value`` file with optional CLI overrides."""
        defaults = asdict(cls())
        values = defaults
        if config_path is not None:
            values = ConfigLoader.load(Path(config_path), defaults=defaults, strict=True)

        config = cls(**{f.name: values[f.name] for f in fields(cls)})

        if args is not None:
            config = config._apply_args_override(args)

        return config

    def _apply_args_override(self, args: Any) -> "GPSDConfig":
        """Apply CLI argument overrides to config values."""
        values = asdict(self)

        arg_mappings = {
            "host": "hostname",
            "port": "port",
            "mode": "mode",
            "connect_timeout": "connect_timeout_s",
            "log_level": "log_level",
            "log_file": "log_file",
            "console_output": "console_output",
            "api_host": "api_host",
            "api_port": "api_port",
        }

        for arg_name, config_key in arg_mappings.items():
            if hasattr(args, arg_name):
                val = getattr(args, arg_name)
                if val is not None:
                    values[config_key] = val

        return GPSDConfig(**values)

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.hostname or not self.hostname.strip():
            raise ValueError("hostname must not be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be in 1..65535, got {self.port}")
        OperatingMode.parse(self.mode)
        if self.connect_timeout_s <= 0:
            raise ValueError(f"connect_timeout_s must be positive, got {self.connect_timeout_s}")
        if not 0 <= self.api_port <= 65535:
            raise ValueError(f"api_port must be in 0..65535, got {self.api_port}")
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level '{self.log_level}'")

    @property
    def endpoint(self) -> Endpoint:
        return Endpoint(hostname=self.hostname.strip(), port=self.port)

    @property
    def operating_mode(self) -> OperatingMode:
        return OperatingMode.parse(self.mode)

    def to_dict(self) -> dict[str, Any]:
        """Export config values as dictionary."""
        return asdict(self)


def load_config(config_path: Optional[Path] = None, args: Any = None) -> GPSDConfig:
    """Load and validate configuration."""
    config = GPSDConfig.from_file(config_path, args)
    config.validate()
    logger.debug("Using GPSD config: %s", config.to_dict())
    return config


__all__ = ["GPSDConfig", "load_config"]
