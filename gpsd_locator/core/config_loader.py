"""Loader for ``key = value`` text config files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from .logging_utils import get_module_logger

logger = get_module_logger("ConfigLoader")

_TRUE_WORDS = ("true", "yes", "on", "1")
_BOOL_WORDS = _TRUE_WORDS + ("false", "no", "off", "0")


class ConfigLoader:
    """Read-only config file loader.

    Lines are ``key = value``; ``#`` starts a comment. Values for keys that
    have a default are coerced to the default's type, other values are
    guessed (bool, int, float, then string).
    """

    @staticmethod
    def load(
        config_path: Path,
        defaults: Optional[Dict[str, Any]] = None,
        strict: bool = False,
    ) -> Dict[str, Any]:
        config = dict(defaults) if defaults else {}

        if not config_path.exists():
            logger.debug("Config file not found at %s, using defaults", config_path)
            return config

        logger.debug("Loading config from: %s", config_path)

        with open(config_path, "r", encoding="utf-8") as handle:
            for line_num, raw in enumerate(handle, 1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue

                if "=" not in line:
                    logger.warning("Invalid config line %d (missing '='): %s", line_num, line)
                    continue

                key, value = (part.strip() for part in line.split("=", 1))
                if "#" in value:
                    value = value.split("#", 1)[0].strip()

                if strict and defaults is not None and key not in defaults:
                    logger.warning(
                        "Unknown config key '%s' (line %d) - ignored in strict mode",
                        key, line_num,
                    )
                    continue

                default = defaults.get(key) if defaults else None
                if default is not None:
                    config[key] = ConfigLoader._parse_value_with_type(value, type(default), default)
                else:
                    config[key] = ConfigLoader._parse_value(value)

        logger.info("Loaded config from %s (%d values)", config_path, len(config))
        return config

    @staticmethod
    def _parse_value(value: str) -> Any:
        if value.lower() in _BOOL_WORDS:
            return value.lower() in _TRUE_WORDS

        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                pass

        return value

    @staticmethod
    def _parse_value_with_type(value: str, target_type: type, default: Any) -> Any:
        if target_type is bool:
            return value.lower() in _TRUE_WORDS

        if target_type in (int, float):
            try:
                return int(value, 0) if target_type is int else float(value)
            except ValueError:
                logger.warning("Failed to parse '%s' as %s, using default", value, target_type.__name__)
                return default

        return value


__all__ = ["ConfigLoader"]
