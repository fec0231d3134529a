"""Shared plumbing: logging helpers and config file loading."""

from .config_loader import ConfigLoader
from .logging_utils import StructuredLogger, get_module_logger

__all__ = ["ConfigLoader", "StructuredLogger", "get_module_logger"]
