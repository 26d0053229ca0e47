"""Core utilities shared across the downloader."""

from .config import ConfigurationError, Settings, get_settings  # noqa: F401
from .logger import get_logger  # noqa: F401

__all__ = ["ConfigurationError", "Settings", "get_settings", "get_logger"]
