"""Configuration and settings management."""

from catalog_admin.config.constants import Limits, Namespaces
from catalog_admin.config.logging import get_logger, setup_logging
from catalog_admin.config.settings import Settings, clear_settings_cache, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "setup_logging",
    "get_logger",
    "Limits",
    "Namespaces",
]
