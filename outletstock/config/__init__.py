"""Configuration module."""

from outletstock.config.logging import configure_logging, get_logger, log_context
from outletstock.config.settings import (
    Settings,
    SyncSettings,
    ZohoSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "SyncSettings",
    "ZohoSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "log_context",
]
