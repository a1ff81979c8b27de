"""Configuration management for CalendarHub."""

from .settings import (
    CalendarHubSettings,
    LoggingSettings,
    ServerSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "CalendarHubSettings",
    "LoggingSettings",
    "ServerSettings",
    "get_settings",
    "reset_settings",
]
