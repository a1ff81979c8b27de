"""CalendarHub - unified calendar with multi-format file import."""

__version__ = "1.0.0"
__author__ = "CalendarHub Team"
__email__ = "support@calendarhub.local"
__description__ = "Unified calendar aggregating Google, Outlook, Apple and local calendars"

# Package metadata
__all__ = [
    "__author__",
    "__description__",
    "__email__",
    "__version__",
]
