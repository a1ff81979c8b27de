"""Calendar source management module."""

from .exceptions import SourceConfigError, SourceError, SourceNotFoundError
from .manager import build_sources, find_source, resolve_source
from .models import CalendarSource, SourceType

__all__ = [
    "CalendarSource",
    "SourceConfigError",
    "SourceError",
    "SourceNotFoundError",
    "SourceType",
    "build_sources",
    "find_source",
    "resolve_source",
]
