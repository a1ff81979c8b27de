"""Source-specific exceptions."""

from typing import Optional


class SourceError(Exception):
    """Base exception for source-related errors."""

    def __init__(self, message: str, source_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source_id = source_id


class SourceNotFoundError(SourceError):
    """Exception raised when no calendar source can be resolved."""


class SourceConfigError(SourceError):
    """Exception raised when source configuration is invalid."""
