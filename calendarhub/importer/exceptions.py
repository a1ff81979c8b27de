"""Import-specific exceptions for error handling."""

from typing import Optional


class CalendarImportError(Exception):
    """Base exception for calendar import errors."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.file_name = file_name


class FileReadError(CalendarImportError):
    """Exception raised when file content cannot be read or decoded."""


class RecordParseError(CalendarImportError):
    """Exception raised when a single CSV row or JSON record cannot be mapped."""
