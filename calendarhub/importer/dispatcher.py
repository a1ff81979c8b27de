"""Routes calendar files to the parser for their format."""

import logging
from typing import Callable, Optional

from ..models import FileImportResult
from ..sources.models import CalendarSource
from .constants import (
    CSV_EXTENSION,
    FILE_READ_ERROR_MESSAGE,
    ICS_EXTENSION,
    JSON_EXTENSION,
    UNSUPPORTED_FORMAT_MESSAGE,
)
from .csv_parser import parse_csv_file
from .exceptions import FileReadError
from .files import CalendarFile, decode_content
from .ics_parser import parse_ics_file
from .json_parser import parse_json_file

logger = logging.getLogger(__name__)

ContentParser = Callable[[str, CalendarSource], FileImportResult]

# Checked in order; first matching suffix wins
PARSERS: tuple[tuple[str, ContentParser], ...] = (
    (ICS_EXTENSION, parse_ics_file),
    (CSV_EXTENSION, parse_csv_file),
    (JSON_EXTENSION, parse_json_file),
)


def detect_parser(file_name: str) -> Optional[ContentParser]:
    """Pick the parser for a file name by case-insensitive extension."""
    lowered = file_name.lower()
    for extension, parser in PARSERS:
        if lowered.endswith(extension):
            return parser
    return None


def parse_calendar_content(
    file_name: str, content: str, source: CalendarSource
) -> FileImportResult:
    """Parse already-decoded file content into exactly one result.

    The returned ``file_name`` is always ``file_name``, whatever name the
    parser reported.
    """
    parser = detect_parser(file_name)
    if parser is None:
        logger.warning("Unsupported file format: %s", file_name)
        return FileImportResult.failure(file_name, UNSUPPORTED_FORMAT_MESSAGE)

    result = parser(content, source)
    return result.model_copy(update={"file_name": file_name})


async def import_calendar_file(file: CalendarFile, source: CalendarSource) -> FileImportResult:
    """Read, decode and parse one file for ``source``.

    Never raises for file-level problems: unreadable or undecodable content
    resolves to a failure result.
    """
    file_name = file.name
    if detect_parser(file_name) is None:
        logger.warning("Unsupported file format: %s", file_name)
        return FileImportResult.failure(file_name, UNSUPPORTED_FORMAT_MESSAGE)

    try:
        content = decode_content(await file.read())
    except (OSError, UnicodeDecodeError, FileReadError) as e:
        logger.warning("Failed to read %s: %s", file_name, e)
        return FileImportResult.failure(file_name, FILE_READ_ERROR_MESSAGE)

    result = parse_calendar_content(file_name, content, source)
    if result.success:
        logger.info("Imported %d events from %s into %s", result.event_count, file_name, source.id)
    else:
        logger.warning("Import of %s failed: %s", file_name, "; ".join(result.errors))
    return result
