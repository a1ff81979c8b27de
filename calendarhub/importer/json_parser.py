"""JSON importer for loosely shaped event records."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..models import CalendarEvent, FileImportResult, RecordOutcome
from ..sources.models import CalendarSource
from .constants import (
    JSON_DEFAULT_FILE_NAME,
    JSON_EVENTS_KEY,
    JSON_FIELD_ALIASES,
    JSON_PARSE_ERROR,
)
from .dates import parse_datetime
from .exceptions import RecordParseError

logger = logging.getLogger(__name__)


def resolve_field(record: Mapping[str, Any], field: str) -> Optional[Any]:
    """Return the first truthy value among the alternate keys for ``field``."""
    for key in JSON_FIELD_ALIASES[field]:
        value = record.get(key)
        if value:
            return value
    return None


def extract_records(data: Any) -> list[Any]:
    """Find the record list in a decoded JSON document.

    A top-level array is used as is; an object contributes its ``events``
    array. Anything else yields no records.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        records = data.get(JSON_EVENTS_KEY)
        if records is None:
            return []
        if isinstance(records, list):
            return records
        logger.warning("Ignoring non-array %r field in JSON document", JSON_EVENTS_KEY)
        return []
    logger.warning("JSON document root is %s; no events to import", type(data).__name__)
    return []


class JSONImportParser:
    """Maps JSON objects to calendar events, isolating failures per record."""

    def __init__(self, source: CalendarSource) -> None:
        self.source = source

    def parse(self, content: str, file_name: str = JSON_DEFAULT_FILE_NAME) -> FileImportResult:
        """Parse JSON text into a file result."""
        try:
            data = json.loads(content)
        except (ValueError, RecursionError, TypeError) as e:
            # JSONDecodeError, oversized integer literals and deep nesting
            logger.warning("Invalid JSON content: %s", e)
            return FileImportResult.failure(file_name, f"{JSON_PARSE_ERROR}: {e}")

        outcomes = [
            self._parse_entry(record, position)
            for position, record in enumerate(extract_records(data), start=1)
        ]

        result = FileImportResult.from_outcomes(file_name, outcomes)
        logger.info(
            "Parsed %d events from %d JSON records (%d errors)",
            result.event_count,
            len(outcomes),
            len(result.errors),
        )
        return result

    def _parse_entry(self, record: Any, position: int) -> RecordOutcome:
        try:
            return self._parse_record(record)
        except RecordParseError as e:
            logger.debug("Rejected JSON record %d: %s", position, e.message)
            return RecordOutcome.failed(f"Event {position}: {e.message}")
        except Exception as e:
            logger.exception("Unexpected error in JSON record %d", position)
            return RecordOutcome.failed(f"Event {position}: {e}")

    def _parse_record(self, record: Any) -> RecordOutcome:
        if not isinstance(record, dict):
            raise RecordParseError(f"expected an object, got {type(record).__name__}")

        title = resolve_field(record, "title")
        if not title:
            return RecordOutcome.dropped("no title or summary")

        start_value = resolve_field(record, "start")
        if start_value is None:
            raise RecordParseError("missing start date")
        start_date = parse_datetime(start_value, field="start date")

        end_value = resolve_field(record, "end")
        end_date = start_date if end_value is None else parse_datetime(end_value, field="end date")

        description = resolve_field(record, "description")

        return RecordOutcome.parsed(
            CalendarEvent(
                title=str(title),
                description=str(description) if description else "",
                start_date=start_date,
                end_date=end_date,
                source=self.source,
                color=self.source.color,
                all_day=bool(resolve_field(record, "all_day")),
            )
        )


def parse_json_file(
    content: str, source: CalendarSource, file_name: str = JSON_DEFAULT_FILE_NAME
) -> FileImportResult:
    """Parse JSON content for ``source``."""
    return JSONImportParser(source).parse(content, file_name)
