"""Header-driven CSV importer.

Column roles are inferred from header text, so column order does not matter.
Rows are split naively on commas: quoted fields containing commas are not
supported.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..models import CalendarEvent, FileImportResult, RecordOutcome
from ..sources.models import CalendarSource
from .constants import (
    CSV_DEFAULT_DURATION,
    CSV_DEFAULT_FILE_NAME,
    CSV_DESCRIPTION_KEYWORDS,
    CSV_END_KEYWORDS,
    CSV_INSUFFICIENT_DATA_MESSAGE,
    CSV_MISSING_COLUMNS_MESSAGE,
    CSV_PARSE_ERROR,
    CSV_START_KEYWORDS,
    CSV_TITLE_KEYWORDS,
)
from .dates import parse_datetime
from .exceptions import RecordParseError

logger = logging.getLogger(__name__)


def find_column(headers: Sequence[str], keywords: Sequence[str]) -> Optional[int]:
    """Index of the first header containing any keyword, or None."""
    for index, header in enumerate(headers):
        if any(keyword in header for keyword in keywords):
            return index
    return None


def split_row(line: str) -> list[str]:
    """Split a data row, trimming cells and one surrounding pair of quotes."""
    cells = []
    for cell in line.split(","):
        cell = cell.strip()
        if cell.startswith('"'):
            cell = cell[1:]
        if cell.endswith('"'):
            cell = cell[:-1]
        cells.append(cell)
    return cells


@dataclass(frozen=True)
class ColumnMapping:
    """Column indexes for each event field."""

    title: int
    start: int
    end: Optional[int] = None
    description: Optional[int] = None

    @classmethod
    def from_header(cls, header_line: str) -> Optional["ColumnMapping"]:
        """Infer the mapping; None when the title or start column is missing."""
        headers = [header.strip().lower() for header in header_line.split(",")]
        title = find_column(headers, CSV_TITLE_KEYWORDS)
        start = find_column(headers, CSV_START_KEYWORDS)
        if title is None or start is None:
            return None
        return cls(
            title=title,
            start=start,
            end=find_column(headers, CSV_END_KEYWORDS),
            description=find_column(headers, CSV_DESCRIPTION_KEYWORDS),
        )


def _cell(cells: Sequence[str], index: int) -> str:
    # Short rows read as empty cells
    return cells[index] if index < len(cells) else ""


class CSVImportParser:
    """Maps CSV rows to calendar events, isolating failures per row."""

    def __init__(self, source: CalendarSource) -> None:
        self.source = source

    def parse(self, content: str, file_name: str = CSV_DEFAULT_FILE_NAME) -> FileImportResult:
        """Parse CSV text into a file result."""
        outcomes: list[RecordOutcome] = []
        errors: list[str] = []

        try:
            lines = [line.strip() for line in content.split("\n")]
            lines = [line for line in lines if line]
            if len(lines) < 2:
                return FileImportResult.failure(file_name, CSV_INSUFFICIENT_DATA_MESSAGE)

            mapping = ColumnMapping.from_header(lines[0])
            if mapping is None:
                return FileImportResult.failure(file_name, CSV_MISSING_COLUMNS_MESSAGE)

            for index in range(1, len(lines)):
                outcomes.append(self._parse_line(lines[index], mapping, row_number=index + 1))
        except Exception as e:
            logger.exception("Failed to parse CSV content")
            errors.append(f"{CSV_PARSE_ERROR}: {e}")

        result = FileImportResult.from_outcomes(file_name, outcomes, errors)
        logger.info(
            "Parsed %d events from %d CSV rows (%d errors)",
            result.event_count,
            len(outcomes),
            len(result.errors),
        )
        return result

    def _parse_line(self, line: str, mapping: ColumnMapping, row_number: int) -> RecordOutcome:
        try:
            return self._parse_row(split_row(line), mapping)
        except RecordParseError as e:
            logger.debug("Rejected CSV row %d: %s", row_number, e.message)
            return RecordOutcome.failed(f"Row {row_number}: {e.message}")
        except Exception as e:
            logger.exception("Unexpected error in CSV row %d", row_number)
            return RecordOutcome.failed(f"Row {row_number}: {e}")

    def _parse_row(self, cells: Sequence[str], mapping: ColumnMapping) -> RecordOutcome:
        title = _cell(cells, mapping.title)
        if not title:
            return RecordOutcome.dropped("empty title")

        start_date = parse_datetime(_cell(cells, mapping.start), field="start date")

        if mapping.end is None:
            end_date = start_date + CSV_DEFAULT_DURATION
        else:
            end_date = parse_datetime(_cell(cells, mapping.end), field="end date")

        description = _cell(cells, mapping.description) if mapping.description is not None else ""

        return RecordOutcome.parsed(
            CalendarEvent(
                title=title,
                description=description,
                start_date=start_date,
                end_date=end_date,
                source=self.source,
                color=self.source.color,
            )
        )


def parse_csv_file(
    content: str, source: CalendarSource, file_name: str = CSV_DEFAULT_FILE_NAME
) -> FileImportResult:
    """Parse CSV content for ``source``."""
    return CSVImportParser(source).parse(content, file_name)
