"""Line-oriented ICS importer.

Only a small property vocabulary is modelled (SUMMARY, DESCRIPTION, DTSTART,
DTEND); every other line inside a VEVENT block is ignored, which keeps the
importer tolerant of UID, LOCATION, RRULE and vendor extensions.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..models import CalendarEvent, FileImportResult, RecordOutcome
from ..sources.models import CalendarSource
from .constants import (
    ICS_BEGIN_EVENT,
    ICS_DEFAULT_FILE_NAME,
    ICS_DESCRIPTION,
    ICS_DTEND,
    ICS_DTSTART,
    ICS_END_EVENT,
    ICS_PARSE_ERROR,
    ICS_SUMMARY,
)
from .dates import parse_ics_date

logger = logging.getLogger(__name__)

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


class ParserState(str, Enum):
    """Scanner states."""

    OUTSIDE_EVENT = "outside_event"
    INSIDE_EVENT = "inside_event"


@dataclass
class EventDraft:
    """Properties collected for the VEVENT block being scanned."""

    source: CalendarSource
    color: str
    title: Optional[str] = None
    description: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    all_day: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.title) and self.start_date is not None and self.end_date is not None

    def to_event(self) -> CalendarEvent:
        return CalendarEvent(
            title=self.title,
            description=self.description,
            start_date=self.start_date,
            end_date=self.end_date,
            source=self.source,
            color=self.color,
            all_day=self.all_day,
        )


class ICSImportParser:
    """Two-state scanner that turns VEVENT blocks into calendar events."""

    def __init__(self, source: CalendarSource) -> None:
        self.source = source
        self.state = ParserState.OUTSIDE_EVENT
        self._draft: Optional[EventDraft] = None
        self._outcomes: list[RecordOutcome] = []

    def parse(self, content: str, file_name: str = ICS_DEFAULT_FILE_NAME) -> FileImportResult:
        """Parse ICS text into a file result.

        A block without a title or with a missing/malformed date is dropped
        silently. An unexpected failure stops the scan and is reported as a
        single error; events closed before it are kept.
        """
        self.state = ParserState.OUTSIDE_EVENT
        self._draft = None
        self._outcomes = []
        errors: list[str] = []

        try:
            for raw_line in LINE_BREAK_PATTERN.split(content):
                self._process_line(raw_line.strip())
        except Exception as e:
            logger.exception("Failed to parse ICS content")
            errors.append(f"{ICS_PARSE_ERROR}: {e}")

        result = FileImportResult.from_outcomes(file_name, self._outcomes, errors)
        logger.info(
            "Parsed %d events from ICS content (%d blocks)", result.event_count, len(self._outcomes)
        )
        return result

    def _process_line(self, line: str) -> None:
        if line == ICS_BEGIN_EVENT:
            self.state = ParserState.INSIDE_EVENT
            self._draft = EventDraft(source=self.source, color=self.source.color)
            return

        if self.state != ParserState.INSIDE_EVENT or self._draft is None:
            # Includes END:VEVENT without a matching BEGIN
            return

        if line == ICS_END_EVENT:
            self._close_block(self._draft)
            self.state = ParserState.OUTSIDE_EVENT
            self._draft = None
        elif line.startswith(ICS_SUMMARY):
            self._draft.title = line[len(ICS_SUMMARY) :]
        elif line.startswith(ICS_DESCRIPTION):
            self._draft.description = line[len(ICS_DESCRIPTION) :]
        elif line.startswith(ICS_DTSTART):
            self._draft.start_date = parse_ics_date(line[len(ICS_DTSTART) :])
        elif line.startswith(ICS_DTEND):
            self._draft.end_date = parse_ics_date(line[len(ICS_DTEND) :])

    def _close_block(self, draft: EventDraft) -> None:
        if draft.is_complete:
            self._outcomes.append(RecordOutcome.parsed(draft.to_event()))
        else:
            logger.debug("Dropping incomplete VEVENT block (title=%r)", draft.title)
            self._outcomes.append(RecordOutcome.dropped("incomplete VEVENT"))


def parse_ics_file(
    content: str, source: CalendarSource, file_name: str = ICS_DEFAULT_FILE_NAME
) -> FileImportResult:
    """Parse ICS content for ``source``."""
    return ICSImportParser(source).parse(content, file_name)
