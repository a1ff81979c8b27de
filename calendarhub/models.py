"""Core event and import-result models."""

import time
import uuid
from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .sources.models import CalendarSource


def generate_event_id() -> str:
    """Generate an event id from a millisecond timestamp and a random suffix.

    Uniqueness is best-effort: two ids generated in the same millisecond only
    differ by their 9-character random suffix.
    """
    return f"{int(time.time() * 1000)}{uuid.uuid4().hex[:9]}"


class CalendarEvent(BaseModel):
    """A normalized calendar event.

    ``source`` and ``color`` are copies taken when the event is created, so
    later edits to the source do not change existing events.
    """

    id: str = Field(default_factory=generate_event_id, description="Event ID")
    title: str = Field(..., min_length=1, description="Event title")
    description: str = Field(default="", description="Event description")
    start_date: datetime = Field(..., description="Start (naive local time)")
    end_date: datetime = Field(..., description="End (naive local time)")
    source: CalendarSource = Field(..., description="Source the event belongs to")
    color: str = Field(..., description="Display color copied from the source")
    all_day: bool = Field(default=False, description="All-day event flag")

    model_config = ConfigDict(frozen=True)

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    @field_serializer("start_date", "end_date")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()

    def starts_on(self, day: date) -> bool:
        """Check whether the event starts on the given calendar day."""
        return self.start_date.date() == day


class OutcomeKind(str, Enum):
    """Result kinds for a single imported record."""

    PARSED = "parsed"
    DROPPED = "dropped"
    FAILED = "failed"


class RecordOutcome(BaseModel):
    """Outcome of importing one record (ICS block, CSV row or JSON object).

    ``DROPPED`` records are skipped without a diagnostic; ``FAILED`` records
    carry a message that ends up in ``FileImportResult.errors``.
    """

    kind: OutcomeKind
    event: Optional[CalendarEvent] = None
    message: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parsed(cls, event: CalendarEvent) -> "RecordOutcome":
        return cls(kind=OutcomeKind.PARSED, event=event)

    @classmethod
    def dropped(cls, reason: Optional[str] = None) -> "RecordOutcome":
        return cls(kind=OutcomeKind.DROPPED, message=reason)

    @classmethod
    def failed(cls, message: str) -> "RecordOutcome":
        return cls(kind=OutcomeKind.FAILED, message=message)


class FileImportResult(BaseModel):
    """Result of importing a single file."""

    success: bool
    events: list[CalendarEvent] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    file_name: str

    @property
    def event_count(self) -> int:
        """Number of imported events."""
        return len(self.events)

    @classmethod
    def failure(cls, file_name: str, message: str) -> "FileImportResult":
        """Structural failure: no events and exactly one error."""
        return cls(success=False, events=[], errors=[message], file_name=file_name)

    @classmethod
    def from_outcomes(
        cls,
        file_name: str,
        outcomes: Iterable[RecordOutcome],
        errors: Iterable[str] = (),
    ) -> "FileImportResult":
        """Fold per-record outcomes into a file result.

        ``errors`` holds file-level diagnostics, listed after record errors.
        """
        events: list[CalendarEvent] = []
        messages: list[str] = []

        for outcome in outcomes:
            if outcome.kind == OutcomeKind.PARSED and outcome.event is not None:
                events.append(outcome.event)
            elif outcome.kind == OutcomeKind.FAILED and outcome.message:
                messages.append(outcome.message)
        messages.extend(errors)

        return cls(success=bool(events), events=events, errors=messages, file_name=file_name)


class CalendarDay(BaseModel):
    """One cell of the month grid."""

    date: date
    is_current_month: bool
    is_today: bool
    events: list[CalendarEvent] = Field(default_factory=list)
