"""Controller that owns the current calendar state."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from ..importer.batch import import_calendar_files
from ..importer.files import CalendarFile
from ..models import CalendarDay, CalendarEvent, FileImportResult
from ..sources.models import CalendarSource
from . import transitions
from .models import CalendarState
from .transitions import Direction, EventInput, EventUpdate

logger = logging.getLogger(__name__)


class CalendarController:
    """Single owner of the application state.

    Each operation applies a pure transition and swaps in the resulting state.
    """

    def __init__(
        self,
        sources: Sequence[CalendarSource],
        events: Iterable[CalendarEvent] = (),
        current_date: Optional[date] = None,
    ) -> None:
        self._state = CalendarState(
            current_date=current_date or date.today(),
            events=tuple(events),
            sources=tuple(sources),
        )

    @property
    def state(self) -> CalendarState:
        return self._state

    @property
    def sources(self) -> tuple[CalendarSource, ...]:
        return self._state.sources

    def visible_events(self) -> list[CalendarEvent]:
        return transitions.visible_events(self._state)

    def calendar_days(self, today: Optional[date] = None) -> list[CalendarDay]:
        return transitions.calendar_days(self._state, today)

    def navigate_month(self, direction: Direction) -> date:
        self._state = transitions.navigate_month(self._state, direction)
        return self._state.current_date

    def go_to_date(self, target: date) -> None:
        self._state = transitions.go_to_date(self._state, target)

    def toggle_source(self, source_id: str) -> CalendarSource:
        self._state = transitions.toggle_source(self._state, source_id)
        source = next(source for source in self._state.sources if source.id == source_id)
        logger.info("Source %s %s", source_id, "enabled" if source.enabled else "disabled")
        return source

    def create_event(self, data: EventInput) -> CalendarEvent:
        self._state = transitions.create_event(self._state, data)
        event = self._state.events[-1]
        logger.info("Created event %s (%s)", event.id, event.title)
        return event

    def update_event(self, event_id: str, changes: EventUpdate) -> CalendarEvent:
        self._state = transitions.update_event(self._state, event_id, changes)
        logger.info("Updated event %s", event_id)
        return next(event for event in self._state.events if event.id == event_id)

    def delete_event(self, event_id: str) -> None:
        self._state = transitions.delete_event(self._state, event_id)
        logger.info("Deleted event %s", event_id)

    def import_events(self, events: Iterable[CalendarEvent]) -> None:
        self._state = transitions.import_events(self._state, events)

    async def import_files(
        self, files: Iterable[CalendarFile], source_id: Optional[str] = None
    ) -> list[FileImportResult]:
        """Import files into one source, appending each successful file's events."""
        return await import_calendar_files(
            files, self._state.sources, source_id, on_import=self.import_events
        )
