"""Pure state transitions and derived views for the calendar.

Every function takes a ``CalendarState`` and returns a new one (or a view
computed from it); nothing here mutates its input.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Literal, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field

from ..models import CalendarDay, CalendarEvent, generate_event_id
from ..sources.exceptions import SourceNotFoundError
from ..sources.manager import find_source
from ..sources.models import CalendarSource
from .exceptions import EventNotFoundError
from .models import CalendarState

GRID_SIZE = 42  # six weeks

Direction = Literal["prev", "next"]


class EventInput(BaseModel):
    """Fields for creating an event; the id is assigned on creation."""

    title: str = Field(..., min_length=1)
    description: str = ""
    start_date: datetime
    end_date: datetime
    source_id: str
    all_day: bool = False


class EventUpdate(BaseModel):
    """Partial update; unset fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    source_id: Optional[str] = None
    color: Optional[str] = None
    all_day: Optional[bool] = None


def navigate_month(state: CalendarState, direction: Direction) -> CalendarState:
    """Move the displayed month back or forward.

    The day of month is clamped, so Jan 31 + 1 month is the last day of February.
    """
    step = relativedelta(months=1 if direction == "next" else -1)
    return state.model_copy(update={"current_date": state.current_date + step})


def go_to_date(state: CalendarState, target: date) -> CalendarState:
    """Display the month containing ``target``."""
    return state.model_copy(update={"current_date": target})


def toggle_source(state: CalendarState, source_id: str) -> CalendarState:
    """Flip the ``enabled`` flag of one source.

    Raises:
        SourceNotFoundError: If no source has ``source_id``
    """
    if find_source(state.sources, source_id) is None:
        raise SourceNotFoundError(f"Unknown source: {source_id}", source_id=source_id)

    sources = tuple(
        source.model_copy(update={"enabled": not source.enabled})
        if source.id == source_id
        else source
        for source in state.sources
    )
    return state.model_copy(update={"sources": sources})


def _require_source(state: CalendarState, source_id: str) -> CalendarSource:
    source = find_source(state.sources, source_id)
    if source is None:
        raise SourceNotFoundError(f"Unknown source: {source_id}", source_id=source_id)
    return source


def _require_event(state: CalendarState, event_id: str) -> CalendarEvent:
    for event in state.events:
        if event.id == event_id:
            return event
    raise EventNotFoundError(f"Unknown event: {event_id}", event_id=event_id)


def create_event(state: CalendarState, data: EventInput) -> CalendarState:
    """Append a new event with a fresh id; its color is the source's color.

    Raises:
        SourceNotFoundError: If ``data.source_id`` is unknown
    """
    source = _require_source(state, data.source_id)
    event = CalendarEvent(
        id=generate_event_id(),
        title=data.title,
        description=data.description,
        start_date=data.start_date,
        end_date=data.end_date,
        source=source,
        color=source.color,
        all_day=data.all_day,
    )
    return state.model_copy(update={"events": (*state.events, event)})


def update_event(state: CalendarState, event_id: str, changes: EventUpdate) -> CalendarState:
    """Merge ``changes`` into one event.

    Moving an event to another source re-stamps its color unless a color is
    given explicitly.

    Raises:
        EventNotFoundError: If ``event_id`` is unknown
        SourceNotFoundError: If ``changes.source_id`` is unknown
    """
    current = _require_event(state, event_id)
    fields = changes.model_dump(exclude_unset=True, exclude_none=True)

    source_id = fields.pop("source_id", None)
    if source_id is not None:
        source = _require_source(state, source_id)
        fields["source"] = source
        fields.setdefault("color", source.color)

    updated = CalendarEvent.model_validate({**dict(current), **fields})
    events = tuple(updated if event.id == event_id else event for event in state.events)
    return state.model_copy(update={"events": events})


def delete_event(state: CalendarState, event_id: str) -> CalendarState:
    """Remove one event.

    Raises:
        EventNotFoundError: If ``event_id`` is unknown
    """
    _require_event(state, event_id)
    events = tuple(event for event in state.events if event.id != event_id)
    return state.model_copy(update={"events": events})


def import_events(state: CalendarState, events: Iterable[CalendarEvent]) -> CalendarState:
    """Append imported events in order."""
    return state.model_copy(update={"events": (*state.events, *events)})


def visible_events(state: CalendarState) -> list[CalendarEvent]:
    """Events whose source is enabled."""
    enabled = state.enabled_source_ids
    return [event for event in state.events if event.source.id in enabled]


def grid_start(month_date: date) -> date:
    """Sunday on or before the first day of ``month_date``'s month."""
    first = month_date.replace(day=1)
    return first - timedelta(days=(first.weekday() + 1) % 7)


def calendar_days(state: CalendarState, today: Optional[date] = None) -> list[CalendarDay]:
    """Six-week month grid for ``state.current_date`` with visible events per day."""
    today = today or date.today()
    start = grid_start(state.current_date)

    by_day: dict[date, list[CalendarEvent]] = defaultdict(list)
    for event in visible_events(state):
        by_day[event.start_date.date()].append(event)

    days = []
    for offset in range(GRID_SIZE):
        day = start + timedelta(days=offset)
        days.append(
            CalendarDay(
                date=day,
                is_current_month=day.month == state.current_date.month,
                is_today=day == today,
                events=by_day.get(day, []),
            )
        )
    return days
