"""Calendar application state and transitions."""

from .controller import CalendarController
from .exceptions import EventNotFoundError, StateError
from .models import CalendarState
from .transitions import (
    EventInput,
    EventUpdate,
    calendar_days,
    create_event,
    delete_event,
    import_events,
    navigate_month,
    toggle_source,
    update_event,
    visible_events,
)

__all__ = [
    "CalendarController",
    "CalendarState",
    "EventInput",
    "EventNotFoundError",
    "EventUpdate",
    "StateError",
    "calendar_days",
    "create_event",
    "delete_event",
    "import_events",
    "navigate_month",
    "toggle_source",
    "update_event",
    "visible_events",
]
