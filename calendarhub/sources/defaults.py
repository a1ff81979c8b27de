"""Built-in calendar sources and sample events used when nothing is configured."""

from datetime import datetime

from ..models import CalendarEvent
from .models import CalendarSource, SourceType

DEFAULT_SOURCES: tuple[CalendarSource, ...] = (
    CalendarSource(id="google", name="Google Calendar", type=SourceType.GOOGLE, color="#EA4335"),
    CalendarSource(id="outlook", name="Outlook Calendar", type=SourceType.OUTLOOK, color="#0078D4"),
    CalendarSource(id="apple", name="Apple Calendar", type=SourceType.APPLE, color="#8E8E93"),
    CalendarSource(id="local", name="Local Calendar", type=SourceType.LOCAL, color="#10B981"),
)


def sample_events(sources: tuple[CalendarSource, ...] = DEFAULT_SOURCES) -> list[CalendarEvent]:
    """Demo events spread over the given sources."""
    samples = [
        ("1", "Team meeting", "Project status review", (2025, 1, 15, 10, 0), (2025, 1, 15, 11, 0)),
        ("2", "Doctor appointment", "Annual checkup", (2025, 1, 16, 14, 30), (2025, 1, 16, 15, 30)),
        ("3", "Dinner with friends", "Long overdue catch-up", (2025, 1, 18, 19, 0), (2025, 1, 18, 21, 0)),
        ("4", "Gym", "Weekly workout", (2025, 1, 20, 7, 0), (2025, 1, 20, 8, 0)),
    ]

    events = []
    for index, (event_id, title, description, start, end) in enumerate(samples):
        source = sources[index % len(sources)]
        events.append(
            CalendarEvent(
                id=event_id,
                title=title,
                description=description,
                start_date=datetime(*start),
                end_date=datetime(*end),
                source=source,
                color=source.color,
            )
        )
    return events
