"""Application state model."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ..models import CalendarEvent
from ..sources.models import CalendarSource


class CalendarState(BaseModel):
    """Everything the calendar UI renders from.

    Instances are immutable; transitions in ``calendarhub.state.transitions``
    return new states.
    """

    current_date: date = Field(default_factory=date.today, description="Month being displayed")
    events: tuple[CalendarEvent, ...] = Field(default_factory=tuple)
    sources: tuple[CalendarSource, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    @property
    def enabled_source_ids(self) -> frozenset[str]:
        return frozenset(source.id for source in self.sources if source.enabled)
