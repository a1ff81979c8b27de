"""Data models for calendar sources."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SourceType(str, Enum):
    """Supported calendar provider kinds."""

    GOOGLE = "google"
    OUTLOOK = "outlook"
    APPLE = "apple"
    LOCAL = "local"


class CalendarSource(BaseModel):
    """A calendar that events are aggregated from or imported into.

    Sources are immutable; enabling or disabling one produces a new instance
    (see ``calendarhub.state.transitions.toggle_source``).
    """

    id: str = Field(..., min_length=1, description="Source identifier")
    name: str = Field(..., description="Human-readable source name")
    type: SourceType = Field(..., description="Provider kind")
    color: str = Field(..., description="Display color, e.g. '#EA4335'")
    enabled: bool = Field(default=True, description="Whether source events are visible")

    model_config = ConfigDict(frozen=True, use_enum_values=True)
