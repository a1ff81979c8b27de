"""State-transition exceptions."""

from typing import Optional


class StateError(Exception):
    """Base exception for calendar state errors."""

    def __init__(self, message: str, event_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.event_id = event_id


class EventNotFoundError(StateError):
    """Exception raised when an event id is not in the state."""
