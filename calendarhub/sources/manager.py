"""Lookup and construction helpers for calendar sources."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any, Optional

from pydantic import ValidationError

from .exceptions import SourceConfigError, SourceNotFoundError
from .models import CalendarSource

logger = logging.getLogger(__name__)


def find_source(sources: Iterable[CalendarSource], source_id: str) -> Optional[CalendarSource]:
    """Return the source with ``source_id`` or None."""
    for source in sources:
        if source.id == source_id:
            return source
    return None


def resolve_source(
    sources: Sequence[CalendarSource], source_id: Optional[str] = None
) -> CalendarSource:
    """Resolve the import target for a selected source id.

    Falls back to the first available source when ``source_id`` is unset or
    does not match any source.

    Raises:
        SourceNotFoundError: If there are no sources at all
    """
    if not sources:
        raise SourceNotFoundError("No calendar sources are available", source_id=source_id)

    if source_id:
        source = find_source(sources, source_id)
        if source is not None:
            return source
        logger.warning(
            "Source %r not found; falling back to %r", source_id, sources[0].id
        )

    return sources[0]


def build_sources(raw_sources: Iterable[dict[str, Any]]) -> list[CalendarSource]:
    """Build validated sources from configuration mappings.

    Raises:
        SourceConfigError: If an entry is invalid or an id is duplicated
    """
    sources: list[CalendarSource] = []
    seen: set[str] = set()

    for index, raw in enumerate(raw_sources):
        try:
            source = CalendarSource.model_validate(raw)
        except ValidationError as e:
            raise SourceConfigError(f"Invalid source at position {index}: {e}") from e

        if source.id in seen:
            raise SourceConfigError(f"Duplicate source id: {source.id}", source_id=source.id)
        seen.add(source.id)
        sources.append(source)

    return sources
