"""Sequential multi-file import."""

import logging
from collections.abc import Iterable, Sequence
from typing import Callable, Optional

from ..models import CalendarEvent, FileImportResult
from ..sources.manager import resolve_source
from ..sources.models import CalendarSource
from .dispatcher import import_calendar_file
from .files import CalendarFile

logger = logging.getLogger(__name__)

ImportCallback = Callable[[list[CalendarEvent]], None]


async def import_calendar_files(
    files: Iterable[CalendarFile],
    sources: Sequence[CalendarSource],
    selected_source_id: Optional[str] = None,
    on_import: Optional[ImportCallback] = None,
) -> list[FileImportResult]:
    """Import files one after another into a single target source.

    Each file is fully processed before the next starts, and results keep the
    input order. ``on_import`` receives the events of every successful file
    as soon as that file is done; earlier files are not rolled back if a later
    one fails.

    Raises:
        SourceNotFoundError: If ``sources`` is empty
    """
    source = resolve_source(sources, selected_source_id)
    results: list[FileImportResult] = []

    for file in files:
        result = await import_calendar_file(file, source)
        results.append(result)
        if result.success and on_import is not None:
            on_import(result.events)

    logger.info(
        "Batch import finished: %d/%d files succeeded, %d events",
        sum(1 for result in results if result.success),
        len(results),
        sum(result.event_count for result in results),
    )
    return results
