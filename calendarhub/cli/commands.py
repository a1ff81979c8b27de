"""Command handlers for the CalendarHub CLI."""

import argparse

from calendarhub.config.settings import CalendarHubSettings
from calendarhub.importer.files import LocalFile
from calendarhub.models import FileImportResult
from calendarhub.state.controller import CalendarController
from calendarhub.utils.logging import get_logger
from calendarhub.web.server import serve

logger = get_logger(__name__)


def format_result(result: FileImportResult) -> str:
    """Render one file's outcome as a short text block."""
    if result.success:
        lines = [f"✓ {result.file_name}: {result.event_count} event(s) imported"]
    else:
        lines = [f"✗ {result.file_name}: import failed"]
    lines.extend(f"    {error}" for error in result.errors)
    return "\n".join(lines)


async def run_import(args: argparse.Namespace, settings: CalendarHubSettings) -> int:
    """Import files from disk into one source.

    Returns:
        0 if at least one file produced events, 1 otherwise
    """
    controller = CalendarController(settings.sources)
    source_id = args.source or settings.default_source_id
    logger.info("Importing %d file(s) into %s", len(args.files), source_id or "first source")

    results = await controller.import_files(
        [LocalFile(path) for path in args.files], source_id
    )

    for result in results:
        print(format_result(result))

    succeeded = sum(1 for result in results if result.success)
    total_events = len(controller.state.events)
    print(f"\n{succeeded}/{len(results)} file(s) imported, {total_events} event(s) total")
    return 0 if succeeded else 1


async def run_serve(args: argparse.Namespace, settings: CalendarHubSettings) -> int:
    """Run the HTTP API until interrupted."""
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port

    await serve(settings)
    return 0


COMMANDS = {
    "import": run_import,
    "serve": run_serve,
}
