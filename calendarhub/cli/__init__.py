"""Command-line interface for CalendarHub."""

from collections.abc import Sequence
from typing import Optional

from pydantic import ValidationError

from calendarhub.config.settings import CalendarHubSettings
from calendarhub.sources.exceptions import SourceError
from calendarhub.utils.logging import apply_command_line_overrides, get_logger, setup_logging

from .commands import COMMANDS
from .parser import create_parser

logger = get_logger(__name__)


async def main_entry(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, configure logging and run the selected command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.config is not None and not args.config.exists():
        parser.error(f"config file not found: {args.config}")

    try:
        settings = (
            CalendarHubSettings(config_file=args.config)
            if args.config is not None
            else CalendarHubSettings()
        )
    except (SourceError, ValidationError) as e:
        print(f"Configuration error: {e}")
        return 1

    apply_command_line_overrides(settings, args)
    setup_logging(settings)
    if settings.loaded_config_file:
        logger.debug("Loaded configuration from %s", settings.loaded_config_file)

    try:
        return await COMMANDS[args.command](args, settings)
    except SourceError as e:
        logger.error("%s", e.message)
        return 1


__all__ = [
    "create_parser",
    "main_entry",
]
