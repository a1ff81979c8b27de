"""Command-line argument parsing for CalendarHub."""

import argparse
from pathlib import Path

from calendarhub import __version__


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    logging_group = parser.add_argument_group("logging", "Logging configuration options")

    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Set log level for both console and file output",
    )

    verbosity = logging_group.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging (VERBOSE level)"
    )
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="Only show errors on the console"
    )

    logging_group.add_argument(
        "--log-dir", type=Path, help="Enable file logging into this directory"
    )
    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console output"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the ``calendarhub`` argument parser.

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["import", "work.ics", "--source", "outlook"])
        >>> args.command
        'import'
    """
    parser = argparse.ArgumentParser(
        prog="calendarhub",
        description="CalendarHub - unified calendar with ICS, CSV and JSON import",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s import work.ics personal.csv        # Import into the default source
  %(prog)s import events.json --source apple   # Import into a specific source
  %(prog)s serve --port 3000                   # Run the HTTP API on port 3000
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", type=Path, metavar="PATH", help="Path to a YAML configuration file"
    )
    _add_logging_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    import_parser = subparsers.add_parser(
        "import", help="Import calendar files and print a summary per file"
    )
    import_parser.add_argument(
        "files", nargs="+", type=Path, metavar="FILE", help="ICS, CSV or JSON files"
    )
    import_parser.add_argument(
        "--source", metavar="ID", help="Source that receives the imported events"
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument("--host", help="Host address to bind (overrides config)")
    serve_parser.add_argument("--port", type=int, help="Port to listen on (overrides config)")

    return parser
