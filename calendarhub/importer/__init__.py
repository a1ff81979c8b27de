"""Multi-format calendar file import (ICS, CSV, JSON)."""

from .batch import import_calendar_files
from .csv_parser import CSVImportParser, parse_csv_file
from .dates import parse_datetime, parse_ics_date
from .dispatcher import detect_parser, import_calendar_file, parse_calendar_content
from .exceptions import (
    CalendarImportError,
    FileReadError,
    RecordParseError,
)
from .files import CalendarFile, InMemoryFile, LocalFile
from .ics_parser import ICSImportParser, parse_ics_file
from .json_parser import JSONImportParser, parse_json_file

__all__ = [
    "CSVImportParser",
    "CalendarFile",
    "CalendarImportError",
    "FileReadError",
    "ICSImportParser",
    "InMemoryFile",
    "JSONImportParser",
    "LocalFile",
    "RecordParseError",
    "detect_parser",
    "import_calendar_file",
    "import_calendar_files",
    "parse_calendar_content",
    "parse_csv_file",
    "parse_datetime",
    "parse_ics_date",
    "parse_ics_file",
    "parse_json_file",
]
