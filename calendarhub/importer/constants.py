"""Fixed messages and vocabularies for the calendar file importer."""

from datetime import timedelta

# Recognized extensions, checked in this order
ICS_EXTENSION = ".ics"
CSV_EXTENSION = ".csv"
JSON_EXTENSION = ".json"
SUPPORTED_EXTENSIONS = (ICS_EXTENSION, CSV_EXTENSION, JSON_EXTENSION)

# Placeholder names parsers report before the dispatcher sets the real one
ICS_DEFAULT_FILE_NAME = "ICS File"
CSV_DEFAULT_FILE_NAME = "CSV File"
JSON_DEFAULT_FILE_NAME = "JSON File"

# Structural file errors
UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format. Please use ICS, CSV, or JSON files."
FILE_READ_ERROR_MESSAGE = "Failed to read file"
CSV_INSUFFICIENT_DATA_MESSAGE = "CSV file does not contain enough data"
CSV_MISSING_COLUMNS_MESSAGE = "Required columns (title, start time) not found"

# Whole-file parse error prefixes
ICS_PARSE_ERROR = "ICS file parse error"
CSV_PARSE_ERROR = "CSV file parse error"
JSON_PARSE_ERROR = "JSON file parse error"

# ICS property vocabulary
ICS_BEGIN_EVENT = "BEGIN:VEVENT"
ICS_END_EVENT = "END:VEVENT"
ICS_SUMMARY = "SUMMARY:"
ICS_DESCRIPTION = "DESCRIPTION:"
ICS_DTSTART = "DTSTART:"
ICS_DTEND = "DTEND:"

# CSV header vocabulary (substring match on lower-cased header cells)
CSV_TITLE_KEYWORDS = ("title", "subject", "summary")
CSV_START_KEYWORDS = ("start",)
CSV_END_KEYWORDS = ("end",)
CSV_DESCRIPTION_KEYWORDS = ("description", "desc")

# Default duration when a CSV file has no end column
CSV_DEFAULT_DURATION = timedelta(hours=1)

# JSON key vocabulary: logical field -> alternate keys in priority order
JSON_EVENTS_KEY = "events"
JSON_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title", "summary"),
    "description": ("description",),
    "start": ("startDate", "start"),
    "end": ("endDate", "end"),
    "all_day": ("allDay",),
}
