"""Date parsing for imported calendar records.

All parsed values are naive datetimes in local time. ICS timestamps use the
compact ``YYYYMMDD[THHMMSS[Z]]`` shape; CSV and JSON values go through
python-dateutil's generic parser.
"""

import logging
import re
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser

from .exceptions import RecordParseError

logger = logging.getLogger(__name__)

# Fill-in values for dateutil; a value that parses differently against the two
# is missing its year, month or day
FILL_IN_DEFAULTS = (datetime(2000, 1, 1), datetime(2011, 12, 31))

ICS_DATE_PATTERN = re.compile(
    r"^(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2})(?P<minute>\d{2})(?P<second>\d{2})Z?)?$"
)


def parse_ics_date(value: str) -> Optional[datetime]:
    """Parse a compact ICS date or date-time.

    ``YYYYMMDD`` yields local midnight. ``YYYYMMDDTHHMMSS`` yields those local
    components; a trailing ``Z`` is accepted but not converted from UTC.

    Returns:
        The parsed datetime, or None when the value is malformed or a field
        is out of range (e.g. month 13)
    """
    match = ICS_DATE_PATTERN.match(value.strip())
    if match is None:
        logger.debug("Unrecognized ICS date value: %r", value)
        return None

    fields = {name: int(part) for name, part in match.groupdict(default="0").items()}
    try:
        return datetime(**fields)
    except ValueError:
        logger.debug("Out-of-range ICS date value: %r", value)
        return None


def to_local_naive(dt: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def parse_datetime(value: Any, field: str = "date") -> datetime:
    """Parse a loosely formatted date value from CSV or JSON input.

    Strings are parsed with ``dateutil.parser.parse`` and must name a full
    calendar date; a bare time or a month without a year is rejected rather
    than completed from today. Numbers are epoch milliseconds; datetimes pass
    through.

    Raises:
        RecordParseError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return to_local_naive(value)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as e:
            raise RecordParseError(f"Invalid {field}: {value!r}") from e

    if not isinstance(value, str):
        raise RecordParseError(f"Invalid {field}: {value!r}")

    try:
        parsed = date_parser.parse(value, default=FILL_IN_DEFAULTS[0])
        check = date_parser.parse(value, default=FILL_IN_DEFAULTS[1])
    except (ValueError, OverflowError) as e:
        raise RecordParseError(f"Invalid {field}: {value!r}") from e

    if parsed != check:
        logger.debug("Date value lacks a full calendar date: %r", value)
        raise RecordParseError(f"Invalid {field}: {value!r}")

    return to_local_naive(parsed)
