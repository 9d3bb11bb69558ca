"""
timezone_utils.py: Timezone-aware parsing and display helpers

Command arguments arrive as "local-looking" strings such as ``2025-09-16T18:00``.
These helpers pin them to the organization's timezone, convert them to the UTC
instants the calendar provider expects, and render them back for announcements.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

import dateparser

from utils.error_handling import ValidationError

logger = logging.getLogger("calendarbot")

# Default timezone to use if none is specified
DEFAULT_TIMEZONE = "UTC"

# Common timezone mappings for user-friendly input
COMMON_TIMEZONE_ALIASES = {
    "est": "America/New_York",
    "cst": "America/Chicago",
    "mst": "America/Denver",
    "pst": "America/Los_Angeles",
    "edt": "America/New_York",
    "cdt": "America/Chicago",
    "mdt": "America/Denver",
    "pdt": "America/Los_Angeles",
    "gmt": "UTC",
    "utc": "UTC"
}

def get_timezone(tz_name: Optional[str]) -> ZoneInfo:
    """
    Get a ZoneInfo object for the specified timezone name.

    Args:
        tz_name: IANA timezone name or a common alias such as ``est``

    Returns:
        ZoneInfo object for the timezone

    Falls back to UTC if the timezone is invalid.
    """
    if not tz_name:
        return ZoneInfo(DEFAULT_TIMEZONE)

    name = tz_name.strip()
    name = COMMON_TIMEZONE_ALIASES.get(name.lower(), name)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Invalid timezone '{tz_name}', falling back to {DEFAULT_TIMEZONE}: {e}")
        return ZoneInfo(DEFAULT_TIMEZONE)

def parse_local_datetime(value: str, tz: Union[str, ZoneInfo]) -> datetime:
    """
    Parse a user-supplied date/time into an aware datetime.

    ISO 8601 strings carrying ``Z`` or an offset keep their own offset.
    Naive ISO strings are read as wall-clock time in ``tz``. Anything else
    ("tomorrow 6pm") goes through dateparser with ``tz`` as the reference zone.

    Raises:
        ValidationError: if the value is empty or cannot be understood
    """
    if isinstance(tz, str):
        tz = get_timezone(tz)
    text = (value or "").strip()
    if not text:
        raise ValidationError("A date/time value is required")

    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        dt = datetime.fromisoformat(iso_text)
    except ValueError:
        dt = dateparser.parse(text, settings={
            "TIMEZONE": tz.key,
            "RETURN_AS_TIMEZONE_AWARE": True,
            "PREFER_DATES_FROM": "future",
        })
        if dt is None:
            raise ValidationError(f"Invalid date/time: {value}")
        logger.debug(f"Parsed natural date '{text}' as {dt.isoformat()}")
        return dt

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt

def to_utc_rfc3339(dt: datetime) -> str:
    """Render an aware datetime as a UTC RFC 3339 timestamp (``...Z``)."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

def parse_provider_datetime(value: str) -> datetime:
    """Parse a provider ``dateTime`` field, which always carries an offset or ``Z``."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)

# Medium date ("Sep 16, 2025") and short time ("6:00 PM"), en-US style
def format_medium_date(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}, {d.year}"

def format_short_time(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.strftime('%M')} {'AM' if dt.hour < 12 else 'PM'}"

def format_when(dt: datetime, tz: Union[str, ZoneInfo]) -> str:
    """Format an instant as ``Sep 16, 2025, 6:00 PM`` in the given timezone."""
    if isinstance(tz, str):
        tz = get_timezone(tz)
    local = dt.astimezone(tz)
    return f"{format_medium_date(local.date())}, {format_short_time(local)}"
