"""
Numeric and timestamp helpers for energy schedule generation.

All instants are handled as timezone-aware datetimes in UTC internally and only
converted to local wall time when formatted.
"""

import logging
import math
import re
from datetime import datetime, timedelta, timezone

import pytz

logger = logging.getLogger(__name__)

HOUR_SECONDS = 3600
MILLIS_PER_HOUR = 3_600_000

# Reference timezone for human-readable times
DISPLAY_TIMEZONE = "America/New_York"

_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):(\d{2})$")


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the closed interval [low, high]."""
    return max(low, min(high, value))


def get_number(value, fallback: float = 0.0) -> float:
    """
    Coerce a JSON value to a finite float.

    Accepts ints, floats and numeric strings. Anything else (None, booleans,
    NaN, infinities, non-numeric strings, containers) returns the fallback.
    """
    if isinstance(value, bool) or value is None:
        return fallback
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip() or "nan")
        except ValueError:
            return fallback
    else:
        return fallback
    return number if math.isfinite(number) else fallback


def parse_timezone_offset_minutes(offset) -> int:
    """
    Parse a "+HH:MM" / "-HH:MM" offset into signed minutes.

    Malformed, out-of-range (hours > 23, minutes > 59) or non-string offsets
    are treated as UTC.

    Examples:
        "-05:00" -> -300
        "+01:30" -> 90
    """
    if not isinstance(offset, str):
        return 0
    match = _OFFSET_PATTERN.match(offset)
    hours = int(match.group(2)) if match else 0
    minutes = int(match.group(3)) if match else 0
    if not match or hours > 23 or minutes > 59:
        logger.warning("Malformed timezone offset %r, assuming UTC", offset)
        return 0
    sign = -1 if match.group(1) == "-" else 1
    return sign * (hours * 60 + minutes)


def parse_instant(value) -> datetime | None:
    """
    Parse an ISO-8601 timestamp (or datetime) into an aware UTC datetime.

    A trailing "Z" is accepted. Naive timestamps are read as UTC.
    Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def hours_between(start: datetime, end: datetime) -> float:
    """Hours from start to end (negative if end is earlier)."""
    return (end - start).total_seconds() / HOUR_SECONDS


def add_hours(instant: datetime, hours: float) -> datetime:
    """Shift an instant by a (possibly fractional) number of hours."""
    return instant + timedelta(hours=hours)


def format_iso_with_offset(instant: datetime, offset_minutes: int) -> str:
    """
    Format an instant as local wall time at a fixed UTC offset.

    Example: 2022-04-24T10:25:44Z at -300 -> "2022-04-24T05:25:44.000-05:00"
    """
    tz = timezone(timedelta(minutes=offset_minutes))
    return instant.astimezone(tz).isoformat(timespec="milliseconds")


def ordinal_suffix(day: int) -> str:
    """English ordinal suffix for a day of month (1st, 2nd, 3rd, 11th...)."""
    if day % 10 == 1 and day % 100 != 11:
        return "st"
    if day % 10 == 2 and day % 100 != 12:
        return "nd"
    if day % 10 == 3 and day % 100 != 13:
        return "rd"
    return "th"


def format_display_time(instant: datetime, tz_name: str = DISPLAY_TIMEZONE) -> str:
    """
    Format an instant as user-facing 12-hour text in the display timezone.

    Example: "Sunday, April 24th 5:55AM"
    """
    local = instant.astimezone(pytz.timezone(tz_name))
    hour = local.hour
    period = "AM" if hour < 12 else "PM"
    if hour == 0:
        hour = 12
    elif hour > 12:
        hour -= 12
    return (
        f"{local.strftime('%A')}, {local.strftime('%B')} "
        f"{local.day}{ordinal_suffix(local.day)} {hour}:{local.minute:02d}{period}"
    )
