"""Time-range extraction from recognized text."""

import re
from datetime import datetime, time
from typing import Optional

from .models import TimeRange

# "9:00 am - 10:00 am", "7:30-8:30", "1:15PM – 2:00PM"
TIME_RANGE_RE = re.compile(
    r'(?<!\d)(\d{1,2}:\d{2})(?:\s*(am|pm)\b)?\s*[-–]\s*(\d{1,2}:\d{2})(?:\s*(am|pm)\b)?',
    re.IGNORECASE,
)

_TWELVE_HOUR_FORMAT = '%I:%M %p'
_TWENTY_FOUR_HOUR_FORMAT = '%H:%M'


def _with_marker(clock: str, marker: Optional[str]) -> str:
    if marker:
        return f"{clock} {marker}"
    return clock


def extract_time_range(text: str) -> Optional[TimeRange]:
    """
    Find the first time range in ``text``.

    Each side keeps only the am/pm marker written next to it; a marker is
    never copied from one side to the other.

    Args:
        text: Raw recognized text

    Returns:
        TimeRange or None if the text holds no range
    """
    if not text or not isinstance(text, str):
        return None

    match = TIME_RANGE_RE.search(text)
    if not match:
        return None

    start_clock, start_marker, end_clock, end_marker = match.groups()
    return TimeRange(
        start=_with_marker(start_clock, start_marker),
        end=_with_marker(end_clock, end_marker),
    )


def parse_time_of_day(text: Optional[str]) -> Optional[time]:
    """
    Parse "9:00 am" (12-hour) or "14:30" (24-hour) into a time.

    Returns None when neither format applies.
    """
    if not text:
        return None

    value = ' '.join(text.split())
    for fmt in (_TWELVE_HOUR_FORMAT, _TWENTY_FOUR_HOUR_FORMAT):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return None
