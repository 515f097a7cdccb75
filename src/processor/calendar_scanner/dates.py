"""Weekday to calendar date resolution."""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from .config import DEFAULT_CONFIG, ScannerConfig
from .models import Weekday
from .time_range import parse_time_of_day


def next_weekday(weekday: Weekday, today: Optional[date] = None) -> date:
    """
    Next occurrence of ``weekday`` strictly after ``today``.

    If today already is that weekday the result is a week later.
    """
    today = today or date.today()
    days_ahead = (weekday.index - today.weekday()) % 7
    if days_ahead == 0:
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def combine_time(day: date, time_text: Optional[str]) -> datetime:
    """Combine a date with a time-of-day string; unparsable text gives midnight."""
    parsed = parse_time_of_day(time_text)
    return datetime.combine(day, parsed or time(0, 0))


def resolve_dates(
    weekday: Weekday,
    start_text: str,
    end_text: Optional[str],
    today: Optional[date] = None,
    config: ScannerConfig = DEFAULT_CONFIG,
) -> Tuple[datetime, datetime]:
    """
    Resolve start and end timestamps for an event on ``weekday``.

    A missing end time gives ``start + config.default_duration``.
    """
    day = next_weekday(weekday, today)
    start = combine_time(day, start_text)
    if end_text:
        end = combine_time(day, end_text)
    else:
        end = start + config.default_duration
    return start, end
