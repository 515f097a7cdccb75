from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta

from calendar_scanner.config import ScannerConfig
from calendar_scanner.dates import combine_time, next_weekday, resolve_dates
from calendar_scanner.models import ScannedEvent, Weekday


class TestNextWeekday(unittest.TestCase):
    def test_never_returns_today(self) -> None:
        start = date(2026, 10, 12)  # Monday
        for offset in range(14):
            today = start + timedelta(days=offset)
            same_day = Weekday.from_index(today.weekday())
            self.assertEqual(next_weekday(same_day, today), today + timedelta(days=7))

    def test_always_within_next_seven_days(self) -> None:
        today = date(2026, 10, 14)  # Wednesday
        expected = {
            Weekday.MONDAY: date(2026, 10, 19),
            Weekday.TUESDAY: date(2026, 10, 20),
            Weekday.WEDNESDAY: date(2026, 10, 21),
            Weekday.THURSDAY: date(2026, 10, 15),
            Weekday.FRIDAY: date(2026, 10, 16),
            Weekday.SATURDAY: date(2026, 10, 17),
            Weekday.SUNDAY: date(2026, 10, 18),
        }
        for day, resolved in expected.items():
            self.assertEqual(next_weekday(day, today), resolved)
            self.assertEqual(resolved.weekday(), day.index)

    def test_year_boundary(self) -> None:
        self.assertEqual(next_weekday(Weekday.FRIDAY, date(2026, 12, 31)), date(2027, 1, 1))


class TestResolveDates(unittest.TestCase):
    def test_missing_end_defaults_to_one_hour(self) -> None:
        start, end = resolve_dates(Weekday.FRIDAY, "9:30 am", None, today=date(2026, 10, 14))
        self.assertEqual(start, datetime(2026, 10, 16, 9, 30))
        self.assertEqual(end, start + timedelta(hours=1))

    def test_configured_default_duration(self) -> None:
        cfg = ScannerConfig(default_duration=timedelta(minutes=30))
        start, end = resolve_dates(Weekday.FRIDAY, "9:30", None, today=date(2026, 10, 14), config=cfg)
        self.assertEqual(end - start, timedelta(minutes=30))

    def test_combine_time_midnight_fallback(self) -> None:
        self.assertEqual(combine_time(date(2026, 10, 16), "noon"), datetime(2026, 10, 16, 0, 0))

    def test_effective_end_of_open_ended_event(self) -> None:
        event = ScannedEvent(title="Call", start_date=datetime(2026, 10, 16, 9, 0))
        self.assertIsNone(event.end_date)
        self.assertEqual(event.effective_end, datetime(2026, 10, 16, 10, 0))

    def test_event_ids_are_unique(self) -> None:
        a = ScannedEvent(title="Call", start_date=datetime(2026, 10, 16, 9, 0))
        b = ScannedEvent(title="Call", start_date=datetime(2026, 10, 16, 9, 0))
        self.assertNotEqual(a.id, b.id)
        self.assertEqual(a.dedup_key(), b.dedup_key())


if __name__ == "__main__":
    unittest.main()
