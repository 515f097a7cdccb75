from __future__ import annotations

import shutil
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session

from calendar_scanner.database import (
    APP_MARKER,
    REMINDER_MINUTES,
    CalendarEvent,
    ScanSource,
    create_tables,
    delete_app_created_events,
    get_db_engine,
    save_events,
)
from calendar_scanner.models import ScannedEvent

NOW = datetime(2026, 10, 14, 8, 0)


class TestCalendarStore(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = Path(tempfile.mkdtemp())
        self.engine = get_db_engine(str(self.tmp / "store" / "calendar.sqlite"))
        create_tables(self.engine)

    def tearDown(self) -> None:
        self.engine.dispose()
        shutil.rmtree(self.tmp)

    def test_save_events_defaults_end_and_marks_rows(self) -> None:
        events = [
            ScannedEvent(title="Gym", start_date=datetime(2026, 10, 19, 18, 0)),
            ScannedEvent(
                title="Team Sync",
                start_date=datetime(2026, 10, 20, 9, 0),
                end_date=datetime(2026, 10, 20, 9, 30),
            ),
        ]
        summary = save_events(self.engine, events, file_path="week.jpg")

        self.assertEqual((summary.saved, summary.failed), (2, 0))
        with Session(self.engine) as session:
            rows = session.scalars(select(CalendarEvent).order_by(CalendarEvent.start)).all()
            self.assertEqual([r.title for r in rows], ["Gym", "Team Sync"])
            self.assertEqual(rows[0].end, datetime(2026, 10, 19, 19, 0))
            self.assertEqual(rows[1].end, datetime(2026, 10, 20, 9, 30))
            self.assertTrue(all(r.notes == APP_MARKER for r in rows))
            self.assertTrue(all(r.alarm_offset_minutes == REMINDER_MINUTES for r in rows))
            self.assertEqual(rows[0].event_uid, events[0].id)

            source = session.get(ScanSource, summary.source_id)
            self.assertEqual(source.file_path, "week.jpg")

    def test_delete_only_app_events_within_a_month(self) -> None:
        save_events(self.engine, [
            ScannedEvent(title="Soon", start_date=NOW + timedelta(days=3)),
            ScannedEvent(title="Later", start_date=NOW + timedelta(days=45)),
            ScannedEvent(title="Past", start_date=NOW - timedelta(days=1)),
        ])
        with Session(self.engine) as session:
            session.add(CalendarEvent(
                event_uid="manual",
                title="Dentist",
                start=NOW + timedelta(days=2),
                end=NOW + timedelta(days=2, hours=1),
                notes="booked by phone",
            ))
            session.commit()

        deleted = delete_app_created_events(self.engine, now=NOW)

        self.assertEqual(deleted, 1)
        with Session(self.engine) as session:
            titles = set(session.scalars(select(CalendarEvent.title)).all())
        self.assertEqual(titles, {"Later", "Past", "Dentist"})


if __name__ == "__main__":
    unittest.main()
