"""Calendar store: SQLite persistence for accepted events."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session

from .models import ScannedEvent

# Written into every stored event so app-created events can be found again
APP_MARKER = "Created by Calendar Scanner"
REMINDER_MINUTES = 15


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class ScanSource(Base):
    """The photo a batch of events was scanned from."""
    __tablename__ = "scan_sources"

    id = Column(Integer, primary_key=True)
    file_path = Column(String(500), nullable=True)
    processed_at = Column(DateTime, nullable=False)


class CalendarEvent(Base):
    """One event written to the calendar."""
    __tablename__ = "calendar_events"

    id = Column(Integer, primary_key=True)
    source_id = Column(Integer, ForeignKey("scan_sources.id"), nullable=True)
    event_uid = Column(String(36), nullable=False)
    title = Column(String(500), nullable=False)
    start = Column(DateTime, nullable=False)
    end = Column(DateTime, nullable=False)
    location = Column(String(500), nullable=True)
    notes = Column(String(500), nullable=True)
    alarm_offset_minutes = Column(Integer, nullable=True)


@dataclass(frozen=True)
class SaveSummary:
    """Outcome of a bulk save."""
    saved: int
    failed: int
    source_id: Optional[int] = None


def get_db_engine(db_path: str = "calendar.sqlite"):
    """
    Create and return a SQLAlchemy Engine connected to a SQLite database.

    Args:
        db_path: Path to the SQLite file, or ":memory:" for an in-memory store

    Returns:
        sqlalchemy.Engine: Database engine instance
    """
    if db_path == ":memory:":
        return create_engine("sqlite://", echo=False)

    full_db_path = Path(db_path).expanduser().resolve()
    full_db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{full_db_path}", echo=False)


def create_tables(engine) -> None:
    """
    Create all database tables defined in Base.metadata.

    Args:
        engine: SQLAlchemy Engine instance
    """
    Base.metadata.create_all(engine)


def save_event(session: Session, event: ScannedEvent, source_id: Optional[int] = None) -> CalendarEvent:
    """
    Add one scanned event to the session.

    The end defaults to an hour after the start, and a 15 minute reminder is
    attached. The caller commits.
    """
    row = CalendarEvent(
        source_id=source_id,
        event_uid=event.id,
        title=event.title,
        start=event.start_date,
        end=event.effective_end,
        location=event.location,
        notes=APP_MARKER,
        alarm_offset_minutes=REMINDER_MINUTES,
    )
    session.add(row)
    return row


def save_events(engine, events: Iterable[ScannedEvent], file_path: Optional[str] = None) -> SaveSummary:
    """
    Save all events, committing each one separately.

    A failing event is rolled back and counted; the rest are still saved.

    Args:
        engine: SQLAlchemy Engine instance
        events: Events to save
        file_path: Source photo, recorded once as a ScanSource

    Returns:
        SaveSummary with saved/failed counts and the source id
    """
    saved = 0
    failed = 0

    with Session(engine) as session:
        source = ScanSource(file_path=file_path, processed_at=datetime.now())
        session.add(source)
        session.commit()
        source_id = source.id

        for event in events:
            try:
                save_event(session, event, source_id=source_id)
                session.commit()
                saved += 1
                print(f"✓ Event saved: {event.title}")
            except SQLAlchemyError as e:
                session.rollback()
                failed += 1
                print(f"✗ Failed to save event '{event.title}': {e}")

    print(f"✓ Added {saved} events to calendar (Failed: {failed})")
    return SaveSummary(saved=saved, failed=failed, source_id=source_id)


def delete_app_created_events(engine, now: Optional[datetime] = None) -> int:
    """
    Delete events this app created that start within the next month.

    Args:
        engine: SQLAlchemy Engine instance
        now: Start of the search window (default: now)

    Returns:
        Number of deleted events
    """
    start = now or datetime.now()
    end = start + relativedelta(months=1)

    with Session(engine) as session:
        rows = session.scalars(
            select(CalendarEvent)
            .where(CalendarEvent.start >= start)
            .where(CalendarEvent.start <= end)
        ).all()

        deleted = 0
        for row in rows:
            if row.notes and APP_MARKER in row.notes:
                session.delete(row)
                deleted += 1
        session.commit()

    print(f"✓ Deleted {deleted} app-created events")
    return deleted
