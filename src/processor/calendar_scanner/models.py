"""Data models for calendar grid scanning."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .diagnostics import Decision


class Weekday(Enum):
    """Enumeration for days of the week, keyed by header abbreviation."""
    MONDAY = "Mon"
    TUESDAY = "Tue"
    WEDNESDAY = "Wed"
    THURSDAY = "Thu"
    FRIDAY = "Fri"
    SATURDAY = "Sat"
    SUNDAY = "Sun"

    @property
    def index(self) -> int:
        """Position in the week, Monday = 0 (same as ``date.weekday()``)."""
        return list(Weekday).index(self)

    @classmethod
    def from_index(cls, index: int) -> 'Weekday':
        return list(cls)[index % 7]


@dataclass(frozen=True)
class BoundingBox:
    """Normalized rectangle, both axes in [0, 1], origin bottom-left."""
    x_center: float
    y_center: float
    width: float = 0.0
    height: float = 0.0

    @property
    def mid_x(self) -> float:
        return self.x_center

    @property
    def mid_y(self) -> float:
        return self.y_center

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> 'BoundingBox':
        return BoundingBox(
            x_center=float(d["x_center"]),
            y_center=float(d["y_center"]),
            width=float(d.get("width", 0.0)),
            height=float(d.get("height", 0.0)),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "x_center": self.x_center,
            "y_center": self.y_center,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class TextFragment:
    """One recognized text span with its bounding box."""
    text: str
    bbox: BoundingBox
    confidence: Optional[float] = None

    @property
    def x(self) -> float:
        return self.bbox.mid_x

    @property
    def y(self) -> float:
        return self.bbox.mid_y

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> 'TextFragment':
        confidence = d.get("confidence")
        return TextFragment(
            text=str(d.get("text", "")),
            bbox=BoundingBox.from_dict(d["bbox"]),
            confidence=None if confidence is None else float(confidence),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "bbox": self.bbox.to_dict(),
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class TimeRange:
    """Start/end time-of-day strings as written in the source text."""
    start: str
    end: Optional[str] = None

    def __str__(self) -> str:
        if self.end:
            return f"{self.start}-{self.end}"
        return self.start


@dataclass(frozen=True)
class CandidateEvent:
    """Event assembled around one time carrier, before date resolution."""
    title: str
    start_time_of_day: str
    end_time_of_day: Optional[str]
    x_position: float
    y_position: float
    location: Optional[str] = None
    source_text: str = ""


@dataclass(frozen=True)
class ScannedEvent:
    """Final event with concrete start/end timestamps."""
    title: str
    start_date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    weekday: Optional[Weekday] = None
    source_text: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def effective_end(self) -> datetime:
        """End timestamp, defaulting to one hour after the start."""
        if self.end_date is not None:
            return self.end_date
        return self.start_date + timedelta(hours=1)

    def dedup_key(self) -> Tuple[str, datetime, Optional[datetime]]:
        return (self.title, self.start_date, self.end_date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "location": self.location,
            "weekday": self.weekday.value if self.weekday else None,
            "source_text": self.source_text,
        }

    def __str__(self) -> str:
        day = self.weekday.value if self.weekday else "?"
        return f"{day} {self.start_date:%Y-%m-%d %H:%M}-{self.effective_end:%H:%M}: {self.title}"


@dataclass
class ScanDocument:
    """Result of one scan: events plus the layout and decisions behind them."""
    events: List[ScannedEvent] = field(default_factory=list)
    columns: Dict[float, Weekday] = field(default_factory=dict)
    fragment_count: int = 0
    decisions: List[Decision] = field(default_factory=list)
    # Title given to events with no text above them
    untitled_title: str = "Untitled Event"

    # Metadata
    file_path: Optional[str] = None
    extraction_timestamp: Optional[str] = None

    @property
    def status(self) -> str:
        """``empty_input``, ``no_events`` or ``ok``."""
        if self.fragment_count == 0:
            return "empty_input"
        if not self.events:
            return "no_events"
        return "ok"

    def sorted_events(self) -> List[ScannedEvent]:
        return sorted(self.events, key=lambda e: e.start_date)

    def get_events_by_day(self, weekday: Weekday) -> List[ScannedEvent]:
        """Get all events for a specific weekday."""
        return [event for event in self.events if event.weekday == weekday]

    def __len__(self) -> int:
        return len(self.events)
