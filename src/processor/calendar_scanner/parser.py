"""Parser turning recognized calendar-grid fragments into a ScanDocument."""

from datetime import date, datetime
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG, ScannerConfig
from .diagnostics import DecisionLog
from .layout import detect_columns
from .models import ScanDocument, TextFragment
from .reconstructor import reconstruct


class CalendarGridParser:
    """Runs column detection and event reconstruction over one page of fragments.

    The parser holds configuration only; every call builds its own column map
    and decision log, so one instance can be shared between threads.
    """

    def __init__(self, config: Optional[ScannerConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

    def parse(
        self,
        fragments: Sequence[TextFragment],
        today: Optional[date] = None,
        file_path: Optional[str] = None,
    ) -> ScanDocument:
        """
        Parse fragments into a document of events.

        Args:
            fragments: Recognized fragments, in any order
            today: Reference date for weekday resolution (default: today)
            file_path: Source image path, if any

        Returns:
            ScanDocument; events are in discovery order
        """
        fragments = list(fragments)
        trace = DecisionLog()

        columns = detect_columns(fragments, self.config, trace)
        events = reconstruct(fragments, columns, today=today, config=self.config, trace=trace)

        return ScanDocument(
            events=events,
            columns=columns,
            fragment_count=len(fragments),
            decisions=list(trace.decisions),
            untitled_title=self.config.untitled_title,
            file_path=file_path,
            extraction_timestamp=datetime.now().isoformat(),
        )
