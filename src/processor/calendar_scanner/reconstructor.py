"""Event reconstruction from time carriers and the column map."""

from datetime import date
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .config import DEFAULT_CONFIG, ScannerConfig
from .dates import resolve_dates
from .diagnostics import DecisionLog, record
from .layout import nearest_column
from .models import CandidateEvent, ScannedEvent, TextFragment, TimeRange, Weekday
from .proximity import find_location, find_title, title_candidates
from .time_range import extract_time_range

ObservationKey = Tuple[float, float, str, Optional[str]]


def observation_key(
    fragment: TextFragment,
    time_range: TimeRange,
    precision: int = DEFAULT_CONFIG.position_precision,
) -> ObservationKey:
    """Key identifying one visual time token: rounded center plus its times."""
    return (
        round(fragment.x, precision),
        round(fragment.y, precision),
        time_range.start,
        time_range.end,
    )


def build_candidate(
    carrier: TextFragment,
    time_range: TimeRange,
    candidates: Sequence[TextFragment],
    config: ScannerConfig = DEFAULT_CONFIG,
) -> CandidateEvent:
    """Assemble title and location around a time carrier."""
    return CandidateEvent(
        title=find_title(carrier, candidates, config),
        start_time_of_day=time_range.start,
        end_time_of_day=time_range.end,
        x_position=carrier.x,
        y_position=carrier.y,
        location=find_location(carrier, candidates, config),
        source_text=carrier.text,
    )


def reconstruct(
    fragments: Sequence[TextFragment],
    columns: Dict[float, Weekday],
    today: Optional[date] = None,
    config: Optional[ScannerConfig] = None,
    trace: Optional[DecisionLog] = None,
) -> List[ScannedEvent]:
    """
    Turn time carriers into dated events.

    Events are returned in discovery order; sorting is left to the caller.
    A carrier with no column to land in is dropped.

    Args:
        fragments: All recognized fragments of the page
        columns: Column map from ``detect_columns``
        today: Reference date for weekday resolution (default: today)
        config: Scanner configuration
        trace: Optional decision log

    Returns:
        Deduplicated list of ScannedEvent
    """
    config = config or DEFAULT_CONFIG
    config.validate()

    fragments = list(fragments)
    candidates = title_candidates(fragments, config)

    seen_observations: Set[ObservationKey] = set()
    seen_events: Set[Tuple] = set()
    events: List[ScannedEvent] = []

    for carrier in fragments:
        time_range = extract_time_range(carrier.text)
        if time_range is None:
            continue

        key = observation_key(carrier, time_range, config.position_precision)
        if key in seen_observations:
            record(trace, "reconstruct", "duplicate_observation", text=carrier.text, key=key)
            continue
        seen_observations.add(key)
        record(trace, "reconstruct", "time_carrier",
               text=carrier.text, start=time_range.start, end=time_range.end,
               range=str(time_range))

        candidate = build_candidate(carrier, time_range, candidates, config)
        record(trace, "reconstruct", "title", text=carrier.text, title=candidate.title)

        weekday = nearest_column(columns, candidate.x_position, config.max_column_distance)
        if weekday is None:
            record(trace, "reconstruct", "no_column", text=carrier.text, x=candidate.x_position)
            continue

        start, end = resolve_dates(
            weekday,
            candidate.start_time_of_day,
            candidate.end_time_of_day,
            today=today,
            config=config,
        )

        event = ScannedEvent(
            title=candidate.title,
            start_date=start,
            end_date=end,
            location=candidate.location,
            weekday=weekday,
            source_text=candidate.source_text,
        )

        if event.dedup_key() in seen_events:
            record(trace, "reconstruct", "duplicate_event",
                   title=event.title, start=start.isoformat())
            continue
        seen_events.add(event.dedup_key())

        events.append(event)
        record(trace, "reconstruct", "event",
               title=event.title, day=weekday.value, start=start.isoformat(), end=end.isoformat())

    return events
