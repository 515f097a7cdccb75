"""Column detection from weekday header fragments."""

from typing import Dict, Iterable, Optional

from .config import DEFAULT_CONFIG, ScannerConfig
from .diagnostics import DecisionLog, record
from .models import TextFragment, Weekday


def header_weekday(text: str, config: ScannerConfig = DEFAULT_CONFIG) -> Optional[Weekday]:
    """Return the weekday a header fragment names, or None for any other text."""
    if not text or not isinstance(text, str):
        return None
    key = text.strip().lower()
    for idx, label in enumerate(config.header_labels):
        if key == str(label).strip().lower():
            return Weekday.from_index(idx)
    return None


def detect_columns(
    fragments: Iterable[TextFragment],
    config: Optional[ScannerConfig] = None,
    trace: Optional[DecisionLog] = None,
) -> Dict[float, Weekday]:
    """
    Build the column map from weekday header fragments.

    Collision policy: the first header seen wins. A header within
    ``column_merge_tolerance`` of an existing anchor for the same day is
    folded into that anchor; a header at exactly the x of another day's
    anchor is ignored.

    Args:
        fragments: All recognized fragments of the page
        config: Scanner configuration
        trace: Optional decision log

    Returns:
        Mapping of header x-position to weekday (possibly empty)
    """
    config = config or DEFAULT_CONFIG
    config.validate()

    columns: Dict[float, Weekday] = {}

    for fragment in fragments:
        day = header_weekday(fragment.text, config)
        if day is None:
            continue

        x = fragment.x

        existing = columns.get(x)
        if existing is not None and existing != day:
            record(trace, "layout", "column_conflict",
                   x=x, kept=existing.value, ignored=day.value)
            continue

        merged_into = None
        for anchor_x, anchor_day in columns.items():
            if anchor_day == day and abs(anchor_x - x) <= config.column_merge_tolerance:
                merged_into = anchor_x
                break

        if merged_into is not None:
            record(trace, "layout", "column_merged", x=x, into=merged_into, day=day.value)
            continue

        columns[x] = day
        record(trace, "layout", "column", x=x, day=day.value)

    return columns


def nearest_column(
    columns: Dict[float, Weekday],
    x: float,
    max_distance: Optional[float] = None,
) -> Optional[Weekday]:
    """
    Find the weekday whose column anchor is horizontally closest to ``x``.

    Without ``max_distance`` the nearest anchor always wins. Ties go to the
    leftmost anchor.
    """
    if not columns:
        return None

    best_x = min(sorted(columns), key=lambda anchor_x: abs(anchor_x - x))
    if max_distance is not None and abs(best_x - x) > max_distance:
        return None
    return columns[best_x]
