"""Proximity search for the text that belongs to a time carrier."""

from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, ScannerConfig
from .layout import header_weekday
from .models import TextFragment
from .time_range import extract_time_range


def title_candidates(
    fragments: Sequence[TextFragment],
    config: ScannerConfig = DEFAULT_CONFIG,
) -> List[TextFragment]:
    """Fragments that are neither time carriers nor weekday headers."""
    return [
        f for f in fragments
        if extract_time_range(f.text) is None and header_weekday(f.text, config) is None
    ]


def title_block(
    carrier: TextFragment,
    candidates: Sequence[TextFragment],
    config: ScannerConfig = DEFAULT_CONFIG,
) -> List[TextFragment]:
    """
    Collect the fragments forming the title block above ``carrier``.

    A fragment qualifies when it sits strictly above the carrier, within
    ``title_x_tolerance`` of its horizontal center and at most
    ``title_max_distance`` above it. The closest qualifying fragment anchors
    the block; every qualifying fragment within ``title_line_gap`` of the
    anchor joins it, so wrapped titles come back whole.

    Returns:
        Block fragments ordered top to bottom (empty if none qualify)
    """
    qualifying = []
    for fragment in candidates:
        dy = fragment.y - carrier.y
        if dy <= 0:
            continue
        if abs(fragment.x - carrier.x) > config.title_x_tolerance:
            continue
        if dy > config.title_max_distance:
            continue
        qualifying.append(fragment)

    if not qualifying:
        return []

    anchor = min(qualifying, key=lambda f: f.y - carrier.y)
    block = [f for f in qualifying if abs(f.y - anchor.y) <= config.title_line_gap]
    block.sort(key=lambda f: f.y, reverse=True)
    return block


def find_title(
    carrier: TextFragment,
    candidates: Sequence[TextFragment],
    config: ScannerConfig = DEFAULT_CONFIG,
) -> str:
    """Title text for ``carrier``, or ``config.untitled_title`` when none is found."""
    block = title_block(carrier, candidates, config)
    title = ' '.join(part for part in (f.text.strip() for f in block) if part)
    return title or config.untitled_title


def find_location(
    carrier: TextFragment,
    candidates: Sequence[TextFragment],
    config: ScannerConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """
    Location text below ``carrier``.

    No location search is performed yet; None is the final answer for every
    event, not a placeholder for a missing value.
    """
    return None
