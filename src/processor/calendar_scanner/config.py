"""Scanner thresholds and defaults."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

WEEKDAY_HEADERS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


@dataclass(frozen=True)
class ScannerConfig:
    """
    Layout inference parameters.

    All distances are in normalized page units (both axes span [0, 1]).
    Defaults are explicit constants so results are reproducible.
    """

    header_labels: Tuple[str, ...] = WEEKDAY_HEADERS

    # Title block search above a time carrier
    title_x_tolerance: float = 0.06
    title_max_distance: float = 0.08
    title_line_gap: float = 0.03

    # Observation key rounding (decimal places)
    position_precision: int = 3

    # Header fragments of the same day closer than this share one column
    column_merge_tolerance: float = 0.01
    # None keeps the nearest column regardless of distance
    max_column_distance: Optional[float] = None

    default_duration: timedelta = timedelta(hours=1)
    untitled_title: str = "Untitled Event"

    def validate(self) -> None:
        labels = [str(label).strip().lower() for label in self.header_labels]
        if len(labels) != 7 or len(set(labels)) != 7 or not all(labels):
            raise ValueError("header_labels must hold 7 distinct, non-empty weekday labels")
        if self.title_x_tolerance < 0:
            raise ValueError("title_x_tolerance must be >= 0")
        if self.title_max_distance <= 0:
            raise ValueError("title_max_distance must be > 0")
        if self.title_line_gap < 0:
            raise ValueError("title_line_gap must be >= 0")
        if self.position_precision < 0:
            raise ValueError("position_precision must be >= 0")
        if self.column_merge_tolerance < 0:
            raise ValueError("column_merge_tolerance must be >= 0")
        if self.max_column_distance is not None and self.max_column_distance < 0:
            raise ValueError("max_column_distance must be >= 0 or None")
        if self.default_duration <= timedelta(0):
            raise ValueError("default_duration must be positive")
        if not self.untitled_title.strip():
            raise ValueError("untitled_title must not be blank")


DEFAULT_CONFIG = ScannerConfig()
