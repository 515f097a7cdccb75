"""Calendar Scanner: events from photographed weekly calendar grids."""

__version__ = "0.1.0"

from .config import ScannerConfig
from .diagnostics import Decision, DecisionLog
from .layout import detect_columns, nearest_column
from .main import load_fragments, process_image, save_to_json, scan_fragments
from .models import BoundingBox, ScanDocument, ScannedEvent, TextFragment, TimeRange, Weekday
from .parser import CalendarGridParser
from .reconstructor import reconstruct
from .time_range import extract_time_range
from .utils import validate_document

__all__ = [
    'ScannerConfig',
    'Decision',
    'DecisionLog',
    'detect_columns',
    'nearest_column',
    'load_fragments',
    'process_image',
    'save_to_json',
    'scan_fragments',
    'BoundingBox',
    'ScanDocument',
    'ScannedEvent',
    'TextFragment',
    'TimeRange',
    'Weekday',
    'CalendarGridParser',
    'reconstruct',
    'extract_time_range',
    'validate_document',
]
