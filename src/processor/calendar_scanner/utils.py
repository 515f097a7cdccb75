"""Validation and utility functions for calendar scanning."""

import re
from pathlib import Path
from typing import List

from .models import ScanDocument, Weekday

SUPPORTED_IMAGE_FORMATS = {'.png', '.jpg', '.jpeg', '.bmp', '.tiff', '.tif', '.webp'}
FRAGMENT_FILE_EXTENSIONS = {'.json'}
SCANNABLE_EXTENSIONS = SUPPORTED_IMAGE_FORMATS | FRAGMENT_FILE_EXTENSIONS

# Command-line options that consume the following argument
VALUE_OPTIONS = {'--output', '--db'}


class ValidationError(Exception):
    """Raised when an input file cannot be scanned."""
    pass


def validate_file_path(file_path: str, supported_extensions: set) -> Path:
    """
    Validate file path and extension.

    Args:
        file_path: Path to validate
        supported_extensions: Set of supported file extensions

    Returns:
        Validated Path object

    Raises:
        ValidationError: If validation fails
    """
    path = Path(file_path)

    if not path.exists():
        raise ValidationError(f"File not found: {path}")

    if not path.is_file():
        raise ValidationError(f"Path is not a file: {path}")

    if path.suffix.lower() not in supported_extensions:
        raise ValidationError(
            f"Unsupported file format: {path.suffix}. "
            f"Supported formats: {', '.join(sorted(supported_extensions))}"
        )

    return path


def positional_args(argv: List[str], value_options: set = VALUE_OPTIONS) -> List[str]:
    """Arguments that are neither options nor the values of ``value_options``."""
    positional = []
    skip_next = False
    for arg in argv:
        if skip_next:
            skip_next = False
            continue
        if arg in value_options:
            skip_next = True
        elif not arg.startswith('--'):
            positional.append(arg)
    return positional


def sanitize_text(text: str) -> str:
    """Collapse whitespace and drop NUL characters."""
    if not text:
        return ""
    text = re.sub(r'\s+', ' ', text)
    text = text.replace('\x00', '')
    return text.strip()


def validate_document(document: ScanDocument) -> List[str]:
    """
    Validate a scan result and return warnings.

    An empty photo and a photo whose text yielded no events get different
    messages, since only the second points at a layout problem.

    Args:
        document: ScanDocument to validate

    Returns:
        List of validation warning messages
    """
    warnings = []

    if document.status == "empty_input":
        warnings.append("No text was recognized in the image")
        return warnings

    if not document.columns:
        warnings.append("No weekday headers (Mon..Sun) were detected")

    if document.status == "no_events":
        warnings.append("Text was recognized but no events were detected")
        return warnings

    untitled = sum(1 for e in document.events if e.title == document.untitled_title)
    if untitled:
        warnings.append(f"{untitled} events have no title")

    dropped = sum(1 for d in document.decisions if d.action == "no_column")
    if dropped:
        warnings.append(f"{dropped} time entries could not be assigned to a day")

    return warnings


def format_event_summary(document: ScanDocument) -> str:
    """
    Build a short, human-readable summary of a scan.

    Args:
        document: ScanDocument to summarize

    Returns:
        Formatted summary string
    """
    if not document.events:
        return "No events to summarize"

    lines = [f"Total Events: {len(document.events)}"]
    for day in Weekday:
        events = document.get_events_by_day(day)
        if events:
            lines.append(f"  {day.value}: {len(events)} events")

    lines.append("")
    for i, event in enumerate(document.sorted_events(), 1):
        lines.append(f"  {i}. {event}")

    return "\n".join(lines)
