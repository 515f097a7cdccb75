from __future__ import annotations

from datetime import date

from calendar_scanner.models import BoundingBox, TextFragment

# A Wednesday
TODAY = date(2026, 10, 14)


def frag(text: str, x: float, y: float, width: float = 0.05, height: float = 0.02) -> TextFragment:
    return TextFragment(text=text, bbox=BoundingBox(x_center=x, y_center=y, width=width, height=height))


def week_headers(y: float = 0.95) -> list[TextFragment]:
    labels = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    return [frag(label, 0.1 + i * 0.13, y) for i, label in enumerate(labels)]
