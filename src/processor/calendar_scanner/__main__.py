"""Main module for running the calendar scanner."""

import sys

from calendar_scanner.main import process_image
from calendar_scanner.utils import format_event_summary

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m calendar_scanner <image_path>")
        print("\nExample: python -m calendar_scanner /path/to/week.jpg")
        sys.exit(1)

    document = process_image(sys.argv[1])
    print(format_event_summary(document))
