"""Command-line entry point for the calendar scanner."""

import sys
from pathlib import Path

# Add parent directory to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from calendar_scanner import (
    load_fragments,
    process_image,
    save_to_json,
    scan_fragments,
    validate_document,
)
from calendar_scanner.database import (
    create_tables,
    delete_app_created_events,
    get_db_engine,
    save_events,
)
from calendar_scanner.utils import (
    FRAGMENT_FILE_EXTENSIONS,
    SCANNABLE_EXTENSIONS,
    ValidationError,
    format_event_summary,
    positional_args,
    validate_file_path,
)


def _option_value(name: str):
    if name in sys.argv:
        idx = sys.argv.index(name)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


def _print_usage():
    print("="*70)
    print("CALENDAR SCANNER - Command Line Interface")
    print("="*70)
    print("\nUsage: python scripts/run.py <file_path> [options]")
    print("       python scripts/run.py --delete-created [--db path]")
    print("\nArguments:")
    print("  file_path         Calendar photo, or JSON file of recognized fragments")
    print("\nOptions:")
    print("  --gpu             Use GPU acceleration for OCR")
    print("  --output PATH     Output JSON file path")
    print("  --db PATH         Save events to this SQLite calendar store")
    print("  --delete-created  Delete events this tool created in the next month")
    print("\nExamples:")
    print("  python scripts/run.py week.jpg")
    print("  python scripts/run.py week.jpg --output events.json --db calendar.sqlite")
    print("  python scripts/run.py fragments.json")


def main():
    """Main entry point for command-line execution."""

    db_path = _option_value('--db') or "calendar.sqlite"

    if '--delete-created' in sys.argv:
        engine = get_db_engine(db_path=db_path)
        create_tables(engine)
        delete_app_created_events(engine)
        return

    arguments = positional_args(sys.argv[1:])
    if not arguments:
        _print_usage()
        sys.exit(1)

    file_path = arguments[0]
    use_gpu = '--gpu' in sys.argv
    output_path = _option_value('--output') or Path(file_path).stem + "_events.json"

    try:
        validate_file_path(file_path, SCANNABLE_EXTENSIONS)
    except ValidationError as e:
        print(f"\n✗ Error: {e}")
        sys.exit(1)

    try:
        if Path(file_path).suffix.lower() in FRAGMENT_FILE_EXTENSIONS:
            fragments = load_fragments(file_path)
            print(f"▶ Loaded {len(fragments)} fragments from {file_path}")
            document = scan_fragments(fragments, file_path=str(Path(file_path).absolute()))
        else:
            document = process_image(file_path, use_gpu=use_gpu)

        warnings = validate_document(document)
        if warnings:
            print("\n" + "="*70)
            print("VALIDATION WARNINGS")
            print("="*70)
            for warning in warnings:
                print(f"⚠ {warning}")

        print("\n" + "="*70)
        print("DETECTED EVENTS")
        print("="*70)
        print(format_event_summary(document))

        print("\n" + "="*70)
        print("SAVING RESULTS")
        print("="*70)
        save_to_json(document, output_path)

        if '--db' in sys.argv and document.events:
            engine = get_db_engine(db_path=db_path)
            create_tables(engine)
            summary = save_events(engine, document.events, file_path=document.file_path)
            if summary.failed:
                sys.exit(1)

        print("\n✓ Scanning completed successfully!")

    except FileNotFoundError as e:
        print(f"\n✗ File Error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"\n✗ Validation Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
