"""Core execution logic for scanning calendar photos."""

import json
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import ScannerConfig
from .models import ScanDocument, TextFragment
from .parser import CalendarGridParser
from .utils import SUPPORTED_IMAGE_FORMATS


def scan_fragments(
    fragments: Sequence[TextFragment],
    today: Optional[date] = None,
    config: Optional[ScannerConfig] = None,
    file_path: Optional[str] = None,
) -> ScanDocument:
    """
    Reconstruct events from already-recognized fragments.

    Returns:
        ScanDocument with events sorted by start time
    """
    parser = CalendarGridParser(config)
    document = parser.parse(fragments, today=today, file_path=file_path)
    return replace(document, events=document.sorted_events())


def process_image(
    file_path: Union[str, Path],
    use_gpu: bool = False,
    today: Optional[date] = None,
    config: Optional[ScannerConfig] = None,
) -> ScanDocument:
    """
    Scan a photographed weekly calendar and extract its events.

    Args:
        file_path: Path to the photo
        use_gpu: Whether to use GPU acceleration for OCR (default: False)
        today: Reference date for weekday resolution (default: today)
        config: Scanner configuration

    Returns:
        ScanDocument with events sorted by start time

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file format is not supported
    """
    # Heavy imaging dependencies are only needed here
    from .ocr_extractor import OCRExtractor
    from .preprocessor import ImagePreprocessor

    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in SUPPORTED_IMAGE_FORMATS:
        raise ValueError(
            f"Unsupported file format: {file_path.suffix}. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_IMAGE_FORMATS))}"
        )

    print(f"▶ Scanning Calendar: {file_path.name}")

    print("\n[1/3] Preprocessing image...")
    image = ImagePreprocessor().process(file_path)
    print("✓ Image ready")

    print("\n[2/3] Recognizing text with PaddleOCR...")
    extractor = OCRExtractor(use_gpu=use_gpu)
    fragments = extractor.extract_fragments(image)
    avg_confidence = extractor.calculate_confidence_score(fragments)
    print(f"✓ Recognized {len(fragments)} text fragments (avg confidence: {avg_confidence:.2%})")

    print("\n[3/3] Reconstructing events...")
    document = scan_fragments(fragments, today=today, config=config, file_path=str(file_path.absolute()))
    print(f"✓ Found {len(document.columns)} day columns, {len(document.events)} events")

    return document


def load_fragments(path: Union[str, Path]) -> List[TextFragment]:
    """
    Load recognized fragments from a JSON file.

    The file holds a list of ``{"text": ..., "bbox": {"x_center", "y_center",
    "width", "height"}}`` objects, or an object with a ``fragments`` list.

    Raises:
        ValueError: If the JSON does not have that shape
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('fragments')
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of fragments in {path}")

    try:
        return [TextFragment.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed fragment in {path}: {e}")


def document_to_dict(document: ScanDocument) -> dict:
    """JSON-ready representation of a scan result."""
    return {
        'file_path': document.file_path,
        'metadata': {
            'extraction_timestamp': document.extraction_timestamp,
            'fragment_count': document.fragment_count,
            'status': document.status,
        },
        'columns': [
            {'x': x, 'day': day.value}
            for x, day in sorted(document.columns.items())
        ],
        'events': [event.to_dict() for event in document.events],
        'decisions': [decision.to_dict() for decision in document.decisions],
    }


def save_to_json(document: ScanDocument, output_path: Union[str, Path]) -> None:
    """
    Save a scan result to a JSON file.

    Args:
        document: ScanDocument to save
        output_path: Path to output JSON file
    """
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(document_to_dict(document), f, indent=2, ensure_ascii=False, default=str)

    print(f"✓ Saved to: {output_path}")
