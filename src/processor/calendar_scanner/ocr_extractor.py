"""Text recognition with PaddleOCR, producing normalized fragments."""

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .models import BoundingBox, TextFragment
from .utils import sanitize_text


def _poly_to_bbox(poly: Any, width: int, height: int) -> Optional[BoundingBox]:
    """
    Convert a pixel polygon (or x1,y1,x2,y2 box) to a normalized bottom-left box.

    Image rows grow downward, so the vertical axis is flipped.
    """
    try:
        points = [(float(p[0]), float(p[1])) for p in poly]
    except (TypeError, IndexError):
        try:
            x1, y1, x2, y2 = (float(v) for v in poly)
        except (TypeError, ValueError):
            return None
        points = [(x1, y1), (x2, y1), (x2, y2), (x1, y2)]

    if len(points) < 4 or width <= 0 or height <= 0:
        return None

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x_min, x_max = min(xs), max(xs)
    y_min, y_max = min(ys), max(ys)

    return BoundingBox(
        x_center=((x_min + x_max) / 2) / width,
        y_center=1.0 - ((y_min + y_max) / 2) / height,
        width=(x_max - x_min) / width,
        height=(y_max - y_min) / height,
    )


def fragments_from_ocr_result(result: Any, image_shape: Tuple[int, ...]) -> List[TextFragment]:
    """
    Convert raw PaddleOCR output into TextFragments.

    PaddleOCR has changed its output over releases: older versions return
    ``[[box, (text, score)], ...]`` per page, newer pipelines return a dict per
    page with ``rec_texts``, ``rec_scores`` and ``rec_polys``/``rec_boxes``.
    Both are handled. Blank texts and malformed entries are skipped.

    Args:
        result: Value returned by ``PaddleOCR.ocr``
        image_shape: Shape of the recognized image (height, width, ...)

    Returns:
        Fragments in recognition order
    """
    if not result:
        return []

    height, width = image_shape[:2]
    fragments: List[TextFragment] = []
    first = result[0]

    if isinstance(first, dict):
        # Values may be numpy arrays, so avoid truth-testing them
        rec_texts = first.get('rec_texts')
        if rec_texts is None:
            rec_texts = []
        rec_scores = first.get('rec_scores')
        if rec_scores is None:
            rec_scores = []
        rec_polys = first.get('rec_polys')
        if rec_polys is None:
            rec_polys = first.get('rec_boxes')

        for idx, text in enumerate(rec_texts):
            text = sanitize_text(str(text))
            if not text:
                continue
            if rec_polys is None or idx >= len(rec_polys):
                continue

            bbox = _poly_to_bbox(rec_polys[idx], width, height)
            if bbox is None:
                print(f"    Warning: skipping OCR item with malformed box: {text!r}")
                continue

            confidence = float(rec_scores[idx]) if idx < len(rec_scores) else None
            fragments.append(TextFragment(text=text, bbox=bbox, confidence=confidence))

        return fragments

    lines: Sequence[Any] = first if isinstance(first, list) else result
    for line in lines:
        try:
            box, text_info = line[0], line[1]
            text = sanitize_text(str(text_info[0])) if text_info[0] else ""
            confidence = float(text_info[1])
        except (IndexError, TypeError, ValueError) as line_error:
            print(f"    Warning: Skipping malformed OCR result: {line_error}")
            continue

        if not text:
            continue

        bbox = _poly_to_bbox(box, width, height)
        if bbox is None:
            print(f"    Warning: skipping OCR item with malformed box: {text!r}")
            continue

        fragments.append(TextFragment(text=text, bbox=bbox, confidence=confidence))

    return fragments


class OCRExtractor:
    """Handles OCR extraction from images using PaddleOCR."""

    def __init__(self, use_gpu: bool = False, lang: str = 'en'):
        """
        Initialize OCR extractor.

        Args:
            use_gpu: Whether to use GPU acceleration (requires paddlepaddle-gpu)
            lang: Language code for OCR (default: 'en')
        """
        try:
            from paddleocr import PaddleOCR
        except ImportError:
            raise ImportError(
                "paddleocr is required for text recognition. "
                "Install with: pip install 'calendar-scanner[ocr]'"
            )

        self.use_gpu = use_gpu
        self.ocr = PaddleOCR(
            use_angle_cls=True,  # Enable angle classification for rotated text
            lang=lang,
            det_db_box_thresh=0.3,  # Lower threshold for faint handwritten entries
            det_db_unclip_ratio=2.0,
        )

    def extract_fragments(self, image: np.ndarray) -> List[TextFragment]:
        """
        Recognize text in an image.

        Args:
            image: Input image as numpy array (BGR format)

        Returns:
            List of TextFragment with normalized, bottom-left-origin boxes
        """
        if image is None or not isinstance(image, np.ndarray) or image.size == 0:
            print("    Warning: Received empty image")
            return []

        result = self.ocr.ocr(image)
        if not result:
            print("    Warning: PaddleOCR returned no results")
            return []

        return fragments_from_ocr_result(result, image.shape)

    @staticmethod
    def calculate_confidence_score(fragments: Sequence[TextFragment]) -> float:
        """
        Average recognition confidence of the fragments that carry one.

        Returns:
            Average confidence score (0-1), 0.0 if none is known
        """
        scores = [f.confidence for f in fragments if f.confidence is not None]
        if not scores:
            return 0.0
        return sum(scores) / len(scores)
