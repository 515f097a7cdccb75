from __future__ import annotations

import unittest

import numpy as np

from calendar_scanner.ocr_extractor import OCRExtractor, fragments_from_ocr_result
from calendar_scanner.models import BoundingBox, TextFragment

SHAPE = (200, 400, 3)


class TestFragmentsFromOcrResult(unittest.TestCase):
    def assertBox(self, bbox: BoundingBox, x: float, y: float, w: float, h: float) -> None:
        self.assertAlmostEqual(bbox.x_center, x)
        self.assertAlmostEqual(bbox.y_center, y)
        self.assertAlmostEqual(bbox.width, w)
        self.assertAlmostEqual(bbox.height, h)

    def test_list_style_output(self) -> None:
        result = [[
            [[[40, 20], [120, 20], [120, 60], [40, 60]], ("Mon", 0.98)],
            [[[40, 160], [120, 160], [120, 180], [40, 180]], ("9:00-10:00", 0.9)],
        ]]
        fragments = fragments_from_ocr_result(result, SHAPE)

        self.assertEqual([f.text for f in fragments], ["Mon", "9:00-10:00"])
        # Image rows grow downward; fragment y grows upward
        self.assertBox(fragments[0].bbox, 0.2, 0.8, 0.2, 0.2)
        self.assertBox(fragments[1].bbox, 0.2, 0.15, 0.2, 0.1)
        self.assertAlmostEqual(fragments[0].confidence, 0.98)

    def test_dict_style_output_with_polygons(self) -> None:
        result = [{
            "rec_texts": ["Gym", "  "],
            "rec_scores": np.array([0.8, 0.5]),
            "rec_polys": [
                np.array([[0, 0], [40, 0], [40, 20], [0, 20]]),
                np.array([[0, 0], [10, 0], [10, 10], [0, 10]]),
            ],
        }]
        fragments = fragments_from_ocr_result(result, SHAPE)

        self.assertEqual(len(fragments), 1)
        self.assertEqual(fragments[0].text, "Gym")
        self.assertBox(fragments[0].bbox, 0.05, 0.95, 0.1, 0.1)

    def test_dict_style_output_with_boxes(self) -> None:
        result = [{
            "rec_texts": ["Fri"],
            "rec_scores": [0.7],
            "rec_boxes": np.array([[200, 100, 280, 140]]),
        }]
        fragments = fragments_from_ocr_result(result, SHAPE)
        self.assertBox(fragments[0].bbox, 0.6, 0.4, 0.2, 0.2)

    def test_malformed_entries_are_skipped(self) -> None:
        result = [[
            None,
            [[[0, 0], [1, 0]], ("short box", 0.9)],
            [[[0, 0], [40, 0], [40, 20], [0, 20]], ("", 0.9)],
            [[[0, 0], [40, 0], [40, 20], [0, 20]], ("ok", 0.9)],
        ]]
        self.assertEqual([f.text for f in fragments_from_ocr_result(result, SHAPE)], ["ok"])

    def test_text_whitespace_is_collapsed(self) -> None:
        result = [{
            "rec_texts": ["Team\n  Sync\x00", "\x00"],
            "rec_scores": [0.9, 0.4],
            "rec_boxes": [[0, 0, 40, 20], [0, 40, 40, 60]],
        }]
        fragments = fragments_from_ocr_result(result, SHAPE)
        self.assertEqual([f.text for f in fragments], ["Team Sync"])

        legacy = [[[[[0, 0], [40, 0], [40, 20], [0, 20]], ("Stand\tup ", 0.7)]]]
        self.assertEqual([f.text for f in fragments_from_ocr_result(legacy, SHAPE)], ["Stand up"])

    def test_empty_result(self) -> None:
        self.assertEqual(fragments_from_ocr_result([], SHAPE), [])
        self.assertEqual(fragments_from_ocr_result(None, SHAPE), [])


class TestConfidenceScore(unittest.TestCase):
    def test_average_ignores_unknown_scores(self) -> None:
        box = BoundingBox(0.5, 0.5)
        fragments = [
            TextFragment("a", box, 0.5),
            TextFragment("b", box, 1.0),
            TextFragment("c", box, None),
        ]
        self.assertAlmostEqual(OCRExtractor.calculate_confidence_score(fragments), 0.75)
        self.assertEqual(OCRExtractor.calculate_confidence_score([]), 0.0)


if __name__ == "__main__":
    unittest.main()
