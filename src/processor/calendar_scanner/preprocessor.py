"""Photo loading and preprocessing ahead of text recognition."""

from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image, ImageOps

from .utils import SUPPORTED_IMAGE_FORMATS


class ImagePreprocessor:
    """Loads a calendar photo and prepares it for OCR."""

    def __init__(self, max_dimension: int = 3000, denoise: bool = True):
        """
        Initialize the image preprocessor.

        Args:
            max_dimension: Longest side, in pixels, after resizing
            denoise: Whether to run colour denoising before contrast enhancement
        """
        self.max_dimension = max_dimension
        self.denoise = denoise

    def process(self, file_path: Union[str, Path]) -> np.ndarray:
        """
        Load a photo and return it as a preprocessed BGR numpy array.

        Args:
            file_path: Path to the image file

        Returns:
            Image in BGR format (what PaddleOCR expects)

        Raises:
            ValueError: If the file format is not supported or loading fails
        """
        file_path = Path(file_path)
        extension = file_path.suffix.lower()

        if extension not in SUPPORTED_IMAGE_FORMATS:
            raise ValueError(f"Unsupported file format: {extension}")

        try:
            with Image.open(file_path) as img:
                # Phone photos are often stored sideways with an EXIF rotation tag
                img = ImageOps.exif_transpose(img)
                rgb = np.array(img.convert('RGB'))
        except (OSError, ValueError) as e:
            raise ValueError(f"Error loading image {file_path}: {e}")

        bgr = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
        print(f"  → Loaded image: shape={bgr.shape}, dtype={bgr.dtype}")

        bgr = self.resize_for_ocr(bgr, self.max_dimension)
        processed = self.enhance(bgr)
        print(f"  → Preprocessed: shape={processed.shape}, dtype={processed.dtype}")

        return processed

    def enhance(self, image: np.ndarray) -> np.ndarray:
        """
        Improve contrast of a BGR image for OCR.

        Args:
            image: Input image (BGR)

        Returns:
            Enhanced image (BGR)
        """
        if self.denoise:
            image = cv2.fastNlMeansDenoisingColored(image, None, 10, 10, 7, 21)

        # CLAHE on the lightness channel keeps colours intact
        lab = cv2.cvtColor(image, cv2.COLOR_BGR2LAB)
        l, a, b = cv2.split(lab)
        clahe = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8))
        l = clahe.apply(l)
        enhanced = cv2.merge([l, a, b])
        return cv2.cvtColor(enhanced, cv2.COLOR_LAB2BGR)

    @staticmethod
    def resize_for_ocr(image: np.ndarray, max_dimension: int = 3000) -> np.ndarray:
        """
        Resize image if too large, maintaining aspect ratio.

        Args:
            image: Input image
            max_dimension: Maximum width or height

        Returns:
            Resized image
        """
        h, w = image.shape[:2]

        if max(h, w) > max_dimension:
            scale = max_dimension / max(h, w)
            new_w = int(w * scale)
            new_h = int(h * scale)
            return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_AREA)

        return image
