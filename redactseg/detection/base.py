"""Base detection protocol and data structures."""

from dataclasses import dataclass
from typing import List, Protocol, Tuple

import numpy as np

from ..core.geometry import Rect


@dataclass(frozen=True)
class Detection:
    """Standardized detection result.

    Attributes:
        label: Class label name.
        confidence: Confidence score (0.0 to 1.0).
        rect: Bounding box in original-image pixel coordinates.
        mask: RGBA mask raster at original-image resolution, (H, W, 4) uint8.
        id: Index of the detection within one processing call.
        color: RGB display color derived from the label.
    """

    label: str
    confidence: float
    rect: Rect
    mask: np.ndarray
    id: int
    color: Tuple[int, int, int]

    @property
    def box(self) -> np.ndarray:
        """Bounding box as [x1, y1, x2, y2]."""
        return self.rect.to_xyxy()

    @property
    def mask_alpha(self) -> np.ndarray:
        """Boolean (H, W) array of visible mask pixels."""
        return self.mask[..., 3] > 0


class Detector(Protocol):
    """Protocol for segmenting detectors."""

    def detect(self, frame: np.ndarray) -> List[Detection]:
        """Detect objects in a frame.

        Args:
            frame: Input frame (RGB).

        Returns:
            List of Detection objects.
        """
        ...
