"""Instance mask synthesis from prototype masks and per-detection coefficients.

A segmentation head emits a shared set of low-resolution prototype masks
(H x W x C) and, for every candidate, C mask coefficients. A candidate's
mask is the coefficient-weighted sum of the prototype channels, passed
through a logistic activation and thresholded:

1. value(x, y) = sum_c coeff[c] * prototype[y, x, c]
2. activated = 1 / (1 + exp(-value))
3. mask = activated > threshold

All three steps only touch cells inside the candidate's box, scaled to the
prototype grid. Cells outside the box stay off.
"""

import logging
import time
from dataclasses import dataclass

import numpy as np

from .geometry import MaskRegion
from .matrix import DenseMatrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinaryMask:
    """Thresholded low-resolution mask and the region it was computed over.

    Attributes:
        matrix: Prototype-grid sized matrix holding 1.0 (on) or 0.0 (off).
        region: Region in which the mask was evaluated.
    """

    matrix: DenseMatrix
    region: MaskRegion

    @property
    def width(self) -> int:
        return self.matrix.width

    @property
    def height(self) -> int:
        return self.matrix.height

    @property
    def pixel_count(self) -> int:
        """Number of on pixels."""
        return int(np.count_nonzero(self.matrix.data > 0.5))

    def to_bool_array(self) -> np.ndarray:
        """Return a (height, width) boolean copy of the mask."""
        return self.matrix.as_array() > 0.5


def logistic(values: np.ndarray) -> np.ndarray:
    """Elementwise 1 / (1 + exp(-x)).

    Overflow is silenced: large negative inputs give 0, large positive give 1
    and NaN stays NaN.
    """
    values = np.asarray(values, dtype=np.float32)
    with np.errstate(over="ignore", under="ignore", invalid="ignore"):
        return 1.0 / (1.0 + np.exp(-values))


def validate_prototypes(prototypes: np.ndarray, num_coefficients: int) -> np.ndarray:
    """Check that prototypes is a (H, W, C) array with C == num_coefficients.

    Returns:
        The prototypes as a float32 array.

    Raises:
        ValueError: If the shape does not match.
    """
    prototypes = np.asarray(prototypes, dtype=np.float32)
    if prototypes.ndim != 3 or prototypes.shape[2] != num_coefficients:
        raise ValueError(
            f"Prototype tensor must have shape (H, W, {num_coefficients}), "
            f"got {prototypes.shape}"
        )
    return prototypes


def _validate_coefficients(coefficients: np.ndarray, num_channels: int) -> np.ndarray:
    coefficients = np.asarray(coefficients, dtype=np.float32).reshape(-1)
    if coefficients.shape[0] != num_channels:
        raise ValueError(
            f"Expected {num_channels} mask coefficients, got {coefficients.shape[0]}"
        )
    return coefficients


def mask_logits(
    coefficients: np.ndarray, prototypes: np.ndarray, region: MaskRegion
) -> DenseMatrix:
    """Compute pre-activation mask values inside region.

    Args:
        coefficients: Per-detection weights, shape (C,).
        prototypes: Prototype masks, shape (H, W, C).
        region: Cells to evaluate. Clipped to the prototype grid.

    Returns:
        DenseMatrix of size W x H with dot products inside region and zeros
        elsewhere.
    """
    prototypes = np.asarray(prototypes, dtype=np.float32)
    if prototypes.ndim != 3:
        raise ValueError(f"Prototype tensor must be 3-D (H, W, C), got {prototypes.shape}")
    height, width, channels = prototypes.shape
    coefficients = _validate_coefficients(coefficients, channels)

    logits = DenseMatrix(width, height)
    if region.is_empty:
        return logits

    target = logits.region(region.x0, region.y0, region.x1, region.y1)
    if target.size == 0:
        return logits

    rows, cols = target.shape
    y0 = max(region.y0, 0)
    x0 = max(region.x0, 0)
    window = prototypes[y0 : y0 + rows, x0 : x0 + cols, :]
    with np.errstate(over="ignore", under="ignore", invalid="ignore"):
        target[...] = window @ coefficients
    return logits


class MaskSynthesizer:
    """Turn mask coefficients into a binary instance mask.

    Attributes:
        mask_threshold: Activated values strictly greater than this are on.
    """

    def __init__(self, mask_threshold: float = 0.5):
        """Initialize the synthesizer.

        Args:
            mask_threshold: Probability threshold; a pixel at exactly the
                threshold is off.
        """
        self.mask_threshold = mask_threshold

    def _threshold(self, values: np.ndarray) -> np.ndarray:
        return np.where(values > self.mask_threshold, 1.0, 0.0)

    def synthesize(
        self, coefficients: np.ndarray, prototypes: np.ndarray, region: MaskRegion
    ) -> BinaryMask:
        """Synthesize the mask for one detection.

        Args:
            coefficients: Mask coefficients for the detection, shape (C,).
            prototypes: Shared prototype masks, shape (H, W, C).
            region: Detection box in prototype-grid coordinates.

        Returns:
            BinaryMask over the full prototype grid, on only inside region.
        """
        start = time.perf_counter()
        mask = mask_logits(coefficients, prototypes, region)
        dot_ms = (time.perf_counter() - start) * 1000

        if region.is_empty:
            return BinaryMask(matrix=mask, region=region)

        # inf (including float32 overflow of finite inputs) must not pass the threshold
        finite = np.isfinite(mask.region(region.x0, region.y0, region.x1, region.y1))

        start = time.perf_counter()
        mask.apply_region(region.x0, region.y0, region.x1, region.y1, logistic)
        activation_ms = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        mask.apply_region(region.x0, region.y0, region.x1, region.y1, self._threshold)
        mask.region(region.x0, region.y0, region.x1, region.y1)[~finite] = 0.0
        threshold_ms = (time.perf_counter() - start) * 1000

        logger.debug(
            "Mask synthesis over %dx%d cells: dot %.2fms, activation %.2fms, threshold %.2fms",
            region.width,
            region.height,
            dot_ms,
            activation_ms,
            threshold_ms,
        )
        return BinaryMask(matrix=mask, region=region)
