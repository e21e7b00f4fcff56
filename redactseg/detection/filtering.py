"""Candidate row parsing and the keep/drop predicate."""

import enum
import math
from dataclasses import dataclass

import numpy as np


class FilterOutcome(enum.Enum):
    """Result of checking a candidate row."""

    KEPT = "kept"
    LOW_CONFIDENCE = "low_confidence"
    INVALID_CLASS = "invalid_class"

    @property
    def kept(self) -> bool:
        return self is FilterOutcome.KEPT


@dataclass(frozen=True)
class CandidateRow:
    """One raw model output row.

    Attributes:
        x1: Left edge, fraction of image width.
        y1: Top edge, fraction of image height.
        x2: Right edge, fraction of image width.
        y2: Bottom edge, fraction of image height.
        confidence: Detection confidence.
        class_value: Raw class index value as emitted by the model.
        coefficients: Mask coefficients, shape (C,).
    """

    x1: float
    y1: float
    x2: float
    y2: float
    confidence: float
    class_value: float
    coefficients: np.ndarray

    @classmethod
    def from_values(cls, values: np.ndarray, num_coefficients: int = 32) -> "CandidateRow":
        """Split a flat row into its fields.

        Args:
            values: Row of at least 6 + num_coefficients floats.
            num_coefficients: Number of mask coefficients.

        Raises:
            ValueError: If the row is too short.
        """
        values = np.asarray(values, dtype=np.float64).reshape(-1)
        expected = 6 + num_coefficients
        if values.shape[0] < expected:
            raise ValueError(f"Candidate row needs {expected} values, got {values.shape[0]}")
        return cls(
            x1=float(values[0]),
            y1=float(values[1]),
            x2=float(values[2]),
            y2=float(values[3]),
            confidence=float(values[4]),
            class_value=float(values[5]),
            coefficients=values[6:expected].copy(),
        )

    @property
    def class_index(self) -> int:
        """Class index truncated toward zero, or -1 if not finite."""
        if not math.isfinite(self.class_value):
            return -1
        return int(self.class_value)


def filter_candidate(
    row: CandidateRow, confidence_threshold: float, label_count: int
) -> FilterOutcome:
    """Decide whether a candidate becomes a detection.

    A row is kept when its confidence is strictly above the threshold and
    its class index addresses a known label.

    Args:
        row: Candidate to check.
        confidence_threshold: Minimum confidence (exclusive).
        label_count: Number of known labels.

    Returns:
        FilterOutcome describing why the row was kept or dropped.
    """
    if not row.confidence > confidence_threshold:
        return FilterOutcome.LOW_CONFIDENCE
    if not math.isfinite(row.class_value) or not 0 <= row.class_index < label_count:
        return FilterOutcome.INVALID_CLASS
    return FilterOutcome.KEPT
