"""Detection module for prototype-mask instance segmentation."""

from .base import Detection, Detector
from .colors import DEFAULT_LABEL_COLORS, FALLBACK_COLOR, color_for_label
from .filtering import CandidateRow, FilterOutcome, filter_candidate

# Lazy imports for modules that depend on the package configuration
def __getattr__(name):
    if name == "DetectionAssembler":
        from .assembler import DetectionAssembler
        return DetectionAssembler
    if name in ("SegmentationDetector", "create_backend"):
        from . import segmenter
        return getattr(segmenter, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "CandidateRow",
    "DEFAULT_LABEL_COLORS",
    "Detection",
    "DetectionAssembler",
    "Detector",
    "FALLBACK_COLOR",
    "FilterOutcome",
    "SegmentationDetector",
    "color_for_label",
    "create_backend",
    "filter_candidate",
]
