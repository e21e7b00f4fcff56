"""Numerical core: dense matrix, coordinate scaling, mask synthesis and rasterization."""

from .geometry import MaskRegion, Rect, box_to_pixels, scale_to_mask_space
from .matrix import DenseMatrix
from .synthesis import BinaryMask, MaskSynthesizer, logistic, mask_logits

__all__ = [
    "BinaryMask",
    "DenseMatrix",
    "MaskRegion",
    "MaskSynthesizer",
    "Rect",
    "box_to_pixels",
    "logistic",
    "mask_logits",
    "scale_to_mask_space",
]
