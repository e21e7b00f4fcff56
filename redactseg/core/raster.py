"""Mask rasterization: colorize binary masks and resize them to image size."""

from typing import Optional, Tuple

import cv2
import numpy as np

from .synthesis import BinaryMask

Color = Tuple[int, int, int]

INTERPOLATIONS = {
    "nearest": cv2.INTER_NEAREST,
    "linear": cv2.INTER_LINEAR,
    "cubic": cv2.INTER_CUBIC,
    "area": cv2.INTER_AREA,
}

WHITE: Color = (255, 255, 255)


def _alpha(opacity: float) -> int:
    if not 0.0 <= opacity <= 1.0:
        raise ValueError(f"Opacity must be between 0.0 and 1.0, got {opacity}")
    return int(round(opacity * 255))


def mask_to_rgba(
    mask: BinaryMask, color: Optional[Color] = None, opacity: float = 1.0
) -> np.ndarray:
    """Convert a binary mask to an RGBA raster.

    Args:
        mask: Thresholded low-resolution mask.
        color: RGB color for on pixels. Defaults to white.
        opacity: Alpha for on pixels, 0.0-1.0. Ignored when color is None,
            in which case on pixels are fully opaque.

    Returns:
        (height, width, 4) uint8 array; off pixels are (0, 0, 0, 0).
    """
    if color is None:
        color, alpha = WHITE, 255
    else:
        alpha = _alpha(opacity)

    on = mask.to_bool_array()
    rgba = np.zeros((mask.height, mask.width, 4), dtype=np.uint8)
    rgba[on] = (*color, alpha)
    return rgba


def resize_mask(
    rgba: np.ndarray, width: int, height: int, interpolation: str = "nearest"
) -> np.ndarray:
    """Resize an RGBA mask raster to width x height.

    Args:
        rgba: (H, W, 4) uint8 raster.
        width: Target width.
        height: Target height.
        interpolation: One of "nearest", "linear", "cubic", "area".

    Returns:
        Resized (height, width, 4) uint8 raster.

    Raises:
        ValueError: If the interpolation name or target size is invalid.
    """
    if interpolation not in INTERPOLATIONS:
        raise ValueError(
            f"Unknown interpolation '{interpolation}', expected one of {sorted(INTERPOLATIONS)}"
        )
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")
    if rgba.shape[:2] == (height, width):
        return rgba.copy()
    return cv2.resize(rgba, (width, height), interpolation=INTERPOLATIONS[interpolation])


def recolor_mask(rgba: np.ndarray, color: Color, opacity: float = 1.0) -> np.ndarray:
    """Repaint the non-transparent pixels of a mask raster.

    Each visible pixel takes the new color; its alpha is scaled by opacity.
    Transparent pixels stay (0, 0, 0, 0).

    Args:
        rgba: (H, W, 4) uint8 raster.
        color: New RGB color.
        opacity: Alpha multiplier, 0.0-1.0.

    Returns:
        A new recolored raster.
    """
    _alpha(opacity)
    result = np.zeros_like(rgba)
    visible = rgba[..., 3] > 0
    result[visible, :3] = color
    scaled = np.round(rgba[..., 3].astype(np.float32) * opacity)
    result[..., 3] = np.where(visible, scaled, 0).astype(np.uint8)
    return result
