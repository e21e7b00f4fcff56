"""Coordinate conversions between image space and mask-prototype space."""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in original-image pixel coordinates.

    Attributes:
        left: X coordinate of the left edge.
        top: Y coordinate of the top edge.
        width: Rectangle width in pixels.
        height: Rectangle height in pixels.
    """

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left=left, top=top, width=right - left, height=bottom - top)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def area(self) -> float:
        return max(self.width, 0.0) * max(self.height, 0.0)

    def to_xyxy(self) -> np.ndarray:
        """Return [x1, y1, x2, y2] as a float array."""
        return np.array([self.left, self.top, self.right, self.bottom], dtype=np.float64)


@dataclass(frozen=True)
class MaskRegion:
    """Half-open rectangle [x0, x1) x [y0, y1) in mask-prototype space."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return max(self.x1 - self.x0, 0)

    @property
    def height(self) -> int:
        return max(self.y1 - self.y0, 0)

    @property
    def is_empty(self) -> bool:
        return self.x1 <= self.x0 or self.y1 <= self.y0


def _check_dimensions(width: int, height: int, name: str) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"{name} dimensions must be positive, got {width}x{height}")


def box_to_pixels(
    x1: float, y1: float, x2: float, y2: float, image_width: int, image_height: int
) -> Rect:
    """Convert a box given as fractions of the image size to pixels.

    Args:
        x1: Left edge as a fraction of image width.
        y1: Top edge as a fraction of image height.
        x2: Right edge as a fraction of image width.
        y2: Bottom edge as a fraction of image height.
        image_width: Original image width in pixels.
        image_height: Original image height in pixels.

    Returns:
        Rect in original-image pixel coordinates.

    Raises:
        ValueError: If the image dimensions are not positive.
    """
    _check_dimensions(image_width, image_height, "Image")
    return Rect.from_ltrb(
        x1 * image_width,
        y1 * image_height,
        x2 * image_width,
        y2 * image_height,
    )


def _scale_start(value: float, extent: int, size: int) -> int:
    scaled = value / extent * size
    if math.isnan(scaled):
        return size
    if math.isinf(scaled):
        return size if scaled > 0 else 0
    return min(max(math.floor(scaled), 0), size)


def _scale_end(value: float, extent: int, size: int) -> int:
    scaled = value / extent * size
    if math.isnan(scaled):
        return 0
    if math.isinf(scaled):
        return size if scaled > 0 else 0
    return min(max(math.ceil(scaled), 0), size)


def scale_to_mask_space(
    rect: Rect,
    image_width: int,
    image_height: int,
    mask_width: int = 160,
    mask_height: int = 160,
) -> MaskRegion:
    """Map a pixel rectangle onto the mask-prototype grid.

    Start edges are floored and end edges ceiled so the region covers every
    mask cell the box touches. Both are clamped to the grid; the end bound is
    exclusive, so it may equal mask_width / mask_height.

    Args:
        rect: Box in original-image pixels.
        image_width: Original image width in pixels.
        image_height: Original image height in pixels.
        mask_width: Prototype grid width.
        mask_height: Prototype grid height.

    Returns:
        MaskRegion, possibly empty.
    """
    _check_dimensions(image_width, image_height, "Image")
    _check_dimensions(mask_width, mask_height, "Mask")
    # a NaN edge collapses the region
    return MaskRegion(
        x0=_scale_start(rect.left, image_width, mask_width),
        y0=_scale_start(rect.top, image_height, mask_height),
        x1=_scale_end(rect.right, image_width, mask_width),
        y1=_scale_end(rect.bottom, image_height, mask_height),
    )
