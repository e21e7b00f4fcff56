"""Flat row-major float matrix with region-scoped operations."""

from typing import Callable

import numpy as np


class DenseMatrix:
    """A 2D matrix stored in a flat float32 buffer.

    Cells are addressed as (x, y) and live at ``data[y * width + x]``. The
    buffer is allocated once and never replaced or resized.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        data: Flat float32 buffer of length width * height.
    """

    def __init__(self, width: int, height: int):
        """Initialize a zero-filled matrix.

        Args:
            width: Number of columns.
            height: Number of rows.

        Raises:
            ValueError: If either dimension is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Matrix dimensions must be non-negative: {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.data = np.zeros(self.width * self.height, dtype=np.float32)

    @classmethod
    def filled(cls, width: int, height: int, value: float) -> "DenseMatrix":
        """Create a matrix with every cell set to value."""
        matrix = cls(width, height)
        matrix.data.fill(value)
        return matrix

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Cell ({x}, {y}) outside {self.width}x{self.height} matrix"
            )
        return y * self.width + x

    def get(self, x: int, y: int) -> float:
        """Get the value at (x, y)."""
        return float(self.data[self._index(x, y)])

    def set(self, x: int, y: int, value: float) -> None:
        """Set the value at (x, y)."""
        self.data[self._index(x, y)] = value

    def _clip(self, x0: int, y0: int, x1: int, y1: int) -> tuple[int, int, int, int]:
        x0 = min(max(int(x0), 0), self.width)
        y0 = min(max(int(y0), 0), self.height)
        x1 = min(max(int(x1), x0), self.width)
        y1 = min(max(int(y1), y0), self.height)
        return x0, y0, x1, y1

    def as_array(self) -> np.ndarray:
        """Return a (height, width) view sharing the underlying buffer."""
        return self.data.reshape(self.height, self.width)

    def region(self, x0: int, y0: int, x1: int, y1: int) -> np.ndarray:
        """Return a writable view of the half-open region clipped to bounds.

        Args:
            x0: First column (inclusive).
            y0: First row (inclusive).
            x1: Last column (exclusive).
            y1: Last row (exclusive).

        Returns:
            2D view of shape (rows, cols); empty if the region misses the matrix.
        """
        x0, y0, x1, y1 = self._clip(x0, y0, x1, y1)
        return self.as_array()[y0:y1, x0:x1]

    def fill_region(self, x0: int, y0: int, x1: int, y1: int, value: float) -> None:
        """Set every cell with x0 <= x < x1 and y0 <= y < y1 to value.

        Parts of the region outside the matrix are ignored.
        """
        self.region(x0, y0, x1, y1)[...] = value

    def apply_region(
        self,
        x0: int,
        y0: int,
        x1: int,
        y1: int,
        fn: Callable[[np.ndarray], np.ndarray],
    ) -> None:
        """Replace each cell in the clipped region with fn(cell).

        Args:
            x0: First column (inclusive).
            y0: First row (inclusive).
            x1: Last column (exclusive).
            y1: Last row (exclusive).
            fn: Elementwise function. Receives the region values as an
                array and returns an array of the same shape.
        """
        view = self.region(x0, y0, x1, y1)
        if view.size == 0:
            return
        view[...] = fn(view)

    def copy(self) -> "DenseMatrix":
        """Return an independent deep copy."""
        result = DenseMatrix(self.width, self.height)
        result.data[:] = self.data
        return result

    def __repr__(self) -> str:
        return f"DenseMatrix(width={self.width}, height={self.height})"
