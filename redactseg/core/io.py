"""Image, label and mask file utilities."""

from pathlib import Path
from typing import List

import numpy as np
from PIL import Image, UnidentifiedImageError


IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".webp"}


def is_image_file(filename: str) -> bool:
    """Check if filename has a supported image extension.

    Args:
        filename: Path to file.

    Returns:
        True if file has an image extension.
    """
    return Path(filename).suffix.lower() in IMAGE_EXTENSIONS


def load_image(path: str) -> np.ndarray:
    """Decode an image file as RGB.

    Args:
        path: Path to the image.

    Returns:
        (H, W, 3) uint8 array.

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be decoded as an image.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Image not found: {path}")
    try:
        with Image.open(path) as image:
            return np.array(image.convert("RGB"))
    except UnidentifiedImageError as e:
        raise IOError(f"Cannot decode image: {path}") from e


def load_labels(path: str) -> List[str]:
    """Read a label file with one class name per line.

    Trailing whitespace is stripped and blank lines at the end of the file
    are dropped, so a final newline does not add an empty class.

    Args:
        path: Path to the labels file.

    Returns:
        Ordered list of labels; index i is class i.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Labels file not found: {path}")
    labels = [line.rstrip() for line in Path(path).read_text(encoding="utf-8").split("\n")]
    while labels and not labels[-1]:
        labels.pop()
    return labels


def save_mask(rgba: np.ndarray, path: str) -> None:
    """Write an RGBA mask raster as PNG.

    Args:
        rgba: (H, W, 4) uint8 raster.
        path: Output path; parent directories are created.
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(rgba).save(path, format="PNG")
