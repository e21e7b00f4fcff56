"""Inference backend protocol and tensor conventions."""

from typing import Protocol, Tuple

import numpy as np
from PIL import Image


class InferenceBackend(Protocol):
    """Protocol for segmentation model runners.

    A backend takes a (1, S, S, 3) float32 tensor scaled to [0, 1] and
    returns candidate rows (1, N, 38) and prototype masks (1, 160, 160, 32).
    """

    @property
    def input_size(self) -> int:
        """Square input resolution S expected by the model."""
        ...

    def run(self, tensor: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Run the model.

        Args:
            tensor: Input tensor, shape (1, S, S, 3).

        Returns:
            Tuple of (candidates, prototypes).
        """
        ...


def prepare_input(image: np.ndarray, input_size: int) -> np.ndarray:
    """Resize an RGB image and scale it into a model input tensor.

    Args:
        image: (H, W, 3) uint8 RGB image.
        input_size: Square model resolution.

    Returns:
        (1, input_size, input_size, 3) float32 tensor in [0, 1].
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) RGB image, got {image.shape}")
    pil_image = Image.fromarray(image.astype(np.uint8))
    resized = pil_image.resize((input_size, input_size), Image.BILINEAR)
    tensor = np.asarray(resized, dtype=np.float32) / 255.0
    return tensor[np.newaxis, ...]


def normalize_outputs(
    candidates: np.ndarray,
    prototypes: np.ndarray,
    row_length: int = 38,
    num_coefficients: int = 32,
) -> Tuple[np.ndarray, np.ndarray]:
    """Bring raw model outputs into the (1, N, 38) / (1, H, W, 32) layout.

    Channel-first prototypes (1, 32, H, W) are transposed to channel-last.
    Candidate tensors laid out as (1, 38, N) are transposed to (1, N, 38).

    Raises:
        ValueError: If either tensor cannot be interpreted.
    """
    candidates = np.asarray(candidates, dtype=np.float32)
    prototypes = np.asarray(prototypes, dtype=np.float32)

    if candidates.ndim == 2:
        candidates = candidates[np.newaxis, ...]
    if candidates.ndim != 3 or candidates.shape[0] != 1:
        raise ValueError(f"Unexpected candidate tensor shape {candidates.shape}")
    if candidates.shape[2] != row_length and candidates.shape[1] == row_length:
        candidates = candidates.transpose(0, 2, 1)
    if candidates.shape[2] != row_length:
        raise ValueError(
            f"Candidate rows must have {row_length} values, got shape {candidates.shape}"
        )

    if prototypes.ndim == 3:
        prototypes = prototypes[np.newaxis, ...]
    if prototypes.ndim != 4 or prototypes.shape[0] != 1:
        raise ValueError(f"Unexpected prototype tensor shape {prototypes.shape}")
    if prototypes.shape[3] != num_coefficients and prototypes.shape[1] == num_coefficients:
        prototypes = prototypes.transpose(0, 2, 3, 1)
    if prototypes.shape[3] != num_coefficients:
        raise ValueError(
            f"Prototype tensor must have {num_coefficients} channels, got shape {prototypes.shape}"
        )

    return np.ascontiguousarray(candidates), np.ascontiguousarray(prototypes)
