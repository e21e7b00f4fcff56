"""TorchScript inference backend."""

from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
import torch

from .base import normalize_outputs


def split_outputs(outputs: Sequence) -> Tuple[np.ndarray, np.ndarray]:
    """Pick the candidate (3-D) and prototype (4-D) tensors out of model outputs.

    Args:
        outputs: Model outputs, in any order.

    Returns:
        Tuple of (candidates, prototypes) as numpy arrays.

    Raises:
        ValueError: If the outputs don't contain one 3-D and one 4-D tensor.
    """
    arrays = [
        o.detach().cpu().numpy() if torch.is_tensor(o) else np.asarray(o) for o in outputs
    ]
    candidates = next((a for a in arrays if a.ndim == 3), None)
    prototypes = next((a for a in arrays if a.ndim == 4), None)
    if candidates is None or prototypes is None:
        shapes = ", ".join(str(a.shape) for a in arrays)
        raise ValueError(f"Expected a 3-D candidate and a 4-D prototype output, got {shapes}")
    return candidates, prototypes


class TorchScriptBackend:
    """Run a TorchScript segmentation model.

    Attributes:
        model_path: Path to the serialized TorchScript module.
        device: Torch device the model runs on.
        model: Loaded module in eval mode.
    """

    def __init__(self, model_path: str, input_size: int = 640, device: str = "cpu"):
        """Load the model.

        Args:
            model_path: Path to the .pt/.torchscript file.
            input_size: Square input resolution the model expects.
            device: Device to run inference on ('cuda' or 'cpu').

        Raises:
            FileNotFoundError: If the model file does not exist.
            RuntimeError: If the model cannot be loaded.
        """
        if not Path(model_path).exists():
            raise FileNotFoundError(f"Model not found: {model_path}")
        self.model_path = model_path
        self._input_size = int(input_size)
        self.device = torch.device(device)
        self.model = self._load_model()

    @property
    def input_size(self) -> int:
        return self._input_size

    def _load_model(self) -> torch.jit.ScriptModule:
        try:
            model = torch.jit.load(self.model_path, map_location=self.device)
            model.eval()
            return model
        except Exception as e:
            raise RuntimeError(f"Failed to load TorchScript model {self.model_path}: {e}") from e

    def run(self, tensor: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Run the model on a (1, S, S, 3) tensor."""
        inputs = torch.from_numpy(np.ascontiguousarray(tensor, dtype=np.float32)).to(self.device)
        with torch.no_grad():
            outputs = self.model(inputs)
        if torch.is_tensor(outputs):
            outputs = [outputs]
        return normalize_outputs(*split_outputs(outputs))
