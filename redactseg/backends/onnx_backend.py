"""ONNX Runtime inference backend."""

from pathlib import Path
from typing import Tuple

import numpy as np

from .base import normalize_outputs

try:
    import onnxruntime as ort
except ImportError:
    ort = None


class OnnxBackend:
    """Run an ONNX segmentation model on the CPU execution provider."""

    def __init__(self, model_path: str, input_size: int = 640):
        """Create the inference session.

        Args:
            model_path: Path to the .onnx file.
            input_size: Square input resolution the model expects.

        Raises:
            ImportError: If onnxruntime is not installed.
            FileNotFoundError: If the model file does not exist.
            RuntimeError: If the session cannot be created.
        """
        if ort is None:
            raise ImportError(
                "onnxruntime is not installed. Please install it with 'pip install onnxruntime'."
            )
        if not Path(model_path).exists():
            raise FileNotFoundError(f"Model not found: {model_path}")
        self.model_path = model_path
        self._input_size = int(input_size)
        try:
            self.session = ort.InferenceSession(model_path, providers=["CPUExecutionProvider"])
        except Exception as e:
            raise RuntimeError(f"Failed to load ONNX model {model_path}: {e}") from e
        self.input_name = self.session.get_inputs()[0].name

    @property
    def input_size(self) -> int:
        return self._input_size

    def run(self, tensor: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Run the model on a (1, S, S, 3) tensor."""
        outputs = self.session.run(None, {self.input_name: tensor.astype(np.float32)})
        candidates = next((o for o in outputs if np.ndim(o) == 3), None)
        prototypes = next((o for o in outputs if np.ndim(o) == 4), None)
        if candidates is None or prototypes is None:
            shapes = ", ".join(str(np.shape(o)) for o in outputs)
            raise ValueError(f"Expected a 3-D candidate and a 4-D prototype output, got {shapes}")
        return normalize_outputs(candidates, prototypes)
