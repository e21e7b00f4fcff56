"""Instance segmentation detector built on a pluggable inference backend."""

import logging
import time
from typing import List

import numpy as np

from ..backends.base import InferenceBackend, prepare_input
from ..config import BackendConfig, LabelTable, PostprocessConfig
from .assembler import DetectionAssembler
from .base import Detection

logger = logging.getLogger(__name__)


def create_backend(config: BackendConfig) -> InferenceBackend:
    """Create the inference backend named in config.

    Args:
        config: Backend configuration.

    Returns:
        Loaded backend.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if config.backend == "torchscript":
        from ..backends.torch_backend import TorchScriptBackend
        return TorchScriptBackend(config.model_path, input_size=config.input_size, device=config.device)
    elif config.backend == "onnx":
        from ..backends.onnx_backend import OnnxBackend
        return OnnxBackend(config.model_path, input_size=config.input_size)
    else:
        raise ValueError(f"Unknown backend: {config.backend}")


class SegmentationDetector:
    """Detector implementing the Detector protocol for prototype-mask models.

    Attributes:
        backend: Model runner.
        labels: Label table indexed by class.
        config: Post-processing configuration.
        assembler: Converts raw outputs into detections.
    """

    def __init__(
        self,
        backend: InferenceBackend,
        labels: LabelTable,
        config: PostprocessConfig = PostprocessConfig(),
    ):
        """Initialize SegmentationDetector.

        Args:
            backend: Loaded inference backend.
            labels: Class labels and display colors.
            config: Post-processing configuration.
        """
        self.backend = backend
        self.labels = labels
        self.config = config
        self.assembler = DetectionAssembler(config, labels)

    @classmethod
    def from_config(
        cls,
        backend_config: BackendConfig,
        labels: LabelTable,
        config: PostprocessConfig = PostprocessConfig(),
    ) -> "SegmentationDetector":
        """Create a detector, loading the backend from its configuration."""
        return cls(create_backend(backend_config), labels, config)

    def detect(self, frame: np.ndarray) -> List[Detection]:
        """Detect and segment objects in a frame.

        Args:
            frame: Input frame as RGB numpy array (H, W, 3).

        Returns:
            Detections with masks at the frame's resolution, in model order.
        """
        height, width = frame.shape[:2]

        start = time.perf_counter()
        tensor = prepare_input(frame, self.backend.input_size)
        logger.debug("Prepared %dx%d input in %.2fms", width, height, (time.perf_counter() - start) * 1000)

        start = time.perf_counter()
        candidates, prototypes = self.backend.run(tensor)
        logger.debug("Inference completed in %.2fms", (time.perf_counter() - start) * 1000)

        return self.assembler.assemble(candidates, prototypes, width, height)
