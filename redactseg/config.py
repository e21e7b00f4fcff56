"""Configuration dataclasses for redactseg."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from .detection.colors import DEFAULT_LABEL_COLORS, FALLBACK_COLOR, Color, color_for_label


BACKENDS = ("torchscript", "onnx")


@dataclass(frozen=True)
class PostprocessConfig:
    """Configuration for turning raw model outputs into detections."""

    confidence_threshold: float = 0.1
    mask_threshold: float = 0.5
    mask_width: int = 160
    mask_height: int = 160
    num_coefficients: int = 32
    interpolation: str = "nearest"
    colorize_masks: bool = False
    mask_opacity: float = 1.0

    @property
    def row_length(self) -> int:
        """Values per candidate row: box (4), confidence, class, coefficients."""
        return 6 + self.num_coefficients


@dataclass(frozen=True)
class BackendConfig:
    """Configuration for the inference backend."""

    model_path: str = ""
    backend: str = "torchscript"
    input_size: int = 640
    device: str = "cpu"


@dataclass(frozen=True)
class OutputConfig:
    """Configuration for result output."""

    mask_dir: Optional[str] = None


@dataclass(frozen=True)
class LabelTable:
    """Ordered class labels with their display colors.

    Class index i of a model output refers to labels[i].
    """

    labels: Tuple[str, ...] = ()
    colors: Mapping[str, Color] = field(default_factory=lambda: DEFAULT_LABEL_COLORS)
    fallback_color: Color = FALLBACK_COLOR

    @classmethod
    def from_labels(
        cls, labels: Sequence[str], colors: Optional[Mapping[str, Color]] = None
    ) -> "LabelTable":
        """Build a table from a label sequence and optional color overrides."""
        table = dict(DEFAULT_LABEL_COLORS)
        if colors:
            table.update(colors)
        return cls(labels=tuple(labels), colors=MappingProxyType(table))

    def color_for(self, label: str) -> Color:
        return color_for_label(label, self.colors, self.fallback_color)

    def __len__(self) -> int:
        return len(self.labels)

    def __getitem__(self, index: int) -> str:
        return self.labels[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)


@dataclass(frozen=True)
class ProcessingConfig:
    """Combined configuration for a batch run."""

    input_paths: List[str]
    labels_path: str
    backend: BackendConfig
    postprocess: PostprocessConfig
    output: OutputConfig
    verbose: bool = False

    @classmethod
    def from_args(
        cls,
        input_paths: Sequence[str],
        model_path: str,
        labels_path: str,
        backend: str = "torchscript",
        input_size: int = 640,
        device: str = "cpu",
        confidence_threshold: float = 0.1,
        interpolation: str = "nearest",
        colorize_masks: bool = False,
        mask_opacity: float = 1.0,
        mask_dir: Optional[str] = None,
        verbose: bool = False,
    ) -> "ProcessingConfig":
        """Create ProcessingConfig from CLI arguments."""
        return cls(
            input_paths=list(input_paths),
            labels_path=labels_path,
            backend=BackendConfig(
                model_path=model_path,
                backend=backend,
                input_size=input_size,
                device=device,
            ),
            postprocess=PostprocessConfig(
                confidence_threshold=confidence_threshold,
                interpolation=interpolation,
                colorize_masks=colorize_masks,
                mask_opacity=mask_opacity,
            ),
            output=OutputConfig(mask_dir=mask_dir),
            verbose=verbose,
        )
