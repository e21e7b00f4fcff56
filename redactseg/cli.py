"""Command-line interface for redactseg."""

import argparse
from pathlib import Path

from . import __version__
from .config import BACKENDS, ProcessingConfig
from .core.raster import INTERPOLATIONS

EPILOG = """\
Examples:
  redactseg photo.jpg --model model.torchscript --labels labels.txt
  redactseg *.jpg --model model.onnx --backend onnx --labels labels.txt --mask-dir masks/
  redactseg card.png --model model.torchscript --labels labels.txt --colorize --opacity 0.7

Model outputs:
  candidates  [1, N, 38]  x1 y1 x2 y2 (fractions of image size), confidence,
                          class index, 32 mask coefficients
  prototypes  [1, 160, 160, 32]  shared basis masks
"""


def parse_args(args=None) -> ProcessingConfig:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv).

    Returns:
        ProcessingConfig with parsed options.
    """
    parser = argparse.ArgumentParser(
        prog="redactseg",
        description="Detect objects and synthesize instance masks at original image resolution.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "inputs",
        nargs="+",
        type=str,
        help="Input images (.jpg, .png, ...)",
    )

    parser.add_argument(
        "-m", "--model",
        type=str,
        required=True,
        help="Segmentation model file",
    )

    parser.add_argument(
        "-l", "--labels",
        type=str,
        required=True,
        help="Labels file, one class name per line",
    )

    parser.add_argument(
        "--backend",
        type=str,
        default="torchscript",
        choices=BACKENDS,
        help="Inference backend (default: torchscript)",
    )

    parser.add_argument(
        "--input-size",
        type=int,
        default=640,
        help="Square model input resolution (default: 640)",
    )

    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        help="Torch device for the torchscript backend (default: cpu)",
    )

    parser.add_argument(
        "--confidence",
        type=float,
        default=0.1,
        help="Keep candidates with confidence above this; 0.0-1.0 (default: 0.1)",
    )

    parser.add_argument(
        "--interpolation",
        type=str,
        default="nearest",
        choices=sorted(INTERPOLATIONS),
        help="Mask resize interpolation (default: nearest)",
    )

    parser.add_argument(
        "--colorize",
        action="store_true",
        help="Paint masks with the label color instead of white",
    )

    parser.add_argument(
        "--opacity",
        type=float,
        default=1.0,
        help="Mask opacity with --colorize; 0.0-1.0 (default: 1.0)",
    )

    parser.add_argument(
        "--mask-dir",
        type=str,
        default=None,
        help="Write each detection mask as PNG into this directory",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-stage timings",
    )

    parsed = parser.parse_args(args)

    # Assets must exist before any processing starts
    for path in parsed.inputs:
        if not Path(path).exists():
            parser.error(f"Input file not found: {path}")
    if not Path(parsed.model).exists():
        parser.error(f"Model file not found: {parsed.model}")
    if not Path(parsed.labels).exists():
        parser.error(f"Labels file not found: {parsed.labels}")
    if not 0.0 <= parsed.confidence <= 1.0:
        parser.error("--confidence must be between 0.0 and 1.0")
    if not 0.0 <= parsed.opacity <= 1.0:
        parser.error("--opacity must be between 0.0 and 1.0")
    if parsed.input_size <= 0:
        parser.error("--input-size must be positive")

    return ProcessingConfig.from_args(
        input_paths=parsed.inputs,
        model_path=parsed.model,
        labels_path=parsed.labels,
        backend=parsed.backend,
        input_size=parsed.input_size,
        device=parsed.device,
        confidence_threshold=parsed.confidence,
        interpolation=parsed.interpolation,
        colorize_masks=parsed.colorize,
        mask_opacity=parsed.opacity,
        mask_dir=parsed.mask_dir,
        verbose=parsed.verbose,
    )
