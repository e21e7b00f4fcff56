"""Headless batch processing runner."""

import logging
import re
import sys
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from ..config import LabelTable, ProcessingConfig
from ..core.io import load_image, load_labels, save_mask
from ..detection.base import Detection, Detector
from ..detection.segmenter import SegmentationDetector


def configure_logging(verbose: bool) -> None:
    """Send redactseg debug timings to stderr when verbose."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("redactseg").setLevel(logging.DEBUG if verbose else logging.WARNING)


def mask_filename(image_path: str, detection: Detection) -> str:
    """Build the PNG filename for a detection mask.

    Args:
        image_path: Source image path.
        detection: Detection whose mask is written.

    Returns:
        Filename of the form <stem>_<id>_<label>.png.
    """
    label = re.sub(r"[^A-Za-z0-9_-]+", "_", detection.label) or "object"
    return f"{Path(image_path).stem}_{detection.id}_{label}.png"


def format_detection(detection: Detection) -> str:
    """Format a detection as a single summary line."""
    rect = detection.rect
    return (
        f"  [{detection.id}] {detection.label} ({detection.confidence:.3f}) "
        f"at ({rect.left:.1f}, {rect.top:.1f}, {rect.right:.1f}, {rect.bottom:.1f})"
    )


def process_images(
    detector: Detector, config: ProcessingConfig
) -> Dict[str, List[Detection]]:
    """Run detection on every input image.

    Args:
        detector: Detector to apply.
        config: Processing configuration.

    Returns:
        Mapping from input path to its detections.
    """
    results: Dict[str, List[Detection]] = {}
    for path in tqdm(config.input_paths, desc="Processing", disable=len(config.input_paths) < 2):
        image = load_image(path)
        detections = detector.detect(image)
        results[path] = detections

        if config.output.mask_dir:
            for detection in detections:
                save_mask(detection.mask, str(Path(config.output.mask_dir) / mask_filename(path, detection)))
    return results


def run_headless(config: ProcessingConfig) -> None:
    """Run headless batch processing.

    Args:
        config: Processing configuration.

    Raises:
        SystemExit: If the model or labels cannot be loaded.
    """
    configure_logging(config.verbose)

    try:
        labels = LabelTable.from_labels(load_labels(config.labels_path))
        print(f"Loaded {len(labels)} labels from {config.labels_path}")
        print(f"Loading {config.backend.backend} model from {config.backend.model_path}...")
        detector = SegmentationDetector.from_config(config.backend, labels, config.postprocess)
    except (OSError, ImportError, RuntimeError, ValueError) as e:
        print(f"Cannot load model assets: {e}", file=sys.stderr)
        sys.exit(1)

    results = process_images(detector, config)

    for path, detections in results.items():
        print(f"\n{path}: {len(detections)} detection(s)")
        for detection in detections:
            print(format_detection(detection))

    if config.output.mask_dir:
        print(f"\nMasks saved to: {config.output.mask_dir}")
