"""Assemble detections from raw candidate rows and prototype masks."""

import logging
import time
from typing import List

import numpy as np

from ..config import LabelTable, PostprocessConfig
from ..core.geometry import box_to_pixels, scale_to_mask_space
from ..core.raster import mask_to_rgba, resize_mask
from ..core.synthesis import MaskSynthesizer, validate_prototypes
from .base import Detection
from .filtering import CandidateRow, FilterOutcome, filter_candidate

logger = logging.getLogger(__name__)


class DetectionAssembler:
    """Filter candidates and build a Detection with a full-size mask for each.

    The assembler holds only read-only configuration, so a single instance
    can serve any number of calls.

    Attributes:
        config: Post-processing configuration.
        labels: Label table indexed by class.
        synthesizer: Mask synthesizer used for every surviving candidate.
    """

    def __init__(self, config: PostprocessConfig, labels: LabelTable):
        """Initialize the assembler.

        Args:
            config: Post-processing configuration.
            labels: Class labels and display colors.
        """
        self.config = config
        self.labels = labels
        self.synthesizer = MaskSynthesizer(mask_threshold=config.mask_threshold)

    def _rows(self, candidates: np.ndarray) -> np.ndarray:
        candidates = np.asarray(candidates, dtype=np.float64)
        if candidates.ndim == 3 and candidates.shape[0] == 1:
            candidates = candidates[0]
        if candidates.ndim != 2 or candidates.shape[1] < self.config.row_length:
            raise ValueError(
                f"Candidates must have shape (N, {self.config.row_length}), "
                f"got {candidates.shape}"
            )
        return candidates

    def _prototypes(self, prototypes: np.ndarray) -> np.ndarray:
        prototypes = np.asarray(prototypes, dtype=np.float32)
        if prototypes.ndim == 4 and prototypes.shape[0] == 1:
            prototypes = prototypes[0]
        prototypes = validate_prototypes(prototypes, self.config.num_coefficients)
        expected = (self.config.mask_height, self.config.mask_width)
        if prototypes.shape[:2] != expected:
            raise ValueError(
                f"Prototype grid must be {expected[0]}x{expected[1]}, "
                f"got {prototypes.shape[0]}x{prototypes.shape[1]}"
            )
        return prototypes

    def build_detection(
        self,
        row: CandidateRow,
        prototypes: np.ndarray,
        detection_id: int,
        image_width: int,
        image_height: int,
    ) -> Detection:
        """Build one detection from a candidate that passed filtering."""
        label = self.labels[row.class_index]
        color = self.labels.color_for(label)

        rect = box_to_pixels(row.x1, row.y1, row.x2, row.y2, image_width, image_height)
        region = scale_to_mask_space(
            rect,
            image_width,
            image_height,
            mask_width=self.config.mask_width,
            mask_height=self.config.mask_height,
        )
        binary = self.synthesizer.synthesize(row.coefficients, prototypes, region)

        start = time.perf_counter()
        if self.config.colorize_masks:
            rgba = mask_to_rgba(binary, color=color, opacity=self.config.mask_opacity)
        else:
            rgba = mask_to_rgba(binary)
        mask = resize_mask(rgba, image_width, image_height, self.config.interpolation)
        mask.flags.writeable = False
        logger.debug(
            "Rasterized mask for %s in %.2fms", label, (time.perf_counter() - start) * 1000
        )

        return Detection(
            label=label,
            confidence=row.confidence,
            rect=rect,
            mask=mask,
            id=detection_id,
            color=color,
        )

    def assemble(
        self,
        candidates: np.ndarray,
        prototypes: np.ndarray,
        image_width: int,
        image_height: int,
    ) -> List[Detection]:
        """Turn raw model outputs into detections.

        Args:
            candidates: Candidate rows, shape (N, 38) or (1, N, 38).
            prototypes: Prototype masks, shape (160, 160, 32) or (1, 160, 160, 32).
            image_width: Original image width in pixels.
            image_height: Original image height in pixels.

        Returns:
            Detections in candidate order, with ids 0..k-1. Empty if no
            candidate passes filtering.

        Raises:
            ValueError: If the tensors have unexpected shapes.
        """
        start = time.perf_counter()
        rows = self._rows(candidates)
        prototypes = self._prototypes(prototypes)

        detections: List[Detection] = []
        dropped = {FilterOutcome.LOW_CONFIDENCE: 0, FilterOutcome.INVALID_CLASS: 0}
        for values in rows:
            row = CandidateRow.from_values(values, self.config.num_coefficients)
            outcome = filter_candidate(row, self.config.confidence_threshold, len(self.labels))
            if not outcome.kept:
                dropped[outcome] += 1
                continue
            logger.debug(
                "Candidate %s (class %d) confidence %.3f",
                self.labels[row.class_index],
                row.class_index,
                row.confidence,
            )
            detections.append(
                self.build_detection(
                    row, prototypes, len(detections), image_width, image_height
                )
            )

        logger.debug(
            "Assembled %d detections from %d candidates "
            "(%d low confidence, %d invalid class) in %.2fms",
            len(detections),
            len(rows),
            dropped[FilterOutcome.LOW_CONFIDENCE],
            dropped[FilterOutcome.INVALID_CLASS],
            (time.perf_counter() - start) * 1000,
        )
        return detections
