from typing import List

import numpy as np
import pytest

from redactseg.core.geometry import Rect
from redactseg.detection.base import Detection, Detector


def test_detection_dataclass():
    mask = np.zeros((10, 20, 4), dtype=np.uint8)
    mask[0, 0, 3] = 255
    rect = Rect.from_ltrb(0, 0, 20, 10)
    d = Detection(label="license_plate", confidence=0.9, rect=rect, mask=mask, id=0, color=(255, 0, 0))
    assert d.label == "license_plate"
    assert d.confidence == 0.9
    assert np.array_equal(d.box, np.array([0, 0, 20, 10]))
    assert d.mask_alpha.shape == (10, 20)
    assert d.mask_alpha.sum() == 1


def test_detection_is_frozen():
    d = Detection(
        label="screen",
        confidence=0.5,
        rect=Rect(0, 0, 1, 1),
        mask=np.zeros((1, 1, 4), dtype=np.uint8),
        id=0,
        color=(0, 255, 0),
    )
    with pytest.raises(AttributeError):
        d.label = "id_card"


class MockDetector:
    def detect(self, frame: np.ndarray) -> List[Detection]:
        height, width = frame.shape[:2]
        return [
            Detection(
                label="id_card",
                confidence=0.8,
                rect=Rect(0, 0, 10, 10),
                mask=np.zeros((height, width, 4), dtype=np.uint8),
                id=0,
                color=(0, 0, 255),
            )
        ]


def test_detector_protocol():
    detector: Detector = MockDetector()
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    detections = detector.detect(frame)
    assert len(detections) == 1
    assert detections[0].label == "id_card"
    assert detections[0].mask.shape == (100, 100, 4)
