from pathlib import Path
from typing import List
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from redactseg.config import ProcessingConfig
from redactseg.core.geometry import Rect
from redactseg.detection.base import Detection
from redactseg.runners.headless import format_detection, mask_filename, process_images, run_headless


def make_detection(label="license_plate", detection_id=0) -> Detection:
    mask = np.zeros((8, 8, 4), dtype=np.uint8)
    mask[2:4, 2:4] = 255
    return Detection(
        label=label,
        confidence=0.875,
        rect=Rect.from_ltrb(1, 2, 5, 6),
        mask=mask,
        id=detection_id,
        color=(255, 0, 0),
    )


class MockDetector:
    def __init__(self):
        self.frames: List[np.ndarray] = []

    def detect(self, frame: np.ndarray) -> List[Detection]:
        self.frames.append(frame)
        return [make_detection(), make_detection("id card/front", 1)]


@pytest.fixture
def image_path(tmp_path: Path) -> str:
    path = tmp_path / "photo.png"
    Image.new("RGB", (8, 8)).save(path)
    return str(path)


def make_config(image_path: str, tmp_path: Path, mask_dir=None) -> ProcessingConfig:
    labels = tmp_path / "labels.txt"
    labels.write_text("license_plate\nid_card\n")
    return ProcessingConfig.from_args(
        input_paths=[image_path],
        model_path=str(tmp_path / "model.torchscript"),
        labels_path=str(labels),
        mask_dir=mask_dir,
    )


def test_mask_filename_sanitizes_label():
    assert mask_filename("/data/photo.jpg", make_detection()) == "photo_0_license_plate.png"
    assert mask_filename("photo.jpg", make_detection("id card/front", 3)) == "photo_3_id_card_front.png"


def test_format_detection():
    line = format_detection(make_detection())
    assert line == "  [0] license_plate (0.875) at (1.0, 2.0, 5.0, 6.0)"


def test_process_images_writes_masks(image_path, tmp_path: Path):
    mask_dir = tmp_path / "masks"
    config = make_config(image_path, tmp_path, mask_dir=str(mask_dir))
    detector = MockDetector()

    results = process_images(detector, config)

    assert detector.frames[0].shape == (8, 8, 3)
    assert len(results[image_path]) == 2
    assert sorted(p.name for p in mask_dir.iterdir()) == [
        "photo_0_license_plate.png",
        "photo_1_id_card_front.png",
    ]


def test_run_headless_prints_detections(image_path, tmp_path: Path, capsys):
    config = make_config(image_path, tmp_path)
    with patch("redactseg.runners.headless.SegmentationDetector") as mock_detector:
        mock_detector.from_config.return_value = MockDetector()
        run_headless(config)

    _, labels, _ = mock_detector.from_config.call_args[0]
    assert list(labels) == ["license_plate", "id_card"]
    out = capsys.readouterr().out
    assert "Loaded 2 labels" in out
    assert "2 detection(s)" in out
    assert "[1] id card/front" in out


def test_run_headless_exits_when_model_fails(image_path, tmp_path: Path, capsys):
    config = make_config(image_path, tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        run_headless(config)
    assert excinfo.value.code == 1
    assert "Cannot load model assets" in capsys.readouterr().err
