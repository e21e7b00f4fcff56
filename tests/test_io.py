from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from redactseg.core.io import is_image_file, load_image, load_labels, save_mask


def test_is_image_file():
    assert is_image_file("photo.JPG")
    assert is_image_file("scan.png")
    assert not is_image_file("clip.mp4")


def test_load_image_returns_rgb(tmp_path: Path):
    path = tmp_path / "gray.png"
    Image.new("L", (12, 8), color=128).save(path)
    image = load_image(str(path))
    assert image.shape == (8, 12, 3)
    assert image.dtype == np.uint8
    assert np.all(image == 128)


def test_load_image_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_image(str(tmp_path / "missing.png"))
    broken = tmp_path / "broken.jpg"
    broken.write_bytes(b"not an image")
    with pytest.raises(IOError):
        load_image(str(broken))


def test_load_labels_drops_trailing_blank_lines(tmp_path: Path):
    path = tmp_path / "labels.txt"
    path.write_text("license_plate\r\nid_card\nscreen\n\n", encoding="utf-8")
    assert load_labels(str(path)) == ["license_plate", "id_card", "screen"]


def test_load_labels_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_labels(str(tmp_path / "labels.txt"))


def test_save_mask_writes_rgba_png(tmp_path: Path):
    rgba = np.zeros((6, 4, 4), dtype=np.uint8)
    rgba[1, 2] = (255, 0, 0, 255)
    path = tmp_path / "nested" / "mask.png"
    save_mask(rgba, str(path))
    with Image.open(path) as image:
        assert image.mode == "RGBA"
        assert image.size == (4, 6)
        assert image.getpixel((2, 1)) == (255, 0, 0, 255)
