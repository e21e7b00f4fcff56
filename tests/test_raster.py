import numpy as np
import pytest

from redactseg.core.geometry import MaskRegion
from redactseg.core.matrix import DenseMatrix
from redactseg.core.raster import mask_to_rgba, recolor_mask, resize_mask
from redactseg.core.synthesis import BinaryMask


def left_half_mask() -> BinaryMask:
    matrix = DenseMatrix(160, 160)
    matrix.fill_region(0, 0, 80, 160, 1.0)
    return BinaryMask(matrix=matrix, region=MaskRegion(0, 0, 80, 160))


def test_mask_to_rgba_defaults_to_opaque_white():
    rgba = mask_to_rgba(left_half_mask())
    assert rgba.shape == (160, 160, 4)
    assert rgba.dtype == np.uint8
    assert np.all(rgba[:, :80] == 255)
    assert np.all(rgba[:, 80:] == 0)


def test_mask_to_rgba_with_color_and_opacity():
    rgba = mask_to_rgba(left_half_mask(), color=(255, 0, 0), opacity=0.2)
    assert tuple(rgba[5, 5]) == (255, 0, 0, 51)
    assert tuple(rgba[5, 100]) == (0, 0, 0, 0)


def test_mask_to_rgba_rejects_bad_opacity():
    with pytest.raises(ValueError):
        mask_to_rgba(left_half_mask(), color=(0, 0, 0), opacity=1.5)


def test_resize_mask_nearest_keeps_layout():
    rgba = mask_to_rgba(left_half_mask())
    resized = resize_mask(rgba, 320, 240)
    assert resized.shape == (240, 320, 4)
    assert np.all(resized[:, :160, 3] == 255)
    assert np.all(resized[:, 160:, 3] == 0)


def test_resize_mask_same_size_returns_copy():
    rgba = mask_to_rgba(left_half_mask())
    resized = resize_mask(rgba, 160, 160)
    assert np.array_equal(resized, rgba)
    assert resized is not rgba


def test_resize_mask_rejects_unknown_interpolation():
    rgba = mask_to_rgba(left_half_mask())
    with pytest.raises(ValueError):
        resize_mask(rgba, 10, 10, interpolation="lanczos9")


def test_resize_mask_rejects_empty_target():
    rgba = mask_to_rgba(left_half_mask())
    with pytest.raises(ValueError):
        resize_mask(rgba, 0, 10)


def test_recolor_mask_keeps_transparency_and_scales_alpha():
    rgba = mask_to_rgba(left_half_mask())
    recolored = recolor_mask(rgba, (0, 0, 0), opacity=0.2)
    assert tuple(recolored[0, 0]) == (0, 0, 0, 51)
    assert tuple(recolored[0, 159]) == (0, 0, 0, 0)
    assert np.all(rgba[:, :80] == 255)
