import numpy as np
import pytest

from redactseg.core.matrix import DenseMatrix


def test_new_matrix_is_zero_filled():
    matrix = DenseMatrix(4, 3)
    assert matrix.data.shape == (12,)
    assert matrix.data.dtype == np.float32
    assert np.all(matrix.data == 0.0)


def test_filled_matrix():
    matrix = DenseMatrix.filled(2, 2, 1.5)
    assert np.all(matrix.data == 1.5)


@pytest.mark.parametrize("x,y,value", [(0, 0, 1.0), (3, 0, -2.5), (0, 2, 7.25), (3, 2, 0.5)])
def test_get_returns_set_value(x, y, value):
    matrix = DenseMatrix(4, 3)
    matrix.set(x, y, value)
    assert matrix.get(x, y) == value
    assert matrix.data[y * 4 + x] == value


def test_out_of_range_access_raises():
    matrix = DenseMatrix(4, 3)
    with pytest.raises(IndexError):
        matrix.get(4, 0)
    with pytest.raises(IndexError):
        matrix.set(0, -1, 1.0)


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        DenseMatrix(-1, 2)


def test_fill_region_touches_only_region():
    matrix = DenseMatrix(5, 4)
    matrix.fill_region(1, 1, 3, 3, 9.0)
    grid = matrix.as_array()
    expected = np.zeros((4, 5), dtype=np.float32)
    expected[1:3, 1:3] = 9.0
    assert np.array_equal(grid, expected)


def test_fill_region_clips_to_bounds():
    matrix = DenseMatrix(4, 4)
    matrix.fill_region(-2, 2, 10, 10, 1.0)
    grid = matrix.as_array()
    assert np.all(grid[2:, :] == 1.0)
    assert np.all(grid[:2, :] == 0.0)


def test_fill_region_fully_outside_is_noop():
    matrix = DenseMatrix(4, 4)
    matrix.fill_region(5, 5, 8, 8, 1.0)
    matrix.fill_region(-5, -5, -1, -1, 1.0)
    matrix.fill_region(3, 3, 1, 1, 1.0)
    assert np.all(matrix.data == 0.0)


def test_apply_region_is_elementwise_and_scoped():
    matrix = DenseMatrix.filled(4, 4, 2.0)
    matrix.apply_region(0, 0, 2, 4, lambda v: v * 3)
    grid = matrix.as_array()
    assert np.all(grid[:, :2] == 6.0)
    assert np.all(grid[:, 2:] == 2.0)


def test_apply_region_empty_does_not_call_fn():
    matrix = DenseMatrix(4, 4)

    def fail(values):
        raise AssertionError("should not be called")

    matrix.apply_region(2, 2, 2, 4, fail)


def test_copy_is_independent():
    matrix = DenseMatrix(3, 3)
    matrix.set(1, 1, 4.0)
    clone = matrix.copy()
    clone.set(1, 1, 5.0)
    clone.set(0, 0, 1.0)
    assert matrix.get(1, 1) == 4.0
    assert matrix.get(0, 0) == 0.0
    assert clone.data is not matrix.data


def test_buffer_is_never_replaced():
    matrix = DenseMatrix(3, 3)
    buffer = matrix.data
    matrix.fill_region(0, 0, 3, 3, 1.0)
    matrix.apply_region(0, 0, 3, 3, lambda v: v + 1)
    assert matrix.data is buffer
    assert len(matrix.data) == 9
