import numpy as np
import pytest


@pytest.fixture
def constant_prototypes() -> np.ndarray:
    """160x160x32 prototypes with channel 0 set to 1.0 and the rest zero."""
    prototypes = np.zeros((160, 160, 32), dtype=np.float32)
    prototypes[..., 0] = 1.0
    return prototypes


@pytest.fixture
def random_prototypes() -> np.ndarray:
    rng = np.random.default_rng(7)
    return rng.standard_normal((160, 160, 32)).astype(np.float32)


def make_row(box, confidence, class_index, coefficients=None) -> np.ndarray:
    """Build a 38-value candidate row."""
    if coefficients is None:
        coefficients = np.zeros(32, dtype=np.float32)
    return np.concatenate(
        [np.asarray(box, dtype=np.float32), [confidence, class_index], coefficients]
    ).astype(np.float32)
