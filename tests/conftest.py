import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def gun_values():
    return np.array([0, 32, 64, 96, 128, 160, 192, 224, 255], dtype=float)


@pytest.fixture
def crt_luminance():
    """Photometer readings of a typical display, cd/m^2."""
    return np.array([0.1, 0.5, 2, 6, 14, 28, 50, 80, 120], dtype=float)
