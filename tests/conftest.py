import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def srgb_grid():
    """216 sRGB colors covering the cube, including its corners."""
    levels = np.linspace(0.0, 1.0, 6)
    r, g, b = np.meshgrid(levels, levels, levels, indexing="ij")
    return np.column_stack([r.ravel(), g.ravel(), b.ravel()])
