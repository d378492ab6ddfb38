"""Tests for perceptual distance metrics."""
import numpy as np
import pytest

from palette_gen.color import ColorValue
from palette_gen.delta_e import (
    cie76, ciede2000, delta_e, distance, min_pairwise_distance, pairwise,
)
from palette_gen.errors import InvalidArgument


class TestCIEDE2000:
    """CIEDE2000 against the Sharma, Wu and Dalal reference data."""

    def test_reference_pair_blue(self):
        assert ciede2000([50.0, 2.6772, -79.7751], [50.0, 0.0, -82.7485]) == pytest.approx(2.0425, abs=1e-4)

    def test_reference_pair_achromatic(self):
        assert ciede2000([50.0, 0.0, 0.0], [50.0, -1.0, 2.0]) == pytest.approx(2.3669, abs=1e-4)

    def test_broadcasting(self):
        lab1 = np.array([[50.0, 2.6772, -79.7751], [50.0, 0.0, 0.0]])
        lab2 = np.array([[50.0, 0.0, -82.7485], [50.0, -1.0, 2.0]])
        assert np.allclose(ciede2000(lab1, lab2), [2.0425, 2.3669], atol=1e-4)

    def test_symmetric(self):
        rng = np.random.default_rng(7)
        a = np.column_stack([rng.uniform(0, 100, 200), rng.uniform(-90, 90, 200), rng.uniform(-90, 90, 200)])
        b = np.column_stack([rng.uniform(0, 100, 200), rng.uniform(-90, 90, 200), rng.uniform(-90, 90, 200)])
        assert np.allclose(ciede2000(a, b), ciede2000(b, a))

    def test_identity_is_zero(self):
        lab = np.array([[30.0, 10.0, -5.0], [70.0, -60.0, 40.0]])
        assert np.allclose(ciede2000(lab, lab), 0.0)


class TestDistance:
    """Distances between ColorValues."""

    def test_black_white(self):
        black, white = ColorValue.black(), ColorValue.white()
        assert distance(black, white) == pytest.approx(100.0, abs=0.01)
        assert distance(black, white, "cie76") == pytest.approx(100.0, abs=0.01)

    def test_black_white_near_maximum(self):
        corners = [ColorValue(r, g, b) for r in (0, 1) for g in (0, 1) for b in (0, 1)]
        largest = max(distance(a, b) for a in corners for b in corners)
        assert distance(ColorValue.black(), ColorValue.white()) >= 0.9 * largest

    def test_same_color(self):
        color = ColorValue.from_rgb(12, 200, 99)
        assert distance(color, color) == 0.0

    def test_symmetry(self):
        a, b = ColorValue.from_rgb(255, 0, 0), ColorValue.from_rgb(0, 0, 255)
        assert distance(a, b) == pytest.approx(distance(b, a))

    def test_cie76_is_euclidean(self):
        assert cie76([0.0, 0.0, 0.0], [3.0, 4.0, 0.0]) == pytest.approx(5.0)

    def test_unknown_metric(self):
        with pytest.raises(InvalidArgument):
            delta_e([0.0, 0.0, 0.0], [1.0, 1.0, 1.0], "cie94")


class TestPairwise:
    """Distance matrices and the minimum pairwise distance."""

    def test_matrix_is_symmetric_with_zero_diagonal(self):
        labs = np.array([[20.0, 0.0, 0.0], [50.0, 20.0, 10.0], [80.0, -30.0, 5.0]])
        matrix = pairwise(labs)
        assert matrix.shape == (3, 3)
        assert np.allclose(matrix, matrix.T)
        assert np.allclose(np.diag(matrix), 0.0)

    def test_min_pairwise_distance(self):
        colors = [ColorValue.black(), ColorValue.white(), ColorValue.graytone(0.5)]
        expected = min(distance(a, b) for i, a in enumerate(colors) for b in colors[i + 1:])
        assert min_pairwise_distance(colors) == pytest.approx(expected)

    def test_single_color(self):
        assert min_pairwise_distance([ColorValue.black()]) == float('inf')
