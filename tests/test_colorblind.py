"""Tests for color vision deficiency simulation."""
import numpy as np
import pytest

from palette_gen import colorblind
from palette_gen.color import ColorValue
from palette_gen.errors import InvalidArgument


class TestMatrices:
    """The deficiency matrices match the published data."""

    @pytest.mark.parametrize("kind", colorblind.DEFICIENCIES)
    def test_matches_reference(self, kind):
        assert np.allclose(colorblind.DEFICIENCY_MATRICES[kind],
                           colorblind._REFERENCE_MATRICES[kind], atol=1e-5)

    @pytest.mark.parametrize("kind", colorblind.DEFICIENCIES)
    def test_rows_sum_to_one(self, kind):
        assert np.allclose(colorblind.DEFICIENCY_MATRICES[kind].sum(axis=1), 1.0)

    def test_machado_protanopia_first_row(self):
        assert np.allclose(colorblind.DEFICIENCY_MATRICES["protanopia"][0],
                           [0.152286, 1.052583, -0.204868], atol=1e-5)

    def test_severity_interpolates(self):
        half = colorblind.deficiency_matrix("deuteranopia", 0.5)
        full = colorblind.DEFICIENCY_MATRICES["deuteranopia"]
        assert np.allclose(half, 0.5 * np.eye(3) + 0.5 * full)

    def test_anomaly_default_severity(self):
        matrix = colorblind.deficiency_matrix("protanomaly")
        expected = colorblind.deficiency_matrix("protanopia", colorblind.ANOMALY_SEVERITY)
        assert np.allclose(matrix, expected)


class TestSimulate:
    """Simulating deficiencies on single colors."""

    @pytest.mark.parametrize("kind", ["protanopia", "deuteranopia", "tritanopia", "achromatopsia", "deuteranomaly"])
    def test_grays_are_fixed_points(self, kind):
        for value in range(0, 256, 17):
            gray = ColorValue.from_rgb(value, value, value)
            simulated = gray.simulate_colorblindness(kind)
            assert simulated.to_rgb() == (value, value, value)
            assert simulated == gray

    def test_red_green_confusion(self):
        red, green = ColorValue.from_rgb(255, 0, 0), ColorValue.from_rgb(0, 255, 0)
        before = red.distance(green)
        after = colorblind.simulate(red, "protanopia").distance(colorblind.simulate(green, "protanopia"))
        assert after < before

    def test_changes_chromatic_colors(self):
        red = ColorValue.from_rgb(255, 0, 0)
        assert colorblind.simulate(red, "protanopia") != red

    def test_zero_severity_is_identity(self):
        color = ColorValue.from_rgb(200, 30, 90)
        assert colorblind.simulate(color, "tritanopia", severity=0.0) == color

    def test_alias(self):
        color = ColorValue.from_rgb(10, 180, 60)
        assert colorblind.simulate(color, "prot") == colorblind.simulate(color, "protanopia")

    def test_alpha_preserved(self):
        color = ColorValue.from_rgb(10, 180, 60, alpha=0.25)
        assert colorblind.simulate(color, "deuteranopia").alpha == 0.25

    def test_vectorised(self):
        linear = np.array([[1.0, 0.0, 0.0], [0.2, 0.2, 0.2]])
        result = colorblind.simulate_linear(linear, "tritanopia")
        assert result.shape == (2, 3)
        assert np.allclose(result[1], 0.2)


class TestErrors:
    """Unsupported input raises InvalidArgument."""

    def test_unknown_kind(self):
        with pytest.raises(InvalidArgument) as info:
            colorblind.simulate(ColorValue.black(), "monochromacy")
        assert info.value.argument == "kind"

    def test_severity_out_of_range(self):
        with pytest.raises(InvalidArgument):
            colorblind.deficiency_matrix("protanopia", 1.5)
