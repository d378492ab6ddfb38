"""Tests for color space conversions."""
import numpy as np
import pytest

from palette_gen.conversions import (
    WHITE_D65, conversion_path, convert, normalize_hue, space_name, srgb_to_linear,
)
from palette_gen.errors import InvalidArgument


class TestRoundTrips:
    """Converting to any space and back reproduces the sRGB input."""

    @pytest.mark.parametrize("space", ["linear", "xyz", "lab", "lch", "hsl", "hsv", "cmyk"])
    def test_round_trip(self, srgb_grid, space):
        there = convert(srgb_grid, "srgb", space)
        back = convert(there, space, "srgb")
        assert np.allclose(back, srgb_grid, atol=1e-5)

    def test_lab_lch_round_trip_is_direct(self):
        lab = np.array([[50.0, 20.0, -30.0], [75.0, -40.0, 10.0]])
        assert np.allclose(convert(convert(lab, "lab", "lch"), "lch", "lab"), lab)

    def test_single_color_shape(self):
        hsl = convert([0.2, 0.4, 0.6], "srgb", "hsl")
        assert hsl.shape == (3,)


class TestReferenceValues:
    """Known values from published references."""

    def test_documented_hsl_example(self):
        h, s, l = convert(np.array([0x77, 0x88, 0x99]) / 255.0, "rgb", "hsl")
        assert h == pytest.approx(210.0, abs=1e-6)
        assert s == pytest.approx(0.142857, abs=1e-4)
        assert l == pytest.approx(0.533333, abs=1e-4)

    def test_white_xyz_is_d65(self):
        assert np.allclose(convert([1.0, 1.0, 1.0], "srgb", "xyz"), WHITE_D65, atol=1e-6)

    def test_white_and_black_lab(self):
        assert np.allclose(convert([1.0, 1.0, 1.0], "srgb", "lab"), [100.0, 0.0, 0.0], atol=1e-3)
        assert np.allclose(convert([0.0, 0.0, 0.0], "srgb", "lab"), [0.0, 0.0, 0.0], atol=1e-9)

    def test_red_lab(self):
        assert np.allclose(convert([1.0, 0.0, 0.0], "srgb", "lab"), [53.2408, 80.0925, 67.2032], atol=0.01)

    def test_primary_hsv(self):
        assert np.allclose(convert([0.0, 0.0, 1.0], "srgb", "hsv"), [240.0, 1.0, 1.0])

    def test_cmyk_of_red(self):
        assert np.allclose(convert([1.0, 0.0, 0.0], "srgb", "cmyk"), [0.0, 1.0, 1.0, 0.0])

    def test_cmyk_of_black_has_no_ink_but_key(self):
        assert np.array_equal(convert([0.0, 0.0, 0.0], "srgb", "cmyk"), [0.0, 0.0, 0.0, 1.0])


class TestHue:
    """Hue is normalized and ties between channels resolve in R, G, B order."""

    @pytest.mark.parametrize("rgb,hue", [
        ([1.0, 1.0, 0.0], 60.0),
        ([0.0, 1.0, 1.0], 180.0),
        ([1.0, 0.0, 1.0], 300.0),
        ([0.5, 0.5, 0.5], 0.0),
    ])
    def test_tie_break(self, rgb, hue):
        assert convert(rgb, "srgb", "hsl")[0] == pytest.approx(hue)
        assert convert(rgb, "srgb", "hsv")[0] == pytest.approx(hue)

    def test_normalize_hue(self):
        hues = normalize_hue(np.array([-30.0, 360.0, 725.0, -1e-20]))
        assert np.allclose(hues[:3], [330.0, 0.0, 5.0])
        assert 0.0 <= hues[3] < 360.0

    def test_lch_hue_range(self):
        rng = np.random.default_rng(1)
        lab = np.column_stack([rng.uniform(0, 100, 500), rng.uniform(-100, 100, 500), rng.uniform(-100, 100, 500)])
        hue = convert(lab, "lab", "lch")[:, 2]
        assert np.all((hue >= 0.0) & (hue < 360.0))


class TestClamping:
    """Out-of-range input is clamped rather than rejected."""

    def test_linear_clamps(self):
        assert np.allclose(srgb_to_linear([-0.5, 1.5, 0.0]), [0.0, 1.0, 0.0])

    def test_out_of_gamut_lab(self):
        rgb = convert([[50.0, 150.0, -150.0], [120.0, 0.0, 0.0]], "lab", "srgb")
        assert np.all((rgb >= 0.0) & (rgb <= 1.0))

    def test_hsl_saturation_clamped(self):
        assert np.allclose(convert([0.0, 2.0, 0.5], "hsl", "srgb"), [1.0, 0.0, 0.0])


class TestGraph:
    """The conversion graph and space names."""

    def test_path_through_xyz(self):
        assert conversion_path("hsl", "lch") == ("hsl", "srgb", "linear", "xyz", "lab", "lch")

    def test_identity(self):
        values = np.array([0.1, 0.2, 0.3])
        result = convert(values, "srgb", "srgb")
        assert np.array_equal(result, values)
        assert result is not values

    def test_aliases(self):
        assert space_name("RGB") == "srgb"
        assert space_name("CIELab") == "lab"

    def test_unknown_space(self):
        with pytest.raises(InvalidArgument):
            convert([0.0, 0.0, 0.0], "srgb", "ycbcr")

    def test_wrong_channel_count(self):
        with pytest.raises(InvalidArgument):
            convert([0.0, 0.0, 0.0], "cmyk", "srgb")
