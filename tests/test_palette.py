"""Tests for contrast checks, named colors, sampling and palette helpers."""
import pytest

from palette_gen import contrast, named, palette, sampling
from palette_gen.color import ColorValue
from palette_gen.errors import InvalidArgument

BLACK = ColorValue.black()
WHITE = ColorValue.white()
GRAY = ColorValue.from_rgb(128, 128, 128)


class TestContrast:

    def test_ratio_symmetric(self):
        red = ColorValue.from_rgb(255, 0, 0)
        assert contrast.contrast_ratio(red, WHITE) == pytest.approx(contrast.contrast_ratio(WHITE, red))
        assert contrast.contrast_ratio(red, red) == pytest.approx(1.0)

    def test_wcag_levels(self):
        mid = ColorValue.from_rgb(130, 130, 130)
        assert contrast.meets_wcag(BLACK, WHITE, "AAA")
        assert not contrast.meets_wcag(mid, WHITE, "AA")
        assert contrast.meets_wcag(mid, WHITE, "aa", large_text=True)

    def test_unknown_level(self):
        with pytest.raises(InvalidArgument):
            contrast.meets_wcag(BLACK, WHITE, "A")


class TestNamed:

    def test_lookup(self):
        assert named.lookup("Grey") == (128, 128, 128)
        assert named.lookup("alice-blue") == (240, 248, 255)

    def test_unknown(self):
        with pytest.raises(InvalidArgument):
            named.lookup("ultraviolet")

    def test_nearest_name(self):
        assert named.nearest_name(ColorValue.from_rgb(255, 0, 0)) == "Red"
        assert named.nearest_name(ColorValue.from_rgb(0x77, 0x88, 0x99)) == "LightSlateGray"
        assert named.nearest_name(ColorValue.from_rgb(250, 2, 3)) == "Red"

    def test_names(self):
        assert "AliceBlue" in named.names()


class TestSampling:

    def test_reproducible(self):
        first = sampling.random_colors(10, seed=1)
        assert len(first) == 10
        assert first == sampling.random_colors(10, seed=1)

    def test_gray(self):
        for color in sampling.random_colors(20, "gray", seed=3):
            assert color.r == color.g == color.b

    def test_vivid_bounds(self):
        for color in sampling.random_colors(50, "vivid", seed=5):
            assert 0.3 - 1e-9 <= color.to_hsl().l <= 0.7 + 1e-9

    def test_empty(self):
        assert sampling.random_colors(0, "rgb") == []

    def test_errors(self):
        with pytest.raises(InvalidArgument):
            sampling.random_colors(3, "pastel")
        with pytest.raises(InvalidArgument):
            sampling.random_colors(-1)


class TestPalette:

    def test_unique_keeps_first(self):
        red, red_alpha = ColorValue.from_rgb(255, 0, 0), ColorValue.from_rgb(255, 0, 0, alpha=0.5)
        result = palette.unique([red, BLACK, red_alpha])
        assert len(result) == 2
        assert result[0].alpha == 1.0

    def test_sort_by_brightness(self):
        assert palette.sort_colors([WHITE, BLACK, GRAY]) == [BLACK, GRAY, WHITE]
        assert palette.sort_colors([WHITE, BLACK, GRAY], reverse=True) == [WHITE, GRAY, BLACK]

    def test_sort_by_hue(self):
        hues = [c.to_lch().h for c in palette.sort_colors(sampling.random_colors(8, seed=2), "hue")]
        assert hues == sorted(hues)

    def test_sort_by_operand(self):
        assert palette.sort_by_operand([WHITE, GRAY, BLACK], BLACK, "contrast") == [BLACK, GRAY, WHITE]
        assert palette.sort_by_operand([BLACK, WHITE, GRAY], WHITE, "distance-cie76") == [WHITE, GRAY, BLACK]

    def test_unknown_key(self):
        with pytest.raises(InvalidArgument):
            palette.sort_colors([BLACK], "warmth")
        with pytest.raises(InvalidArgument):
            palette.sort_by_operand([BLACK], WHITE, "distance")
