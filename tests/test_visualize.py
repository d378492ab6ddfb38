"""Tests for palette figures and statistics."""
import matplotlib.pyplot as plt
import pytest

from palette_gen.color import ColorValue
from palette_gen.visualize import palette_statistics, visualize_palette

COLORS = [ColorValue.from_rgb(255, 0, 0), ColorValue.from_rgb(0, 128, 0), ColorValue.from_rgb(0, 0, 255)]


def test_visualize_writes_file(tmp_path):
    path = tmp_path / "palette.png"
    fig = visualize_palette(COLORS, path=path)
    try:
        assert path.exists()
        assert path.stat().st_size > 0
        assert len(fig.axes) >= 2
    finally:
        plt.close(fig)


def test_visualize_without_path():
    fig = visualize_palette(COLORS, background=ColorValue.black(), references=[])
    plt.close(fig)


def test_statistics():
    stats = palette_statistics(COLORS)
    assert set(stats) == {"min_pairwise", "max_pairwise", "mean_pairwise", "min_from_black", "contrast", "names"}
    assert stats["names"] == ["Red", "Green", "Blue"]
    assert stats["min_pairwise"] <= stats["mean_pairwise"] <= stats["max_pairwise"]
    assert stats["contrast"][0] == pytest.approx(COLORS[0].contrast_ratio(ColorValue.white()))
