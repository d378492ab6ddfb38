"""
Random color strategies.
"""

import numpy as np

from .color import ColorValue
from .conversions import convert
from .errors import InvalidArgument


def _vivid(rng, count):
    hsl = np.column_stack([
        rng.uniform(0.0, 360.0, count),
        0.2 + 0.6 * rng.random(count),
        0.3 + 0.4 * rng.random(count),
    ])
    return convert(hsl, "hsl", "srgb")


def _uniform_rgb(rng, count):
    return rng.integers(0, 256, size=(count, 3)) / 255.0


def _uniform_gray(rng, count):
    return np.repeat(rng.random(count)[:, None], 3, axis=1)


def _uniform_hue_lch(rng, count):
    lch = np.column_stack([np.full(count, 70.0), np.full(count, 35.0), rng.uniform(0.0, 360.0, count)])
    return convert(lch, "lch", "srgb")


STRATEGIES = {
    "vivid": _vivid,
    "rgb": _uniform_rgb,
    "gray": _uniform_gray,
    "lch_hue": _uniform_hue_lch,
}


def random_colors(count, strategy="vivid", seed=None):
    """Draw `count` random colors with the named strategy."""
    if strategy not in STRATEGIES:
        raise InvalidArgument("strategy", f"must be one of {', '.join(STRATEGIES)}", strategy)
    if count < 0:
        raise InvalidArgument("count", "must not be negative", count)
    rng = np.random.default_rng(seed)
    return [ColorValue(*row) for row in STRATEGIES[strategy](rng, count)]
