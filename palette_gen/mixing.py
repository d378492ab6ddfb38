"""
Interpolation between colors: two-color mixes and multi-stop gradients.
"""

import numpy as np

from .conversions import convert, space_name
from .errors import InvalidArgument

MIX_SPACES = ("srgb", "linear", "hsl", "hsv", "lab", "lch")

# (hue channel, channel that makes the hue meaningful)
_POLAR = {"hsl": (0, 1), "hsv": (0, 1), "lch": (2, 1)}

ACHROMATIC_EPSILON = 1e-7


def _mix_space(space):
    name = space_name(space)
    if name not in MIX_SPACES:
        raise InvalidArgument("space", f"mixing supports {', '.join(MIX_SPACES)}", space)
    return name


def interpolate_hue(h1, h2, fraction):
    """Interpolate two angles along the shorter arc."""
    delta = (h2 - h1) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return (h1 + fraction * delta) % 360.0


def _interpolate(v1, v2, fraction, space):
    out = v1 + (v2 - v1) * fraction
    if space in _POLAR:
        hue, strength = _POLAR[space]
        h1, h2 = v1[hue], v2[hue]
        # a gray has no hue of its own; borrow the other endpoint's
        if v1[strength] < ACHROMATIC_EPSILON:
            h1 = h2
        if v2[strength] < ACHROMATIC_EPSILON:
            h2 = h1
        out[hue] = interpolate_hue(h1, h2, fraction)
    return out


def mix(color1, color2, fraction=0.5, space="lab"):
    """Mix two colors: fraction 0 gives color1, fraction 1 gives color2."""
    space = _mix_space(space)
    fraction = min(max(float(fraction), 0.0), 1.0)
    v1 = convert(color1.to_rgb_scaled(), "srgb", space)
    v2 = convert(color2.to_rgb_scaled(), "srgb", space)
    rgb = convert(_interpolate(v1, v2, fraction, space), space, "srgb")
    alpha = color1.alpha + (color2.alpha - color1.alpha) * fraction
    return type(color1)(*rgb, alpha=alpha)


def gradient(stops, count, space="lab"):
    """Evenly spaced colors running through the given stops."""
    stops = list(stops)
    if len(stops) < 2:
        raise InvalidArgument("stops", "a gradient needs at least two colors", len(stops))
    if count < 2:
        raise InvalidArgument("count", "must be at least 2", count)
    space = _mix_space(space)

    segments = len(stops) - 1
    colors = []
    for t in np.linspace(0.0, 1.0, count):
        index = min(int(t * segments), segments - 1)
        local = t * segments - index
        colors.append(mix(stops[index], stops[index + 1], local, space))
    return colors
