"""
Color space conversions.

Every function takes an array-like whose last axis holds the channels and
returns a float64 array with the same leading shape, so a single color and
a whole palette go through the same code. Conventions:

- sRGB, linear RGB, HSL/HSV saturation and lightness/value, CMYK: [0, 1]
- hue (HSL, HSV, LCh): degrees in [0, 360)
- XYZ: scaled so that the D65 white point has Y = 1
- CIELAB L*: [0, 100]
"""

import functools
from collections import deque

import numpy as np

from .errors import InvalidArgument

# D65 reference white
WHITE_D65 = np.array([0.95047, 1.00000, 1.08883])

# sRGB primaries, D65 (Lindbloom)
RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])

XYZ_TO_RGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
])

LAB_DELTA = 6 / 29

SPACES = ("srgb", "linear", "xyz", "lab", "lch", "hsl", "hsv", "cmyk")

SPACE_ALIASES = {
    "rgb": "srgb",
    "linear_rgb": "linear",
    "linear-rgb": "linear",
    "lrgb": "linear",
    "cielab": "lab",
    "cielch": "lch",
}


def channel_count(space):
    return 4 if space == "cmyk" else 3


def space_name(name):
    """Return the canonical name of a color space."""
    key = str(name).strip().lower()
    key = SPACE_ALIASES.get(key, key)
    if key not in SPACES:
        raise InvalidArgument("space", f"must be one of {', '.join(SPACES)}", name)
    return key


def _channels(values, count=3):
    arr = np.asarray(values, dtype=float)
    if arr.shape[-1:] != (count,):
        raise InvalidArgument("values", f"last axis must hold {count} channels", arr.shape)
    return arr


def normalize_hue(hue):
    """Wrap angles in degrees into [0, 360)."""
    hue = np.mod(hue, 360.0)
    # np.mod rounds tiny negative angles up to exactly 360
    return np.where(hue >= 360.0, 0.0, hue)


def srgb_to_linear(rgb):
    c = np.clip(_channels(rgb), 0.0, 1.0)
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(rgb):
    c = np.clip(_channels(rgb), 0.0, 1.0)
    encoded = np.where(c <= 0.0031308, 12.92 * c, 1.055 * c ** (1 / 2.4) - 0.055)
    return np.clip(encoded, 0.0, 1.0)


def linear_to_xyz(rgb):
    return _channels(rgb) @ RGB_TO_XYZ.T


def xyz_to_linear(xyz):
    """XYZ to linear RGB. Out-of-gamut results are left for the sRGB step to clamp."""
    return _channels(xyz) @ XYZ_TO_RGB.T


def _lab_f(t):
    return np.where(t > LAB_DELTA ** 3, np.cbrt(t), t / (3 * LAB_DELTA ** 2) + 4 / 29)


def _lab_f_inv(t):
    return np.where(t > LAB_DELTA, t ** 3, 3 * LAB_DELTA ** 2 * (t - 4 / 29))


def xyz_to_lab(xyz):
    f = _lab_f(_channels(xyz) / WHITE_D65)
    L = 116 * f[..., 1] - 16
    a = 500 * (f[..., 0] - f[..., 1])
    b = 200 * (f[..., 1] - f[..., 2])
    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab):
    lab = _channels(lab)
    fy = (lab[..., 0] + 16) / 116
    fx = fy + lab[..., 1] / 500
    fz = fy - lab[..., 2] / 200
    return _lab_f_inv(np.stack([fx, fy, fz], axis=-1)) * WHITE_D65


def lab_to_lch(lab):
    lab = _channels(lab)
    chroma = np.hypot(lab[..., 1], lab[..., 2])
    hue = normalize_hue(np.degrees(np.arctan2(lab[..., 2], lab[..., 1])))
    return np.stack([lab[..., 0], chroma, hue], axis=-1)


def lch_to_lab(lch):
    lch = _channels(lch)
    chroma = np.maximum(lch[..., 1], 0.0)
    hue = np.radians(lch[..., 2])
    return np.stack([lch[..., 0], chroma * np.cos(hue), chroma * np.sin(hue)], axis=-1)


def _hue_and_chroma(rgb):
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    high = rgb.max(axis=-1)
    low = rgb.min(axis=-1)
    chroma = high - low
    safe = np.where(chroma > 0, chroma, 1.0)
    # first matching channel wins: R, then G, then B
    sector = np.select(
        [chroma == 0, r == high, g == high],
        [0.0, np.mod((g - b) / safe, 6.0), (b - r) / safe + 2.0],
        default=(r - g) / safe + 4.0,
    )
    return normalize_hue(60.0 * sector), high, low, chroma


def srgb_to_hsl(rgb):
    rgb = np.clip(_channels(rgb), 0.0, 1.0)
    hue, high, low, chroma = _hue_and_chroma(rgb)
    lightness = (high + low) / 2
    denom = 1 - np.abs(2 * lightness - 1)
    saturation = np.where(chroma > 0, chroma / np.where(denom > 0, denom, 1.0), 0.0)
    return np.stack([hue, np.clip(saturation, 0.0, 1.0), lightness], axis=-1)


def hsl_to_srgb(hsl):
    hsl = _channels(hsl)
    hue = normalize_hue(hsl[..., 0])
    saturation = np.clip(hsl[..., 1], 0.0, 1.0)
    lightness = np.clip(hsl[..., 2], 0.0, 1.0)
    amount = saturation * np.minimum(lightness, 1 - lightness)

    def channel(n):
        k = np.mod(n + hue / 30.0, 12.0)
        return lightness - amount * np.clip(np.minimum(k - 3, 9 - k), -1.0, 1.0)

    return np.clip(np.stack([channel(0), channel(8), channel(4)], axis=-1), 0.0, 1.0)


def srgb_to_hsv(rgb):
    rgb = np.clip(_channels(rgb), 0.0, 1.0)
    hue, high, _, chroma = _hue_and_chroma(rgb)
    saturation = np.where(high > 0, chroma / np.where(high > 0, high, 1.0), 0.0)
    return np.stack([hue, saturation, high], axis=-1)


def hsv_to_srgb(hsv):
    hsv = _channels(hsv)
    hue = normalize_hue(hsv[..., 0])
    saturation = np.clip(hsv[..., 1], 0.0, 1.0)
    value = np.clip(hsv[..., 2], 0.0, 1.0)

    def channel(n):
        k = np.mod(n + hue / 60.0, 6.0)
        return value - value * saturation * np.clip(np.minimum(k, 4 - k), 0.0, 1.0)

    return np.clip(np.stack([channel(5), channel(3), channel(1)], axis=-1), 0.0, 1.0)


def srgb_to_cmyk(rgb):
    """Naive value-based CMYK. Pure black gives C = M = Y = 0."""
    rgb = np.clip(_channels(rgb), 0.0, 1.0)
    key = 1 - rgb.max(axis=-1)
    denom = (1 - key)[..., None]
    cmy = np.where(denom > 0, (1 - rgb - key[..., None]) / np.where(denom > 0, denom, 1.0), 0.0)
    return np.concatenate([np.clip(cmy, 0.0, 1.0), key[..., None]], axis=-1)


def cmyk_to_srgb(cmyk):
    cmyk = np.clip(_channels(cmyk, 4), 0.0, 1.0)
    return (1 - cmyk[..., :3]) * (1 - cmyk[..., 3:4])


_EDGES = {
    ("srgb", "linear"): srgb_to_linear,
    ("linear", "srgb"): linear_to_srgb,
    ("linear", "xyz"): linear_to_xyz,
    ("xyz", "linear"): xyz_to_linear,
    ("xyz", "lab"): xyz_to_lab,
    ("lab", "xyz"): lab_to_xyz,
    ("lab", "lch"): lab_to_lch,
    ("lch", "lab"): lch_to_lab,
    ("srgb", "hsl"): srgb_to_hsl,
    ("hsl", "srgb"): hsl_to_srgb,
    ("srgb", "hsv"): srgb_to_hsv,
    ("hsv", "srgb"): hsv_to_srgb,
    ("srgb", "cmyk"): srgb_to_cmyk,
    ("cmyk", "srgb"): cmyk_to_srgb,
}


@functools.lru_cache(maxsize=None)
def conversion_path(from_space, to_space):
    """Shortest chain of spaces leading from one space to another."""
    source, target = space_name(from_space), space_name(to_space)
    previous = {source: None}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        if node == target:
            break
        for a, b in _EDGES:
            if a == node and b not in previous:
                previous[b] = node
                queue.append(b)
    path = [target]
    while previous[path[-1]] is not None:
        path.append(previous[path[-1]])
    return tuple(reversed(path))


def convert(values, from_space, to_space):
    """Convert color coordinates between any two supported spaces."""
    path = conversion_path(from_space, to_space)
    result = _channels(values, channel_count(path[0]))
    if len(path) == 1:
        return result.copy()
    for a, b in zip(path, path[1:]):
        result = _EDGES[a, b](result)
    return result
