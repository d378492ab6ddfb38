"""
The color value type and the explicit color space variants.

A ColorValue stores gamma-encoded sRGB channels in [0, 1] plus alpha. All
other representations are computed on demand through `conversions`.
"""

import math
from dataclasses import dataclass, fields

import numpy as np

from . import colorblind, contrast, delta_e, mixing, named
from .conversions import convert, normalize_hue, space_name
from .errors import ConversionDomainError, InvalidArgument

EPSILON = 1e-6


class SpaceValue:
    """Coordinates of a color in one named space."""

    space = None
    hue_field = None

    def __post_init__(self):
        values = self.values()
        if not all(math.isfinite(v) for v in values):
            raise ConversionDomainError(self.space, values)
        for f in fields(self):
            object.__setattr__(self, f.name, float(getattr(self, f.name)))
        if self.hue_field is not None:
            hue = float(normalize_hue(getattr(self, self.hue_field)))
            object.__setattr__(self, self.hue_field, hue)

    def values(self):
        return tuple(getattr(self, f.name) for f in fields(self))

    def __iter__(self):
        return iter(self.values())


@dataclass(frozen=True)
class SRGB(SpaceValue):
    r: float
    g: float
    b: float
    space = "srgb"


@dataclass(frozen=True)
class LinearRGB(SpaceValue):
    r: float
    g: float
    b: float
    space = "linear"


@dataclass(frozen=True)
class XYZ(SpaceValue):
    x: float
    y: float
    z: float
    space = "xyz"


@dataclass(frozen=True)
class Lab(SpaceValue):
    l: float
    a: float
    b: float
    space = "lab"


@dataclass(frozen=True)
class LCh(SpaceValue):
    l: float
    c: float
    h: float
    space = "lch"
    hue_field = "h"


@dataclass(frozen=True)
class HSL(SpaceValue):
    h: float
    s: float
    l: float
    space = "hsl"
    hue_field = "h"


@dataclass(frozen=True)
class HSV(SpaceValue):
    h: float
    s: float
    v: float
    space = "hsv"
    hue_field = "h"


@dataclass(frozen=True)
class CMYK(SpaceValue):
    c: float
    m: float
    y: float
    k: float
    space = "cmyk"


SPACE_TYPES = {cls.space: cls for cls in (SRGB, LinearRGB, XYZ, Lab, LCh, HSL, HSV, CMYK)}


def _clamp01(value):
    return min(max(float(value), 0.0), 1.0)


@dataclass(frozen=True, eq=False)
class ColorValue:
    """An immutable color.

    Equality compares channels and alpha within EPSILON. Every operation
    returns a new ColorValue with clamped channels.
    """
    r: float
    g: float
    b: float
    alpha: float = 1.0

    def __post_init__(self):
        values = (self.r, self.g, self.b, self.alpha)
        if not all(math.isfinite(float(v)) for v in values):
            raise ConversionDomainError("srgb", values)
        for name, value in zip(("r", "g", "b", "alpha"), values):
            object.__setattr__(self, name, _clamp01(value))

    # construction

    @classmethod
    def from_rgb(cls, r, g, b, alpha=1.0):
        """Create a color from 8-bit channels (0-255)."""
        return cls(r / 255.0, g / 255.0, b / 255.0, alpha)

    @classmethod
    def from_rgb_scaled(cls, r, g, b, alpha=1.0):
        return cls(r, g, b, alpha)

    @classmethod
    def from_space(cls, value, alpha=1.0):
        """Create a color from any SpaceValue variant."""
        if not isinstance(value, SpaceValue):
            raise InvalidArgument("value", "expected a color space value", type(value).__name__)
        return cls(*convert(value.values(), value.space, "srgb"), alpha=alpha)

    @classmethod
    def from_linear_rgb(cls, r, g, b, alpha=1.0):
        return cls.from_space(LinearRGB(r, g, b), alpha)

    @classmethod
    def from_xyz(cls, x, y, z, alpha=1.0):
        return cls.from_space(XYZ(x, y, z), alpha)

    @classmethod
    def from_lab(cls, l, a, b, alpha=1.0):
        return cls.from_space(Lab(l, a, b), alpha)

    @classmethod
    def from_lch(cls, l, c, h, alpha=1.0):
        return cls.from_space(LCh(l, c, h), alpha)

    @classmethod
    def from_hsl(cls, h, s, l, alpha=1.0):
        return cls.from_space(HSL(h, s, l), alpha)

    @classmethod
    def from_hsv(cls, h, s, v, alpha=1.0):
        return cls.from_space(HSV(h, s, v), alpha)

    @classmethod
    def from_cmyk(cls, c, m, y, k, alpha=1.0):
        return cls.from_space(CMYK(c, m, y, k), alpha)

    @classmethod
    def from_name(cls, name):
        return cls.from_rgb(*named.lookup(name))

    @classmethod
    def black(cls):
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls):
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def graytone(cls, lightness):
        """Gray with the given HSL lightness (0 is black, 1 is white)."""
        return cls.from_hsl(0.0, 0.0, lightness)

    # representations

    def to_rgb(self):
        """8-bit channels; lossless for colors created from 8-bit input."""
        return tuple(int(round(255 * c)) for c in (self.r, self.g, self.b))

    def to_rgb_scaled(self):
        return (self.r, self.g, self.b)

    def to_hex(self):
        return "#{:02x}{:02x}{:02x}".format(*self.to_rgb())

    def to_rgb_string(self):
        """CSS functional notation, e.g. `rgb(255, 127, 0)`."""
        return "rgb({}, {}, {})".format(*self.to_rgb())

    def to_hsl_string(self):
        """CSS functional notation, e.g. `hsl(123, 50%, 80%)`."""
        h, s, l = self.to_hsl()
        return "hsl({:.0f}, {:.0f}%, {:.0f}%)".format(h, 100 * s, 100 * l)

    def to_u32(self):
        r, g, b = self.to_rgb()
        return (r << 16) | (g << 8) | b

    def to(self, space):
        """Coordinates of this color in the named space."""
        name = space_name(space)
        return SPACE_TYPES[name](*convert(self.to_rgb_scaled(), "srgb", name))

    def to_linear_rgb(self):
        return self.to("linear")

    def to_xyz(self):
        return self.to("xyz")

    def to_lab(self):
        return self.to("lab")

    def to_lch(self):
        return self.to("lch")

    def to_hsl(self):
        return self.to("hsl")

    def to_hsv(self):
        return self.to("hsv")

    def to_cmyk(self):
        return self.to("cmyk")

    # adjustments

    def _with_hsl(self, h, s, l):
        return type(self).from_hsl(h, s, l, alpha=self.alpha)

    def lighten(self, amount):
        """Add `amount` (-1 to 1) to the HSL lightness."""
        h, s, l = self.to_hsl()
        return self._with_hsl(h, s, l + amount)

    def darken(self, amount):
        return self.lighten(-amount)

    def saturate(self, amount):
        """Add `amount` (-1 to 1) to the HSL saturation."""
        h, s, l = self.to_hsl()
        return self._with_hsl(h, s + amount, l)

    def desaturate(self, amount):
        return self.saturate(-amount)

    def rotate_hue(self, degrees):
        h, s, l = self.to_hsl()
        return self._with_hsl(h + degrees, s, l)

    def complementary(self):
        return self.rotate_hue(180.0)

    def to_gray(self):
        """Gray with the same CIELAB lightness."""
        return type(self).from_lch(self.to_lch().l, 0.0, 0.0, alpha=self.alpha)

    def with_alpha(self, alpha):
        return type(self)(self.r, self.g, self.b, alpha)

    def set_channel(self, channel, value):
        """Return a copy with one channel replaced.

        Channels: red, green, blue (0-255), hsl-hue, hsl-saturation,
        hsl-lightness, lightness (CIELAB L*), lab-a, lab-b, chroma, hue
        (LCh), alpha.
        """
        key = str(channel).strip().lower()
        if key in ("red", "green", "blue"):
            rgb = list(self.to_rgb_scaled())
            rgb[("red", "green", "blue").index(key)] = min(max(value, 0.0), 255.0) / 255.0
            return type(self)(*rgb, alpha=self.alpha)
        if key in ("hsl-hue", "hsl-saturation", "hsl-lightness"):
            hsl = list(self.to_hsl())
            hsl[("hsl-hue", "hsl-saturation", "hsl-lightness").index(key)] = value
            return self._with_hsl(*hsl)
        if key in ("lightness", "lab-a", "lab-b"):
            lab = list(self.to_lab())
            lab[("lightness", "lab-a", "lab-b").index(key)] = value
            return type(self).from_lab(*lab, alpha=self.alpha)
        if key in ("chroma", "hue"):
            lch = list(self.to_lch())
            lch[1 if key == "chroma" else 2] = value
            return type(self).from_lch(*lch, alpha=self.alpha)
        if key == "alpha":
            return self.with_alpha(value)
        raise InvalidArgument("channel", "unknown channel", channel)

    def mix(self, other, fraction=0.5, space="lab"):
        return mixing.mix(self, other, fraction, space)

    def simulate_colorblindness(self, kind, severity=None):
        return colorblind.simulate(self, kind, severity)

    # measurements

    def luminance(self):
        return contrast.relative_luminance(self)

    def brightness(self):
        return contrast.brightness(self)

    def is_light(self):
        return contrast.is_light(self)

    def text_color(self):
        return contrast.text_color(self)

    def contrast_ratio(self, other):
        return contrast.contrast_ratio(self, other)

    def distance(self, other, metric="ciede2000"):
        return delta_e.distance(self, other, metric)

    # value semantics

    def __eq__(self, other):
        if not isinstance(other, ColorValue):
            return NotImplemented
        a = np.array([self.r, self.g, self.b, self.alpha])
        b = np.array([other.r, other.g, other.b, other.alpha])
        return bool(np.all(np.abs(a - b) <= EPSILON))

    def __hash__(self):
        # equality within EPSILON is not transitive, so no rounded key is
        # shared by every pair of equal colors
        return hash(ColorValue)

    def __str__(self):
        return self.to_hex()
