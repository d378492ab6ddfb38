"""
Color conversions, perceptual distances, colorblindness simulation and
generation of maximally distinct color palettes.
"""

from .color import CMYK, HSL, HSV, LCh, Lab, LinearRGB, SRGB, XYZ, ColorValue, SpaceValue
from .colorblind import simulate
from .config import DEFAULT_CONFIG, DistinctConfig
from .conversions import convert
from .delta_e import ciede2000, cie76, distance, min_pairwise_distance
from .distinct import DistinctSet, DistinctSetGenerator, generate, generate_set, rearrange_sequence
from .errors import ConversionDomainError, InvalidArgument, PaletteError
from .mixing import gradient, mix

__version__ = "0.2.0"
