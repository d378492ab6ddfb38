"""
Luminance, contrast and readability checks (WCAG 2.x, W3C AERT).
"""

from .errors import InvalidArgument

WCAG_THRESHOLDS = {
    ("AA", False): 4.5,
    ("AA", True): 3.0,
    ("AAA", False): 7.0,
    ("AAA", True): 4.5,
}


def relative_luminance(color):
    """Calculate relative luminance for contrast ratio."""
    def adjust(channel):
        if channel <= 0.03928:
            return channel / 12.92
        else:
            return ((channel + 0.055) / 1.055) ** 2.4

    r, g, b = [adjust(c) for c in color.to_rgb_scaled()]
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1, color2):
    """Calculate contrast ratio between two colors."""
    l1 = relative_luminance(color1)
    l2 = relative_luminance(color2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_wcag(foreground, background, level="AA", large_text=False):
    """Check whether the foreground/background pair passes a WCAG level."""
    key = (str(level).upper(), bool(large_text))
    if key not in WCAG_THRESHOLDS:
        raise InvalidArgument("level", "must be 'AA' or 'AAA'", level)
    return contrast_ratio(foreground, background) >= WCAG_THRESHOLDS[key]


def brightness(color):
    """Perceived brightness in [0, 1], see https://www.w3.org/TR/AERT#color-contrast"""
    r, g, b = color.to_rgb_scaled()
    return (299 * r + 587 * g + 114 * b) / 1000


def is_light(color):
    return brightness(color) > 0.5


def text_color(background):
    """Readable text color (black or white) for a background."""
    cls = type(background)
    return cls.black() if is_light(background) else cls.white()
