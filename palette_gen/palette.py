"""
Ordering and de-duplication helpers for lists of colors.
"""

from .errors import InvalidArgument

SORT_KEYS = {
    "brightness": lambda c: c.brightness(),
    "luminance": lambda c: c.luminance(),
    "hue": lambda c: c.to_lch().h,
    "chroma": lambda c: c.to_lch().c,
}

OPERAND_KEYS = {
    "contrast": lambda operand, c: operand.contrast_ratio(c),
    "distance-cie76": lambda operand, c: operand.distance(c, "cie76"),
    "distance-ciede2000": lambda operand, c: operand.distance(c, "ciede2000"),
}


def unique(colors):
    """Drop colors whose 8-bit value was already seen, keeping the first occurrence."""
    seen = set()
    result = []
    for color in colors:
        key = color.to_u32()
        if key not in seen:
            seen.add(key)
            result.append(color)
    return result


def sort_colors(colors, key="brightness", reverse=False):
    if key not in SORT_KEYS:
        raise InvalidArgument("key", f"must be one of {', '.join(SORT_KEYS)}", key)
    return sorted(colors, key=SORT_KEYS[key], reverse=reverse)


def sort_by_operand(colors, operand, key="distance-ciede2000", reverse=False):
    """Sort colors by contrast or distance to a fixed operand color."""
    if key not in OPERAND_KEYS:
        raise InvalidArgument("key", f"must be one of {', '.join(OPERAND_KEYS)}", key)
    measure = OPERAND_KEYS[key]
    return sorted(colors, key=lambda c: measure(operand, c), reverse=reverse)
