"""
Color vision deficiency simulation.

Colors are converted to linear RGB, multiplied by a fixed 3x3 matrix for
the requested deficiency and converted back to sRGB. The dichromacy
matrices are the full-severity matrices of Machado, Oliveira and Fernandes
(2009); anomalous trichromacy interpolates between the identity and the
full matrix.
"""

import numpy as np

from .errors import InvalidArgument

_REFERENCE_MATRICES = {
    "protanopia": np.array([
        [0.152286, 1.052583, -0.204868],
        [0.114503, 0.786281, 0.099216],
        [-0.003882, -0.048116, 1.051998],
    ]),
    "deuteranopia": np.array([
        [0.367322, 0.860646, -0.227968],
        [0.280085, 0.672501, 0.047413],
        [-0.011820, 0.042940, 0.968881],
    ]),
    "tritanopia": np.array([
        [1.255528, -0.076749, -0.178779],
        [-0.078411, 0.930809, 0.147602],
        [0.004733, 0.691367, 0.303900],
    ]),
    # every channel collapses to relative luminance
    "achromatopsia": np.array([
        [0.2126729, 0.7151522, 0.0721750],
        [0.2126729, 0.7151522, 0.0721750],
        [0.2126729, 0.7151522, 0.0721750],
    ]),
}

# Rows renormalised to sum to exactly one so that grays are fixed points.
DEFICIENCY_MATRICES = {
    name: matrix / matrix.sum(axis=1, keepdims=True)
    for name, matrix in _REFERENCE_MATRICES.items()
}

DEFICIENCIES = tuple(DEFICIENCY_MATRICES)

ANOMALY_SEVERITY = 0.6

_ALIASES = {
    "prot": ("protanopia", 1.0),
    "protan": ("protanopia", 1.0),
    "deuter": ("deuteranopia", 1.0),
    "deutan": ("deuteranopia", 1.0),
    "trit": ("tritanopia", 1.0),
    "tritan": ("tritanopia", 1.0),
    "achroma": ("achromatopsia", 1.0),
    "protanomaly": ("protanopia", ANOMALY_SEVERITY),
    "deuteranomaly": ("deuteranopia", ANOMALY_SEVERITY),
    "tritanomaly": ("tritanopia", ANOMALY_SEVERITY),
    "achromatomaly": ("achromatopsia", ANOMALY_SEVERITY),
}


def resolve(kind, severity=None):
    """Map a deficiency name (or alias) to a (matrix name, severity) pair."""
    key = str(kind).strip().lower()
    if key in DEFICIENCY_MATRICES:
        name, default = key, 1.0
    elif key in _ALIASES:
        name, default = _ALIASES[key]
    else:
        raise InvalidArgument("kind", f"unsupported deficiency, expected one of {', '.join(DEFICIENCIES)}", kind)
    if severity is None:
        severity = default
    if not 0.0 <= severity <= 1.0:
        raise InvalidArgument("severity", "must lie in [0, 1]", severity)
    return name, float(severity)


def deficiency_matrix(kind, severity=None):
    name, severity = resolve(kind, severity)
    return (1 - severity) * np.eye(3) + severity * DEFICIENCY_MATRICES[name]


def simulate_linear(linear_rgb, kind, severity=None):
    """Apply the deficiency transform to linear RGB values, clamped to [0, 1]."""
    matrix = deficiency_matrix(kind, severity)
    return np.clip(np.asarray(linear_rgb, dtype=float) @ matrix.T, 0.0, 1.0)


def simulate(color, kind, severity=None):
    """Return how `color` appears under the given color vision deficiency."""
    linear = simulate_linear(tuple(color.to_linear_rgb()), kind, severity)
    return type(color).from_linear_rgb(*linear, alpha=color.alpha)
