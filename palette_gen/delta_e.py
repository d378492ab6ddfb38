"""
Perceptual color differences (delta E) computed in CIELAB.
"""

import numpy as np

from .conversions import convert
from .errors import InvalidArgument

METRICS = ("cie76", "ciede2000")


def check_metric(metric):
    if metric not in METRICS:
        raise InvalidArgument("metric", f"must be one of {', '.join(METRICS)}", metric)
    return metric


def cie76(lab1, lab2):
    """Euclidean distance in CIELAB."""
    diff = np.asarray(lab1, dtype=float) - np.asarray(lab2, dtype=float)
    return np.sqrt(np.sum(diff * diff, axis=-1))


def ciede2000(lab1, lab2):
    """Calculate CIEDE2000 color difference (kL = kC = kH = 1).

    Both arguments broadcast against each other, so one color can be compared
    with a whole array of colors in a single call.
    """
    L1, a1, b1 = np.moveaxis(np.asarray(lab1, dtype=float), -1, 0)
    L2, a2, b2 = np.moveaxis(np.asarray(lab2, dtype=float), -1, 0)

    # Calculate C and h
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)

    C_bar7 = ((C1 + C2) / 2) ** 7
    G = 0.5 * (1 - np.sqrt(C_bar7 / (C_bar7 + 25.0 ** 7)))

    a1_prime = a1 * (1 + G)
    a2_prime = a2 * (1 + G)

    C1_prime = np.hypot(a1_prime, b1)
    C2_prime = np.hypot(a2_prime, b2)

    h1_prime = np.mod(np.arctan2(b1, a1_prime), 2 * np.pi)
    h2_prime = np.mod(np.arctan2(b2, a2_prime), 2 * np.pi)

    # Calculate differences
    delta_L_prime = L2 - L1
    delta_C_prime = C2_prime - C1_prime

    achromatic = C1_prime * C2_prime == 0
    delta_h = h2_prime - h1_prime
    delta_h = np.where(delta_h > np.pi, delta_h - 2 * np.pi,
                       np.where(delta_h < -np.pi, delta_h + 2 * np.pi, delta_h))
    delta_h = np.where(achromatic, 0.0, delta_h)

    delta_H_prime = 2 * np.sqrt(C1_prime * C2_prime) * np.sin(delta_h / 2)

    # Calculate mean values
    L_bar_prime = (L1 + L2) / 2
    C_bar_prime = (C1_prime + C2_prime) / 2

    h_sum = h1_prime + h2_prime
    h_bar_prime = np.where(
        np.abs(h1_prime - h2_prime) <= np.pi,
        h_sum / 2,
        np.where(h_sum < 2 * np.pi, (h_sum + 2 * np.pi) / 2, (h_sum - 2 * np.pi) / 2),
    )
    h_bar_prime = np.where(achromatic, h_sum, h_bar_prime)

    T = (1 - 0.17 * np.cos(h_bar_prime - np.pi / 6) +
         0.24 * np.cos(2 * h_bar_prime) +
         0.32 * np.cos(3 * h_bar_prime + np.pi / 30) -
         0.20 * np.cos(4 * h_bar_prime - 63 * np.pi / 180))

    delta_theta = (30 * np.pi / 180) * np.exp(-((h_bar_prime - 275 * np.pi / 180) / (25 * np.pi / 180)) ** 2)

    C_bar_prime7 = C_bar_prime ** 7
    R_C = 2 * np.sqrt(C_bar_prime7 / (C_bar_prime7 + 25.0 ** 7))

    S_L = 1 + (0.015 * (L_bar_prime - 50) ** 2) / np.sqrt(20 + (L_bar_prime - 50) ** 2)
    S_C = 1 + 0.045 * C_bar_prime
    S_H = 1 + 0.015 * C_bar_prime * T

    R_T = -np.sin(2 * delta_theta) * R_C

    delta_E2 = ((delta_L_prime / S_L) ** 2 +
                (delta_C_prime / S_C) ** 2 +
                (delta_H_prime / S_H) ** 2 +
                R_T * (delta_C_prime / S_C) * (delta_H_prime / S_H))

    return np.sqrt(np.maximum(delta_E2, 0.0))


_FUNCTIONS = {"cie76": cie76, "ciede2000": ciede2000}


def delta_e(lab1, lab2, metric="ciede2000"):
    """Color difference between CIELAB arrays using the named metric."""
    return _FUNCTIONS[check_metric(metric)](lab1, lab2)


def lab_array(colors):
    """Stack the CIELAB coordinates of a sequence of colors into an (n, 3) array."""
    rgb = np.array([c.to_rgb_scaled() for c in colors], dtype=float).reshape(-1, 3)
    return convert(rgb, "srgb", "lab")


def distance(color1, color2, metric="ciede2000"):
    """Perceptual distance between two colors."""
    labs = lab_array([color1, color2])
    return float(delta_e(labs[0], labs[1], metric))


def pairwise(labs, metric="ciede2000"):
    """Full symmetric distance matrix for an (n, 3) CIELAB array."""
    labs = np.asarray(labs, dtype=float)
    return delta_e(labs[:, None, :], labs[None, :, :], metric)


def min_pairwise_distance(colors, metric="ciede2000"):
    """Calculate minimum pairwise distance."""
    if len(colors) < 2:
        return float('inf')
    matrix = pairwise(lab_array(colors), metric)
    np.fill_diagonal(matrix, np.inf)
    return float(matrix.min())
