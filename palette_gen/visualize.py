"""
Palette figures: color swatches and the CIEDE2000 distance matrix.
"""

import logging

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from .color import ColorValue
from .delta_e import lab_array, pairwise
from .named import nearest_name

logger = logging.getLogger(__name__)


def palette_statistics(colors, background=None):
    """Pairwise and reference distances of a palette, as plain numbers."""
    background = background or ColorValue.white()
    black = ColorValue.black()
    matrix = pairwise(lab_array(colors), "ciede2000")
    upper = matrix[np.triu_indices(len(colors), k=1)]
    black_distances = [c.distance(black) for c in colors]
    return {
        "min_pairwise": float(upper.min()) if upper.size else float('inf'),
        "max_pairwise": float(upper.max()) if upper.size else 0.0,
        "mean_pairwise": float(upper.mean()) if upper.size else 0.0,
        "min_from_black": float(min(black_distances)),
        "contrast": [c.contrast_ratio(background) for c in colors],
        "names": [nearest_name(c) for c in colors],
    }


def visualize_palette(colors, background=None, path=None, references=None):
    """Draw the palette and its distance matrix; save to `path` when given.

    `references` (black and white by default) are appended to the matrix.
    Returns the matplotlib figure.
    """
    colors = list(colors)
    n_colors = len(colors)
    background = background or ColorValue.white()
    if references is None:
        references = [ColorValue.black(), ColorValue.white()]

    fig, axes = plt.subplots(2, 1, figsize=(max(6, 2 * n_colors), 8),
                             gridspec_kw={'height_ratios': [2, 1]})

    # Top plot: Color swatches
    ax1 = axes[0]
    ax1.set_xlim(0, n_colors)
    ax1.set_ylim(0, 1)
    ax1.set_aspect('equal')

    for i, color in enumerate(colors):
        rect = Rectangle((i, 0), 1, 1, facecolor=color.to_rgb_scaled(), edgecolor='black', linewidth=2)
        ax1.add_patch(rect)

        r, g, b = color.to_rgb()
        text_color = 'white' if color.luminance() < 0.5 else 'black'

        ax1.text(i + 0.5, 0.85, nearest_name(color), ha='center', va='center',
                 fontsize=8, fontweight='bold', color=text_color, style='italic')
        ax1.text(i + 0.5, 0.65, color.to_hex().upper(), ha='center', va='center',
                 fontsize=11, fontweight='bold', color=text_color, family='monospace')
        ax1.text(i + 0.5, 0.45, f"RGB({r}, {g}, {b})", ha='center', va='center',
                 fontsize=8, color=text_color, family='monospace')
        ax1.text(i + 0.5, 0.25, f"CR: {color.contrast_ratio(background):.2f}", ha='center', va='center',
                 fontsize=9, color=text_color)

    ax1.set_xticks([])
    ax1.set_yticks([])
    ax1.set_title(f"Distinct Palette ({n_colors} colors)", fontsize=14, fontweight='bold', pad=20)

    # Bottom plot: Distance matrix including the reference colors
    ax2 = axes[1]
    extended_colors = colors + list(references)
    n_extended = len(extended_colors)
    distance_matrix = pairwise(lab_array(extended_colors), "ciede2000")
    np.fill_diagonal(distance_matrix, 0.0)

    im = ax2.imshow(distance_matrix, cmap='YlOrRd', aspect='auto')

    ax2.set_xticks(range(n_extended))
    ax2.set_yticks(range(n_extended))
    ax2.set_xticklabels([])
    ax2.set_yticklabels([])
    ax2.tick_params(length=0)

    # Color patches on the axes instead of text labels
    patch_size = 0.4
    for i, color in enumerate(extended_colors):
        x_rect = Rectangle((i - patch_size / 2, n_extended - 0.5 + 0.1),
                           patch_size, 0.3,
                           facecolor=color.to_rgb_scaled(), edgecolor='black', linewidth=1,
                           clip_on=False, transform=ax2.transData)
        ax2.add_patch(x_rect)

        y_rect = Rectangle((-0.5 - 0.4, i - patch_size / 2),
                           0.3, patch_size,
                           facecolor=color.to_rgb_scaled(), edgecolor='black', linewidth=1,
                           clip_on=False, transform=ax2.transData)
        ax2.add_patch(y_rect)

    ax2.set_title("CIEDE2000 Distance Matrix", fontsize=12, fontweight='bold', pad=25)

    cbar = fig.colorbar(im, ax=ax2)
    cbar.set_label('ΔE 2000', rotation=270, labelpad=20)

    if n_extended <= 24:
        for i in range(n_extended):
            for j in range(n_extended):
                if i != j:
                    ax2.text(j, i, f'{distance_matrix[i, j]:.1f}',
                             ha="center", va="center", color="black", fontsize=8)

    fig.tight_layout()

    if path is not None:
        fig.savefig(path, dpi=150, bbox_inches='tight')
        logger.info("Visualization saved to: %s", path)
    return fig
