"""
Matplotlib rendering of the decision and density fields.

Fields live in data space; the axes transform does the data-to-screen
mapping, so hexagons are drawn directly at their data-space corners.
"""

import os
from typing import Dict, Optional

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection
from matplotlib.patches import Patch

from knn_boundary.hex_grid import HexGrid


def label_colors(labels, cmap_name: str = 'tab10') -> Dict[str, tuple]:
    """Ordinal color scale: each new label takes the next palette color"""
    cmap = matplotlib.colormaps[cmap_name]
    colors = {}
    for label in labels:
        if label not in colors:
            colors[label] = cmap(len(colors) % cmap.N)
    return colors


def _hexagon_collection(grid: HexGrid, field, colors, **kwargs):
    cells = list(field.keys())
    verts = [grid.hexagon(cell) for cell in cells]
    facecolors = [colors.get(field[cell], 'lightgray') for cell in cells]
    return PolyCollection(verts, facecolors=facecolors, **kwargs)


def plot_fields(grid: HexGrid, decision_field, density_field, k: int,
                save_path: Optional[str] = None, colors=None, title: Optional[str] = None,
                decision_alpha: float = 0.35):
    """
    Draw the decision boundary hexagons with the density overlay on top.

    Args:
        grid: Grid both fields were built on
        decision_field: Cell -> predicted label for every grid cell
        density_field: Cell -> majority observed label for occupied cells
        k: Neighbor count shown in the title
        save_path: PNG path; the figure is saved and closed when given
        colors: Label -> color mapping, defaults to label_colors over both fields
        title: Title override, defaults to "k = N"
        decision_alpha: Opacity of the decision layer so the overlay stands out

    Returns:
        The matplotlib Figure, or None when it was saved and closed
    """
    if colors is None:
        colors = label_colors(list(decision_field.values()) + list(density_field.values()))

    fig = plt.figure(figsize=(10, 7.5))
    ax = fig.gca()

    if decision_field:
        ax.add_collection(_hexagon_collection(grid, decision_field, colors,
                                              alpha=decision_alpha, edgecolors='none', zorder=1))
    if density_field:
        ax.add_collection(_hexagon_collection(grid, density_field, colors,
                                              edgecolors='white', linewidths=1.0, zorder=2))

    if grid.extent is not None:
        ax.set_xlim(grid.extent.min_x, grid.extent.max_x)
        ax.set_ylim(grid.extent.min_y, grid.extent.max_y)
    ax.set_aspect('equal')

    ax.set_xlabel('Bill Length (mm)')
    ax.set_ylabel('Bill Depth (mm)')
    ax.set_title(title if title is not None else f"k = {k}")

    present = set(decision_field.values()) | set(density_field.values())
    shown = [label for label in colors if label in present]
    if shown:
        ax.legend(handles=[Patch(facecolor=colors[label], label=label) for label in shown],
                  loc='upper right')

    if save_path is None:
        return fig

    save_dir = os.path.dirname(save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)
    fig.savefig(save_path, dpi=100, bbox_inches='tight')
    plt.close(fig)
    return None
