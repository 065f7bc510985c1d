"""
Export utilities for the KNN boundary visualization.

Writes the grid geometry and both label fields to JSON so an external
renderer (for example a browser view) can draw them without recomputing.
"""

import json
import os
from typing import Any, Dict

from knn_boundary.density_field import DensityFieldBuilder
from knn_boundary.hex_grid import HexGrid, assign_bins
from knn_boundary.point_set import PointSet


def fields_to_dict(grid: HexGrid, decision_field, density_field, k: int,
                   points: PointSet = None) -> Dict[str, Any]:
    """Build the JSON-serializable structure for one visualization state.

    Args:
        grid: Grid geometry shared by both fields
        decision_field: Cell -> predicted label
        density_field: Cell -> majority observed label
        k: Neighbor count the decision field was built with
        points: Optional point set the density field was built from; adds
            per-cell counts and purity when given

    Returns:
        dict with grid metadata, a per-cell list and the label set
    """
    summary = {}
    if points is not None:
        summary = DensityFieldBuilder().summarize(assign_bins(points, grid))

    cells = []
    for cell in grid:
        entry = {
            'center_x': float(cell.center_x),
            'center_y': float(cell.center_y),
            'predicted_label': decision_field.get(cell),
            'density_label': density_field.get(cell),
        }
        hex_bin = summary.get(cell)
        if hex_bin is not None:
            entry['count'] = int(hex_bin.count)
            entry['class_counts'] = {label: int(c) for label, c in hex_bin.class_counts.items()}
            entry['purity'] = float(hex_bin.purity())
        cells.append(entry)

    labels = list(dict.fromkeys(list(decision_field.values()) + list(density_field.values())))
    extent = None if grid.extent is None else [float(v) for v in grid.extent]

    return {
        'k': int(k),
        'radius': float(grid.radius),
        'extent': extent,
        'hexagon': [[float(x), float(y)] for x, y in grid.hexagon()],
        'n_cells': len(grid),
        'n_occupied': len(density_field),
        'labels': labels,
        'cells': cells,
    }


def export_fields_to_json(grid: HexGrid, decision_field, density_field, k: int,
                          save_path: str, points: PointSet = None):
    """Export one visualization state to a JSON file.

    Side Effects:
        Creates directories as needed and writes JSON file to save_path
    """
    json_data = fields_to_dict(grid, decision_field, density_field, k, points)

    save_dir = os.path.dirname(save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)
    with open(save_path, 'w') as f:
        json.dump(json_data, f, indent=2)

    print(f"Field data exported to: {save_path}")
