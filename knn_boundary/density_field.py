import logging
from typing import Dict, List

import numpy as np
from knn_boundary.classifier import majority_label
from knn_boundary.hex_grid import HexCell
from knn_boundary.point_set import LabeledPoint

logger = logging.getLogger(__name__)


class DensityBin:
    """Per-cell statistics with public fields to keep accessors simple"""
    def __init__(self, cell: HexCell):
        self.cell = cell
        self.class_counts: Dict[str, int] = {}
        self.centroid = np.zeros(2)
        self.count = 0
        self.majority_label = None

    def add(self, point: LabeledPoint):
        self.class_counts[point.label] = self.class_counts.get(point.label, 0) + 1
        self.count += 1
        # Incremental mean of the actual point positions
        self.centroid[0] += (point.x - self.centroid[0]) / self.count
        self.centroid[1] += (point.y - self.centroid[1]) / self.count

    def purity(self):
        """Share of the cell's points carrying the majority label"""
        if self.count == 0:
            return 0.0
        return self.class_counts[self.majority_label] / self.count

    def is_pure(self, purity_threshold=1.0):
        if self.count == 0:
            return False
        return self.purity() >= purity_threshold


class DensityFieldBuilder:
    """Majority actual label for every occupied cell"""

    def build(self, bins: Dict[HexCell, List[LabeledPoint]]) -> Dict[HexCell, str]:
        """
        Args:
            bins: Mapping from cell to the points assigned to it (from assign_bins)

        Returns:
            Mapping from cell to majority label, with no entry for empty cells.
            Ties go to the label seen first among the cell's points.
        """
        field = {}
        for cell, members in bins.items():
            if not members:
                continue
            field[cell] = majority_label(p.label for p in members)
        logger.debug("Density field built: %d occupied cells", len(field))
        return field

    def summarize(self, bins: Dict[HexCell, List[LabeledPoint]]) -> Dict[HexCell, DensityBin]:
        """Per-cell counts, centroid and purity for occupied cells"""
        summary = {}
        for cell, members in bins.items():
            if not members:
                continue
            hex_bin = DensityBin(cell)
            for p in members:
                hex_bin.add(p)
            hex_bin.majority_label = majority_label(p.label for p in members)
            summary[cell] = hex_bin
        return summary

    def get_stats(self, summary: Dict[HexCell, DensityBin], n_cells: int):
        """
        Statistics about the binning

        Args:
            summary: Output of summarize()
            n_cells: Total number of cells in the grid

        Returns:
            dict: total/occupied/pure cell counts and occupancy/purity rates
        """
        occupied_count = len(summary)
        pure_cells = sum(1 for b in summary.values() if b.is_pure())
        stats = {
            'total_cells': n_cells,
            'occupied_cells': occupied_count,
            'pure_cells': pure_cells,
            'total_points': sum(b.count for b in summary.values()),
            'occupancy_rate': occupied_count / n_cells if n_cells > 0 else 0,
            'purity_rate': pure_cells / occupied_count if occupied_count > 0 else 0,
        }
        return stats
