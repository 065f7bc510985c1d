import logging
from typing import Dict, List, NamedTuple, Optional

import numpy as np
from knn_boundary.errors import InsufficientData
from knn_boundary.hex_coordinates import HexCoordinates
from knn_boundary.point_set import Extent, LabeledPoint, PointSet

logger = logging.getLogger(__name__)


class HexCell(NamedTuple):
    """A grid cell, identified by its center coordinate"""
    center_x: float
    center_y: float


class HexGrid:
    """Ordered set of hexagon cells covering an extent.

    Cells are generated row by row (bottom to top, left to right) on the
    pointy-top lattice, so two grids built from the same extent and radius
    list identical centers in identical order.
    """

    def __init__(self, extent: Optional[Extent], radius: float):
        if radius <= 0:
            raise ValueError(f"Hex radius must be positive, got {radius}")
        self.extent = extent
        self.radius = float(radius)

        self.cells: List[HexCell] = []
        self._index: Dict[tuple, int] = {}

        # No extent (empty data) means no cells
        if extent is not None:
            self._generate_cells(extent)

        self._cell_set = frozenset(self.cells)
        self._centers = np.array(self.cells, dtype=np.float64).reshape(-1, 2)

    def _generate_cells(self, extent: Extent):
        dx, _ = HexCoordinates.spacing(self.radius)
        i0, j0, n_rows = HexCoordinates.lattice_bounds(
            extent.min_x, extent.min_y, extent.max_x, extent.max_y, self.radius)

        for row in range(j0, j0 + n_rows):
            col = i0
            while True:
                x, y = HexCoordinates.offset_to_cartesian(col, row, self.radius)
                if x >= extent.max_x + dx / 2:
                    break
                self._index[(col, row)] = len(self.cells)
                self.cells.append(HexCell(x, y))
                col += 1

    def get_cells(self):
        return self.cells

    def get_centers(self):
        """(n_cells, 2) array of cell centers in grid order"""
        return self._centers

    def index_of(self, cell: HexCell):
        """Lattice offset coordinates (col, row) of a cell"""
        col, row = HexCoordinates.cartesian_to_offset(cell.center_x, cell.center_y, self.radius)
        if (col, row) not in self._index:
            raise KeyError(cell)
        return col, row

    def cell_at(self, col, row):
        """Cell at lattice offset (col, row), or None if outside the grid"""
        idx = self._index.get((col, row))
        return None if idx is None else self.cells[idx]

    def nearest_cell(self, x, y):
        """
        Cell whose center is nearest to (x, y).

        Uses forward hex rounding; when the rounded cell lies outside the grid
        (points near the edge of the covered region), falls back to the nearest
        grid center by Euclidean distance, lowest grid index on ties.
        """
        if not self.cells:
            raise InsufficientData("Cannot bin points into an empty grid")

        col, row = HexCoordinates.cartesian_to_offset(x, y, self.radius)
        cell = self.cell_at(col, row)
        if cell is not None:
            return cell

        d = np.hypot(self._centers[:, 0] - x, self._centers[:, 1] - y)
        return self.cells[int(np.argmin(d))]

    def hexagon(self, cell: HexCell = None):
        """Corner coordinates of a cell, or of a hexagon at the origin"""
        center = (0.0, 0.0) if cell is None else (cell.center_x, cell.center_y)
        return HexCoordinates.hexagon_corners(self.radius, center)

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __contains__(self, cell):
        return cell in self._cell_set

    def __repr__(self):
        return f"HexGrid(n_cells={len(self.cells)}, radius={self.radius}, extent={self.extent})"


def build_grid(extent: Optional[Extent], radius: float) -> HexGrid:
    """
    Build the hexagon grid covering `extent`

    Args:
        extent: Bounding box in data space, or None for an empty grid
        radius: Hexagon circumradius in data units

    Returns:
        HexGrid with cells in deterministic row-major order
    """
    return HexGrid(extent, radius)


def assign_bins(points: PointSet, grid: HexGrid) -> Dict[HexCell, List[LabeledPoint]]:
    """
    Assign each point to its nearest cell center.

    Only occupied cells appear in the result, in order of first assignment.
    Every point lands in exactly one cell; points outside the grid-covering
    region are clamped to the nearest grid cell.

    Args:
        points: Point set to bin
        grid: Grid from build_grid

    Returns:
        Mapping from cell to the points binned there, in point order
    """
    bins: Dict[HexCell, List[LabeledPoint]] = {}
    if len(points) == 0:
        return bins

    n_clamped = 0
    for p in points:
        col, row = HexCoordinates.cartesian_to_offset(p.x, p.y, grid.radius)
        cell = grid.cell_at(col, row)
        if cell is None:
            n_clamped += 1
            cell = grid.nearest_cell(p.x, p.y)
        bins.setdefault(cell, []).append(p)

    if n_clamped:
        logger.debug("Clamped %d point(s) outside the grid to their nearest edge cell", n_clamped)
    return bins
