"""
Orchestration of a full visualization rebuild.

A rebuild reads an immutable snapshot of (points, k, grid) and returns fresh
decision and density fields. Nothing here keeps state between calls except
FieldSession, which only remembers the last valid result.
"""

import logging
from typing import Dict, Optional, Tuple

from knn_boundary import config
from knn_boundary.boundary_field import BoundaryFieldBuilder
from knn_boundary.computation_cache import FieldCache
from knn_boundary.density_field import DensityFieldBuilder
from knn_boundary.errors import InsufficientData
from knn_boundary.hex_grid import HexCell, HexGrid, assign_bins, build_grid
from knn_boundary.point_set import PointSet

logger = logging.getLogger(__name__)

DecisionField = Dict[HexCell, str]
DensityField = Dict[HexCell, str]


def _as_point_set(points) -> PointSet:
    return points if isinstance(points, PointSet) else PointSet(points)


def build_fields(grid: HexGrid, points: PointSet, k: int,
                 cache: Optional[FieldCache] = None) -> Tuple[DecisionField, DensityField]:
    """
    Build both label fields over one shared grid.

    The decision field classifies every cell globally; the density field only
    looks at the points binned into each cell. The two builders never share
    anything but the read-only grid and point set.

    Raises:
        InsufficientData: the grid has cells but the point set is empty
    """
    key = None
    if cache is not None:
        key = FieldCache.make_key(points.fingerprint(), k, grid.radius, grid.extent)
        cached = cache.get_fields(key)
        if cached is not None:
            _, decision_field, density_field = cached
            return decision_field, density_field

    decision_field = BoundaryFieldBuilder().build(grid, points, k)
    density_field = DensityFieldBuilder().build(assign_bins(points, grid))

    if cache is not None:
        cache.cache_fields(key, grid, decision_field, density_field)
    return decision_field, density_field


def recompute(points, k: int, truncation: Optional[int] = None,
              radius: Optional[float] = None, margin: Optional[float] = None,
              cache: Optional[FieldCache] = None) -> Tuple[DecisionField, DensityField]:
    """
    Rebuild the decision and density fields for one (k, truncation) state.

    The grid covers the full loaded dataset (padded by `margin`) so its cells
    stay put while the truncation count changes; only the first `truncation`
    points vote and get binned.

    Args:
        points: Full loaded dataset (PointSet or sequence of LabeledPoint)
        k: Number of neighbors voting at each cell center
        truncation: Number of leading points to use, None uses all of them
        radius: Hexagon radius in data units, defaults to config.get_hex_radius()
        margin: Extent padding, defaults to config.get_extent_margin()
        cache: Optional FieldCache to reuse identical rebuilds

    Returns:
        (DecisionField, DensityField). Both are empty when the dataset is empty.

    Raises:
        InsufficientData: the dataset is non-empty but truncation leaves no points
    """
    radius = config.get_hex_radius() if radius is None else radius
    margin = config.get_extent_margin() if margin is None else margin

    dataset = _as_point_set(points)
    grid = build_grid(dataset.extent(margin), radius)
    point_set = dataset if truncation is None else dataset.truncate(truncation)
    return build_fields(grid, point_set, k, cache)


class FieldSession:
    """Keeps the last valid fields for a loaded dataset.

    The grid is built once from the full dataset. Each update rebuilds both
    fields from scratch; when a rebuild is impossible (no points to vote) the
    previous fields stay in place so consumers keep showing the last valid
    visualization.
    """

    def __init__(self, points, radius: Optional[float] = None, margin: Optional[float] = None,
                 follow_k: bool = True, cache: Optional[FieldCache] = None):
        """
        Args:
            points: Full loaded dataset
            radius: Hexagon radius, defaults to the configured radius
            margin: Extent padding, defaults to the configured margin
            follow_k: When an update gives no truncation, use k as the
                truncation count (the original slider drove both)
            cache: Optional FieldCache shared across updates
        """
        self.dataset = _as_point_set(points)
        self.radius = config.get_hex_radius() if radius is None else radius
        self.margin = config.get_extent_margin() if margin is None else margin
        self.follow_k = follow_k
        self.cache = cache

        self.grid = build_grid(self.dataset.extent(self.margin), self.radius)
        self.decision_field: DecisionField = {}
        self.density_field: DensityField = {}
        self.k = None
        self.truncation = None
        self.n_skipped = 0

    def resolve_truncation(self, k, truncation=None):
        if truncation is not None:
            return truncation
        return k if self.follow_k else len(self.dataset)

    def update(self, k: int, truncation: Optional[int] = None) -> bool:
        """
        Rebuild fields for (k, truncation).

        Returns:
            True if the fields were replaced, False if the rebuild was skipped
        """
        truncation = self.resolve_truncation(k, truncation)
        point_set = self.dataset.truncate(truncation)
        try:
            decision_field, density_field = build_fields(self.grid, point_set, k, self.cache)
        except InsufficientData as e:
            self.n_skipped += 1
            logger.warning("Skipping rebuild for k=%d, truncation=%d: %s", k, truncation, e)
            return False

        self.decision_field = decision_field
        self.density_field = density_field
        self.k = k
        self.truncation = truncation
        logger.debug("Rebuilt fields for k=%d, truncation=%d (%d decision cells, %d occupied)",
                     k, truncation, len(decision_field), len(density_field))
        return True

    def fields(self) -> Tuple[DecisionField, DensityField]:
        return self.decision_field, self.density_field
