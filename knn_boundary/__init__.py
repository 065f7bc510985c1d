"""
KNN decision boundary visualization engine.

Classifies a hexagonal grid laid over 2D labeled data (penguin bill length
vs. bill depth) with a k-nearest-neighbors majority vote, and bins the actual
points into the same grid for a density overlay.
"""

from knn_boundary.errors import (
    KnnBoundaryError,
    InsufficientData,
    MalformedPoint,
    LoadFailure,
)
from knn_boundary.point_set import LabeledPoint, PointSet, Extent
from knn_boundary.classifier import NearestNeighborClassifier, classify, majority_label
from knn_boundary.hex_grid import HexCell, HexGrid, build_grid, assign_bins
from knn_boundary.boundary_field import BoundaryFieldBuilder
from knn_boundary.density_field import DensityFieldBuilder, DensityBin
from knn_boundary.recompute import recompute, FieldSession

__version__ = '1.0.0'

__all__ = [
    'KnnBoundaryError',
    'InsufficientData',
    'MalformedPoint',
    'LoadFailure',
    'LabeledPoint',
    'PointSet',
    'Extent',
    'NearestNeighborClassifier',
    'classify',
    'majority_label',
    'HexCell',
    'HexGrid',
    'build_grid',
    'assign_bins',
    'BoundaryFieldBuilder',
    'DensityFieldBuilder',
    'DensityBin',
    'recompute',
    'FieldSession',
]
