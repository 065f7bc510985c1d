import logging
from typing import Dict

from knn_boundary.classifier import NearestNeighborClassifier
from knn_boundary.errors import InsufficientData
from knn_boundary.hex_grid import HexCell, HexGrid
from knn_boundary.point_set import PointSet

logger = logging.getLogger(__name__)


class BoundaryFieldBuilder:
    """Builds the decision field: the KNN prediction at every cell center.

    Each center is classified against the whole point set, not only the points
    binned into that cell, so the field shows the global decision boundary.
    """

    def build(self, grid: HexGrid, points: PointSet, k: int) -> Dict[HexCell, str]:
        """
        Classify every cell of the grid

        Args:
            grid: Shared grid geometry
            points: Labeled points that vote
            k: Number of neighbors voting at each center

        Returns:
            Mapping from cell to predicted label, in grid order
        """
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        if len(grid) == 0:
            return {}
        if len(points) == 0:
            raise InsufficientData("Cannot build a decision field without labeled points")

        classifier = NearestNeighborClassifier(points, k)
        field = {cell: classifier.classify(cell) for cell in grid}

        logger.debug("Decision field built: %d cells, k=%d (effective %d), %d points",
                     len(field), k, classifier.effective_k(), len(points))
        return field
