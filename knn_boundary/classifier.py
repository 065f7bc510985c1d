import numpy as np
from knn_boundary.errors import InsufficientData
from knn_boundary.point_set import PointSet


def majority_label(labels):
    """
    Majority vote over an ordered sequence of labels.

    Ties go to the label that occurs first in `labels`, so callers control the
    tie-break through the order they pass in (distance order for neighbors,
    insertion order for bin members).

    Args:
        labels: Ordered iterable of labels

    Returns:
        The winning label, or None for an empty sequence
    """
    counts = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    if not counts:
        return None

    # dict preserves first-occurrence order and max() keeps the first maximum
    return max(counts, key=counts.get)


class NearestNeighborClassifier:
    """Majority-vote k-nearest-neighbors over a PointSet with Euclidean distance"""

    def __init__(self, points: PointSet, k: int = 1):
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        self.points = points if isinstance(points, PointSet) else PointSet(points)
        self.k = k

    def effective_k(self):
        """k clamped to the number of available points"""
        return min(self.k, len(self.points))

    def distances(self, query):
        qx, qy = float(query[0]), float(query[1])
        return np.hypot(self.points.xs - qx, self.points.ys - qy)

    def neighbors(self, query):
        """
        Indices of the k nearest points, closest first.

        Stable sort keeps insertion order among equal distances.
        """
        if len(self.points) == 0:
            raise InsufficientData("Cannot search neighbors in an empty point set")
        order = np.argsort(self.distances(query), kind='stable')
        return order[:self.effective_k()]

    def classify(self, query):
        labels = self.points.labels
        return majority_label(labels[i] for i in self.neighbors(query))


def classify(query, points: PointSet, k: int):
    """Predict the label at `query` by majority vote of its k nearest points"""
    return NearestNeighborClassifier(points, k).classify(query)
