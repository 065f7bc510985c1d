"""
Tests for nearest-neighbor classification and the point set it reads.

Run with: pytest tests/test_classifier.py
"""

import math
import numpy as np
import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from knn_boundary.classifier import NearestNeighborClassifier, classify, majority_label
from knn_boundary.errors import InsufficientData
from knn_boundary.point_set import LabeledPoint, PointSet, Extent


@pytest.fixture
def three_points():
    """Two 'A' points close together and one 'B' point further away"""
    return PointSet([(40, 18, "A"), (42, 17, "A"), (50, 15, "B")])


@pytest.fixture
def random_points():
    np.random.seed(42)
    coords = np.random.rand(60, 2) * [20, 10] + [35, 14]
    labels = np.random.choice(['Adelie', 'Gentoo', 'Chinstrap'], size=60)
    return PointSet([(x, y, str(label)) for (x, y), label in zip(coords, labels)])


class TestPointSet:
    """Test the immutable point set"""

    def test_keeps_order_and_types(self, three_points):
        assert len(three_points) == 3
        assert three_points[0] == LabeledPoint(40.0, 18.0, "A")
        assert three_points.labels == ("A", "A", "B")
        np.testing.assert_array_equal(three_points.xs, [40, 42, 50])
        np.testing.assert_array_equal(three_points.ys, [18, 17, 15])

    def test_excludes_invalid_points(self):
        points = PointSet([
            (float('nan'), 1.0, "A"),
            (1.0, None, "A"),
            (1.0, math.inf, "A"),
            (1.0, 2.0, ""),
            (3.0, 4.0, "B"),
        ])
        assert list(points) == [LabeledPoint(3.0, 4.0, "B")]

    def test_coordinate_arrays_are_read_only(self, three_points):
        with pytest.raises(ValueError):
            three_points.xs[0] = 0.0

    def test_truncation(self, three_points):
        assert len(three_points.truncate(2)) == 2
        assert len(three_points.truncate(0)) == 0
        assert len(three_points.truncate(100)) == 3
        assert PointSet.from_points(list(three_points), 1).labels == ("A",)
        with pytest.raises(ValueError):
            PointSet.from_points(list(three_points), -1)

    def test_extent_with_margin(self, three_points):
        assert three_points.extent(5.0) == Extent(35.0, 10.0, 55.0, 23.0)
        assert PointSet().extent(5.0) is None

    def test_unique_labels_in_first_seen_order(self):
        points = PointSet([(0, 0, "Gentoo"), (1, 1, "Adelie"), (2, 2, "Gentoo")])
        assert points.unique_labels() == ["Gentoo", "Adelie"]

    def test_fingerprint_tracks_content(self, three_points):
        same = PointSet([(40, 18, "A"), (42, 17, "A"), (50, 15, "B")])
        assert three_points.fingerprint() == same.fingerprint()
        assert three_points.fingerprint() != three_points.truncate(2).fingerprint()


class TestMajorityLabel:
    """Test the deterministic majority vote"""

    def test_clear_majority(self):
        assert majority_label(["x", "y", "y"]) == "y"

    def test_tie_goes_to_first_occurrence(self):
        assert majority_label(["b", "a", "a", "b"]) == "b"
        assert majority_label(["a", "b"]) == "a"

    def test_empty(self):
        assert majority_label([]) is None


class TestClassify:
    """Test KNN classification"""

    def test_k1_nearest_label(self, three_points):
        assert classify((41, 17.5), three_points, 1) == "A"

    def test_k3_majority(self, three_points):
        assert classify((41, 17.5), three_points, 3) == "A"

    def test_k1_near_minority_point(self, three_points):
        assert classify((49, 15), three_points, 1) == "B"

    def test_accepts_plain_point_list(self):
        points = [LabeledPoint(40, 18, "A"), LabeledPoint(42, 17, "A"), LabeledPoint(50, 15, "B")]
        assert classify((49, 15), points, 1) == "B"
        assert classify((41, 17.5), [(40, 18, "A"), (50, 15, "B")], 1) == "A"
        with pytest.raises(InsufficientData):
            classify((0, 0), [], 1)

    def test_empty_point_set_raises(self):
        with pytest.raises(InsufficientData):
            classify((0, 0), PointSet(), 1)

    def test_invalid_k(self, three_points):
        with pytest.raises(ValueError):
            classify((0, 0), three_points, 0)

    @pytest.mark.parametrize("k", [3, 4, 10, 100])
    def test_k_clamped_to_point_count(self, random_points, k):
        """k beyond the point count behaves exactly like k = n"""
        small = random_points.truncate(3)
        np.random.seed(7)
        for qx, qy in np.random.rand(25, 2) * [20, 10] + [35, 14]:
            assert classify((qx, qy), small, k) == classify((qx, qy), small, len(small))

    def test_never_insufficient_for_non_empty(self, random_points):
        np.random.seed(3)
        for k in (1, 2, 5, 59, 60, 61):
            for qx, qy in np.random.rand(10, 2) * 100 - 50:
                assert classify((qx, qy), random_points, k) in random_points.labels

    def test_equal_distances_keep_insertion_order(self):
        points = PointSet([(0, 0, "B"), (2, 0, "A")])
        # Both neighbors are at distance 1
        assert classify((1, 0), points, 1) == "B"
        assert classify((1, 0), points, 2) == "B"

    def test_vote_tie_goes_to_closest_label(self):
        points = PointSet([(5, 0, "A"), (1.5, 0, "B"), (1, 0, "B"), (0, 0, "A")])
        # Distance order: A(0), B(1), B(1.5), A(5) -> 2-2 tie, A seen first
        assert classify((0, 0), points, 4) == "A"

    def test_neighbors_sorted_by_distance(self, three_points):
        knn = NearestNeighborClassifier(three_points, k=2)
        np.testing.assert_array_equal(knn.neighbors((50, 15)), [2, 1])
        assert knn.effective_k() == 2
        assert NearestNeighborClassifier(three_points, k=50).effective_k() == 3

    def test_pure_function(self, random_points):
        first = [classify((x, 17.0), random_points, 5) for x in range(35, 55)]
        second = [classify((x, 17.0), random_points, 5) for x in range(35, 55)]
        assert first == second


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
