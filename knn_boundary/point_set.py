import hashlib
import logging
import math
from typing import Iterable, NamedTuple, Optional

import numpy as np

logger = logging.getLogger(__name__)


class LabeledPoint(NamedTuple):
    """A single observation: x=bill length, y=bill depth, label=species"""
    x: float
    y: float
    label: str


class Extent(NamedTuple):
    """Axis-aligned bounding box in data space"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points: "PointSet", margin: float = 0.0) -> Optional["Extent"]:
        """Data min/max padded by margin, or None for an empty point set"""
        if len(points) == 0:
            return None
        return cls(float(np.min(points.xs)) - margin,
                   float(np.min(points.ys)) - margin,
                   float(np.max(points.xs)) + margin,
                   float(np.max(points.ys)) + margin)


def is_valid_point(point) -> bool:
    """True if both coordinates are finite numbers and the label is non-empty"""
    try:
        x = float(point[0])
        y = float(point[1])
    except (TypeError, ValueError):
        return False
    label = point[2]
    return math.isfinite(x) and math.isfinite(y) and isinstance(label, str) and label != ''


class PointSet:
    """Immutable ordered view over labeled points.

    Invalid points (non-finite coordinates or empty label) are excluded on
    construction so they never reach neighbor search or binning. Coordinates
    are also kept as read-only numpy arrays for vectorized distance work.
    """

    def __init__(self, points: Iterable = ()):
        kept = []
        n_dropped = 0
        for p in points:
            if is_valid_point(p):
                kept.append(LabeledPoint(float(p[0]), float(p[1]), p[2]))
            else:
                n_dropped += 1
        if n_dropped:
            logger.warning("Excluded %d invalid point(s) from point set", n_dropped)

        self._points = tuple(kept)
        self._xs = np.array([p.x for p in kept], dtype=np.float64)
        self._ys = np.array([p.y for p in kept], dtype=np.float64)
        self._xs.setflags(write=False)
        self._ys.setflags(write=False)
        self._labels = tuple(p.label for p in kept)

    @classmethod
    def from_points(cls, points, truncation: Optional[int] = None) -> "PointSet":
        """Build a point set from the first `truncation` entries of `points`.

        Args:
            points: Full ordered dataset (LabeledPoint or (x, y, label) tuples)
            truncation: Number of leading entries to keep, None keeps all
        """
        points = list(points)
        if truncation is not None:
            if truncation < 0:
                raise ValueError(f"Truncation count must be non-negative, got {truncation}")
            points = points[:truncation]
        return cls(points)

    def truncate(self, n: int) -> "PointSet":
        """Point set holding the first n points of this one"""
        return PointSet.from_points(self._points, n)

    @property
    def xs(self) -> np.ndarray:
        return self._xs

    @property
    def ys(self) -> np.ndarray:
        return self._ys

    @property
    def labels(self) -> tuple:
        return self._labels

    def extent(self, margin: float = 0.0) -> Optional[Extent]:
        return Extent.from_points(self, margin)

    def unique_labels(self) -> list:
        """Labels in order of first appearance"""
        return list(dict.fromkeys(self._labels))

    def fingerprint(self) -> str:
        """md5 digest of coordinates and labels, used as a cache key"""
        digest = hashlib.md5()
        digest.update(self._xs.tobytes())
        digest.update(self._ys.tobytes())
        digest.update('\x1f'.join(self._labels).encode('utf-8'))
        return digest.hexdigest()

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __eq__(self, other):
        if not isinstance(other, PointSet):
            return NotImplemented
        return self._points == other._points

    def __hash__(self):
        return hash(self._points)

    def __repr__(self):
        return f"PointSet(n={len(self._points)}, labels={self.unique_labels()})"
