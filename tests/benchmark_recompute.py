"""
Simple benchmark of a full field rebuild at the penguins dataset scale.

Run with: python3 tests/benchmark_recompute.py
"""

import numpy as np
import time
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from knn_boundary.computation_cache import FieldCache
from knn_boundary.point_set import PointSet
from knn_boundary.recompute import FieldSession

print("=" * 60)
print("FIELD REBUILD BENCHMARK")
print("=" * 60)

# Generate penguin-like test data
np.random.seed(42)
n_samples = 344
coords = np.random.rand(n_samples, 2) * [27.5, 8.4] + [32.1, 13.1]
labels = np.random.choice(['Adelie', 'Gentoo', 'Chinstrap'], size=n_samples)
points = PointSet([(x, y, str(label)) for (x, y), label in zip(coords, labels)])

print(f"\nTest data: {n_samples} points")
print()

print("Rebuild Benchmark (k = truncation):")
print("-" * 60)

for radius in (1.3, 0.65):
    session = FieldSession(points, radius=radius, margin=5.0)
    start = time.time()
    for k in range(1, 101):
        session.update(k)
    elapsed = time.time() - start
    print(f"  radius {radius:4.2f}: {len(session.grid):5d} cells, "
          f"{elapsed / 100 * 1000:7.2f} ms per rebuild")

print("\nCached Replay Benchmark:")
print("-" * 60)

cache = FieldCache()
session = FieldSession(points, radius=0.65, margin=5.0, cache=cache)
for k in range(1, 101):
    session.update(k)

start = time.time()
for k in range(1, 101):
    session.update(k)
elapsed = time.time() - start
stats = cache.get_cache_stats()
print(f"  replay: {elapsed / 100 * 1000:7.3f} ms per rebuild, hit rate {stats['hit_rate']:.2f}")

print("\n" + "=" * 60)
