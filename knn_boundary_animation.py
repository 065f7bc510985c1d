"""
KNN Decision Boundary Animation

Renders one frame per k showing how a k-nearest-neighbors classifier's
decision boundary over penguin bill length vs. bill depth changes as k grows.

Each frame has two layers built on the same hexagonal grid:
- Decision layer: every hexagon colored by the KNN prediction at its center
- Density layer: occupied hexagons colored by the majority species of the
  points that fall inside them

By default the number of points used follows k (frame k uses the first k
penguins and k neighbors), as in the original interactive view. Pass
--truncation to fix the number of points and vary only k.
"""
import os
import time
import logging
import argparse
import psutil
from typing import Optional

from knn_boundary import config
from knn_boundary.animation import AnimationDriver
from knn_boundary.computation_cache import get_field_cache
from knn_boundary.data_source import load_points
from knn_boundary.density_field import DensityFieldBuilder
from knn_boundary.export_utils import export_fields_to_json
from knn_boundary.hex_grid import assign_bins
from knn_boundary.point_set import PointSet
from knn_boundary.recompute import FieldSession
from knn_boundary.rendering import label_colors, plot_fields


def rss_mb():
    """Resident set size of this process in MB"""
    return psutil.Process().memory_info().rss / 1024 / 1024


def memory_report(start_memory: Optional[float] = None):
    """Current RSS, with the growth since start_memory when given"""
    current = rss_mb()
    text = f"{current:.1f} MB"
    if start_memory is not None:
        text += f" ({current - start_memory:+.1f} MB)"
    return text


def frame_summary(k, n_frames, decision_field, density_field, start_memory):
    """One progress line per frame; memory is sampled every 10th frame"""
    line = f"  k={k:3d}: {len(decision_field)} cells classified, {len(density_field)} occupied"
    if n_frames % 10 == 0:
        line += f", memory {memory_report(start_memory)}"
    return line


def main():
    """Main execution function for the KNN boundary animation"""
    start_time = time.time()
    start_memory = rss_mb()
    print(f"Starting execution at: {time.strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Initial memory usage: {memory_report()}")

    parser = argparse.ArgumentParser(description='Render KNN decision boundary frames over a hexagonal grid')
    parser.add_argument('csv_file', nargs='?', default=config.PENGUINS_CSV_URL,
                        help='Path or URL of the penguins CSV (default: public palmerpenguins CSV)')
    parser.add_argument('--k-start', type=int, default=config.K_MIN,
                        help=f'First k to render (default: {config.K_MIN})')
    parser.add_argument('--k-max', type=int, default=config.K_MAX,
                        help=f'Last k to render (default: {config.K_MAX})')
    parser.add_argument('--truncation', type=int, default=None,
                        help='Fixed number of leading points to use (default: follow k)')
    parser.add_argument('--radius', type=float, default=config.DEFAULT_HEX_RADIUS,
                        help=f'Hexagon radius in mm (default: {config.DEFAULT_HEX_RADIUS})')
    parser.add_argument('--margin', type=float, default=config.DEFAULT_EXTENT_MARGIN,
                        help=f'Padding around the data extent in mm (default: {config.DEFAULT_EXTENT_MARGIN})')
    parser.add_argument('--output-dir', default='knn_frames',
                        help='Directory for rendered frames (default: knn_frames)')
    parser.add_argument('--export-json', action='store_true',
                        help='Export grid and fields as JSON next to each frame')
    parser.add_argument('--strict', action='store_true',
                        help='Fail on malformed rows instead of excluding them')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        config.set_hex_radius(args.radius)
        config.set_extent_margin(args.margin)
        k_start = config.validate_k(args.k_start)
        k_max = config.validate_k(args.k_max)
        if args.truncation is not None:
            config.validate_k(args.truncation)
    except ValueError as e:
        print(f"Error: {e}")
        return

    if k_start > k_max:
        print(f"Error: --k-start ({k_start}) is greater than --k-max ({k_max})")
        return

    points = load_points(args.csv_file, strict=args.strict)
    print(f"Memory after loading CSV data: {memory_report(start_memory)}")
    if not points:
        print(f"Error: No usable points loaded from '{args.csv_file}'.")
        return

    print(f"Loaded {len(points)} points")
    dataset = PointSet(points)
    colors = label_colors(dataset.labels)
    print(f"Species: {', '.join(colors)}")

    cache = get_field_cache()
    session = FieldSession(dataset, follow_k=True, cache=cache)
    print(f"Grid: {len(session.grid)} hexagons, radius {session.radius} mm, extent {tuple(round(v, 2) for v in session.grid.extent)}")

    os.makedirs(args.output_dir, exist_ok=True)
    frame_paths = []

    def on_rebuild(k, decision_field, density_field):
        frame_path = os.path.join(args.output_dir, f"knn_k{k:03d}.png")
        plot_fields(session.grid, decision_field, density_field, k, save_path=frame_path, colors=colors)
        frame_paths.append(frame_path)
        print(frame_summary(k, len(frame_paths), decision_field, density_field, start_memory))

        if args.export_json:
            truncated = dataset.truncate(session.truncation)
            json_path = os.path.join(args.output_dir, f"knn_k{k:03d}.json")
            export_fields_to_json(session.grid, decision_field, density_field, k, json_path, points=truncated)

        if args.verbose:
            builder = DensityFieldBuilder()
            stats = builder.get_stats(builder.summarize(assign_bins(dataset.truncate(session.truncation), session.grid)),
                                      len(session.grid))
            print(f"  k={k}: {stats['occupied_cells']} occupied, {stats['pure_cells']} pure, "
                  f"purity rate {stats['purity_rate']:.2f}")

    driver = AnimationDriver(session, k=k_start, truncation=args.truncation, k_max=k_max, on_rebuild=on_rebuild)

    print(f"\nRendering frames for k = {k_start}..{k_max}...")
    driver.run(from_start=False)

    stats = cache.get_cache_stats()
    print(f"\nRendered {len(frame_paths)} frame(s) into {args.output_dir}")
    if session.n_skipped:
        print(f"Skipped {session.n_skipped} rebuild(s) with no points available")
    print(f"Cache: {stats['cache_hits']} hits, {stats['cache_misses']} misses")

    print(f"Final memory usage: {memory_report(start_memory)}")
    elapsed = time.time() - start_time
    print(f"Total execution time: {elapsed:.2f} seconds")


if __name__ == '__main__':
    main()
