#!/usr/bin/env python3
"""
Demonstration of bounded Voronoi diagrams and Lloyd's relaxation.

This script shows:
1. Building a diagram from random points
2. Querying cells and neighbors
3. Relaxing the points toward an even spread
"""

import numpy as np
from scipy.spatial import distance_matrix

from py_voronoi import Bound, Delaunay, random_points
from py_voronoi.utils.log import configure_logging


def avg_nearest_neighbor(points):
    dist_matrix = distance_matrix(points, points)
    np.fill_diagonal(dist_matrix, np.inf)
    return np.mean(np.min(dist_matrix, axis=1))


def main():
    configure_logging("INFO", "console")

    bound = Bound(0, 0, 960, 500)
    points = random_points(200, bound, seed=42)

    print("=== Bounded Voronoi Demo ===\n")

    # 1. Build the diagram
    print("1. Building diagram...")
    voronoi = Delaunay(points).voronoi(bound)
    areas = voronoi.cell_areas()
    print(f"   - Cells: {len(voronoi)}")
    print(f"   - Voronoi vertices: {len(voronoi.circumcenters)}")
    print(f"   - Area covered: {areas.sum():.1f} of {bound.area:.1f}")

    # 2. Query
    print("\n2. Querying...")
    i = voronoi.find(480, 250)
    print(f"   - Cell at (480, 250): {i}")
    print(f"   - Neighbors: {sorted(voronoi.neighbors(i))}")
    print(f"   - Vertices: {len(voronoi.cell_polygon(i, closed=False))}")

    # 3. Relax
    print("\n3. Relaxing...")
    before = avg_nearest_neighbor(points)
    history = voronoi.relax(5)
    for stats in history:
        print(f"   - Iteration {stats.iteration}: mean area {stats.mean_area:.1f}, "
              f"variance {stats.area_variance:.1f}")
    after = avg_nearest_neighbor(voronoi.delaunay.points)
    print(f"   - Avg nearest neighbor: {before:.2f} -> {after:.2f}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
