"""
Voronoi vertices and exterior rays.

Every Delaunay triangle contributes its circumcenter as a Voronoi vertex.
Cells of hull points are unbounded; each hull point gets the directions of
the two rays leaving its cell, perpendicular to its two hull edges.
"""

from dataclasses import dataclass

import numpy as np

DEGENERATE_CENTER_SCALE = 1e8
NEAR_DEGENERATE_THRESHOLD = 1e-8


@dataclass
class VoronoiOptions:
    """Tunables for degenerate triangles."""
    # Push factor for zero-area triangles, large enough to act as a ray
    degenerate_center_scale: float = DEGENERATE_CENTER_SCALE
    # |2 * signed area| under which the A-C midpoint stands in for the center
    near_degenerate_threshold: float = NEAR_DEGENERATE_THRESHOLD


def compute_circumcenters(
    points: np.ndarray,
    triangles: np.ndarray,
    degenerate_center_scale: float = DEGENERATE_CENTER_SCALE,
    near_degenerate_threshold: float = NEAR_DEGENERATE_THRESHOLD,
) -> np.ndarray:
    """
    Compute one circumcenter per triangle.

    Args:
        points: (n, 2) point coordinates
        triangles: Flat point indices, three per triangle
        degenerate_center_scale: Offset factor used for zero-area triangles
        near_degenerate_threshold: Cut-off for nearly flat triangles

    Returns:
        (t, 2) array of circumcenters
    """
    tri = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if len(tri) == 0:
        return np.empty((0, 2), dtype=float)

    x1, y1 = points[tri[:, 0], 0], points[tri[:, 0], 1]
    x2, y2 = points[tri[:, 1], 0], points[tri[:, 1], 1]
    x3, y3 = points[tri[:, 2], 0], points[tri[:, 2], 1]

    dx = x2 - x1
    dy = y2 - y1
    ex = x3 - x1
    ey = y3 - y1
    bl = dx * dx + dy * dy
    cl = ex * ex + ey * ey
    ab = (dx * ey - dy * ex) * 2

    with np.errstate(divide="ignore", invalid="ignore"):
        d = 1.0 / ab
        x = x1 + (ey * bl - dy * cl) * d
        y = y1 + (dx * cl - ex * bl) * d

    # Almost equal points
    near = np.abs(ab) < near_degenerate_threshold
    x = np.where(near, (x1 + x3) / 2.0, x)
    y = np.where(near, (y1 + y3) / 2.0, y)

    # Collinear triangle: push the center far out along the normal of A-C
    flat = np.isnan(ab) | (ab == 0)
    x = np.where(flat, (x1 + x3) / 2.0 - degenerate_center_scale * ey, x)
    y = np.where(flat, (y1 + y3) / 2.0 + degenerate_center_scale * ex, y)

    return np.column_stack([x, y])


def compute_hull_rays(points: np.ndarray, hull: np.ndarray) -> np.ndarray:
    """
    Compute the exterior ray directions of hull points.

    Row p holds [in_x, in_y, out_x, out_y]: the ray perpendicular to the hull
    edge arriving at p and the one perpendicular to the edge leaving p.
    Interior points keep zeros.

    Args:
        points: (n, 2) point coordinates
        hull: Ordered hull point indices

    Returns:
        (n, 4) array of ray directions
    """
    vectors = np.zeros((len(points), 4), dtype=float)
    if len(hull) == 0:
        return vectors

    h1 = int(hull[-1])
    x1, y1 = points[h1]
    for h in np.asarray(hull).tolist():
        h0, x0, y0 = h1, x1, y1
        h1 = h
        x1, y1 = points[h1]
        vectors[h0, 2] = y0 - y1
        vectors[h0, 3] = x1 - x0
        vectors[h1, 0] = y0 - y1
        vectors[h1, 1] = x1 - x0
    return vectors
