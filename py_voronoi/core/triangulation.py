"""
Delaunay triangulation backend.

Wraps ``scipy.spatial.Delaunay`` (Qhull) and converts its simplices into the
half-edge layout the Voronoi code walks:

- ``triangles``: flat point indices, three per triangle. Every triangle is
  wound clockwise with y pointing up (counter-clockwise on a y-down screen).
- ``halfedges``: for half-edge ``e`` (running from ``triangles[e]`` to
  ``triangles[next_halfedge(e)]``) the index of the opposite half-edge, or -1
  on the boundary.
- ``hull``: hull point indices in the direction of the boundary half-edges.

Point sets Qhull cannot triangulate (fewer than three distinct points, or all
points on a line) come back with no triangles and every distinct point on the
hull, ordered along the line.
"""

from dataclasses import dataclass

import numpy as np
import structlog
from scipy.spatial import Delaunay as QhullDelaunay
from scipy.spatial import QhullError

from .geometry import cross

logger = structlog.get_logger()

# Ratio of the two singular values under which a point cloud counts as a line
FLATNESS_RATIO = 1e-12


def next_halfedge(e: int) -> int:
    return e - 2 if e % 3 == 2 else e + 1


@dataclass
class Triangulation:
    """Raw triangulation arrays."""
    triangles: np.ndarray
    halfedges: np.ndarray
    hull: np.ndarray


def triangulate(points: np.ndarray) -> Triangulation:
    """
    Triangulate a (n, 2) point array.

    Non-finite points and repeated coordinates (after their first occurrence)
    are left out, so they end up in no triangle and not on the hull.

    Args:
        points: Array of [x, y] point coordinates

    Returns:
        Triangulation with half-edge adjacency and ordered hull
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    candidates = _distinct_finite(points)

    if len(candidates) == 0:
        return Triangulation(
            triangles=np.empty(0, dtype=np.int64),
            halfedges=np.empty(0, dtype=np.int64),
            hull=np.empty(0, dtype=np.int64),
        )

    if not _is_flat(points[candidates]):
        try:
            qhull = QhullDelaunay(points[candidates])
        except QhullError as exc:
            logger.warning("Qhull rejected point set, ordering it as a line",
                           points=len(candidates), error=str(exc).splitlines()[0])
        else:
            return _from_simplices(points, candidates[qhull.simplices])

    return _line_hull(points, candidates)


def _distinct_finite(points: np.ndarray) -> np.ndarray:
    """Indices of finite points, keeping the first of any repeated coordinate."""
    finite = np.flatnonzero(np.isfinite(points).all(axis=1))
    if len(finite) == 0:
        return finite
    _, first = np.unique(points[finite], axis=0, return_index=True)
    return np.sort(finite[first])


def _is_flat(points: np.ndarray) -> bool:
    if len(points) < 3:
        return True
    centered = points - points.mean(axis=0)
    singular = np.linalg.svd(centered, compute_uv=False)
    return singular[1] <= FLATNESS_RATIO * singular[0]


def _from_simplices(points: np.ndarray, simplices: np.ndarray) -> Triangulation:
    """Orient simplices and link their half-edges."""
    tri = np.array(simplices, dtype=np.int64).reshape(-1, 3)

    a = points[tri[:, 0]]
    b = points[tri[:, 1]]
    c = points[tri[:, 2]]
    flip = cross(a[:, 0], a[:, 1], b[:, 0], b[:, 1], c[:, 0], c[:, 1]) < 0
    tri[flip] = tri[flip][:, [0, 2, 1]]

    triangles = tri.ravel()
    corners = triangles.tolist()
    halfedges = [-1] * len(corners)

    # Directed edges still waiting for their twin
    open_edges = {}
    for e, start in enumerate(corners):
        end = corners[next_halfedge(e)]
        twin = open_edges.pop((end, start), None)
        if twin is None:
            open_edges[(start, end)] = e
        else:
            halfedges[e] = twin
            halfedges[twin] = e

    hull = _walk_boundary(open_edges)

    logger.debug("Triangulation built", triangles=len(tri), hull=len(hull))

    return Triangulation(
        triangles=triangles,
        halfedges=np.array(halfedges, dtype=np.int64),
        hull=np.array(hull, dtype=np.int64),
    )


def _walk_boundary(open_edges: dict) -> list:
    """Chain the unpaired half-edges into the hull loop."""
    if not open_edges:
        return []

    successor = {start: end for start, end in open_edges}
    first_edge = min(open_edges.items(), key=lambda item: item[1])[0]
    start = first_edge[0]

    hull = [start]
    p = successor[start]
    while p != start and len(hull) < len(successor):
        hull.append(p)
        if p not in successor:
            break
        p = successor[p]
    return hull


def _line_hull(points: np.ndarray, candidates: np.ndarray) -> Triangulation:
    """Degenerate triangulation: no triangles, distinct points ordered along the line."""
    origin = points[candidates[0]]
    dx = points[candidates, 0] - origin[0]
    dy = points[candidates, 1] - origin[1]
    # Order by x offset, or by y offset for points sharing the origin's x
    dists = np.where(dx != 0, dx, dy)
    hull = candidates[np.argsort(dists, kind="stable")]

    return Triangulation(
        triangles=np.empty(0, dtype=np.int64),
        halfedges=np.empty(0, dtype=np.int64),
        hull=hull.astype(np.int64),
    )
