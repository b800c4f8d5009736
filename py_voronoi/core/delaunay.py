"""
Delaunay triangulation adapter.

Wraps the raw triangulation with everything the Voronoi code needs:

- Detection of degenerate collinear input, repaired by jittering the points
- An incoming half-edge per point (exterior half-edges first on the hull)
- Position of every point on the hull
- Synthesized single-triangle topology for 1 or 2 distinct points

The point buffer is borrowed from the caller. ``update()`` and the collinear
jitter write through it.
"""

import math
from typing import Iterator, List, Optional, Sequence, Union

import numpy as np
import structlog

from ..config import settings
from . import point_location
from .geometry import cross
from .polygon import PathSink, Polygon
from .triangulation import next_halfedge, triangulate

logger = structlog.get_logger()


def as_point_buffer(points: Union[np.ndarray, Sequence]) -> np.ndarray:
    """
    View or copy coordinates as a (n, 2) float64 array.

    A float64 array of shape (n, 2), or a flat contiguous one, is used as is
    so writes reach the caller's buffer. Anything else is copied.
    """
    array = np.asarray(points, dtype=float)
    if array.size == 0:
        return array.reshape(0, 2)
    if array.ndim == 1:
        if len(array) % 2:
            raise ValueError(f"Coordinates must come in x, y pairs, got {len(array)} values")
        return array.reshape(-1, 2)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"Points must have shape (n, 2), got {array.shape}")
    return array


def jitter_points(points: np.ndarray, radius: float) -> None:
    """Move every point by (sin(x + y), cos(x - y)) * radius, in place."""
    x = points[:, 0].copy()
    y = points[:, 1].copy()
    points[:, 0] = x + np.sin(x + y) * radius
    points[:, 1] = y + np.cos(x - y) * radius


class Delaunay:
    """
    Delaunay triangulation of a point set.

    Attributes:
        points: (n, 2) coordinate buffer shared with the caller
        triangles: Flat point indices, three per triangle
        halfedges: Opposite half-edge per half-edge, -1 on the boundary
        hull: Hull point indices in order
        inedges: One incoming half-edge per point, -1 for coincident points
        hull_index: Position of each point on the hull, -1 for interior points
        collinear: Point indices sorted along the line for collinear input
    """

    def __init__(
        self,
        points: Union[np.ndarray, Sequence] = (),
        collinear_epsilon: Optional[float] = None,
        jitter_scale: Optional[float] = None,
    ):
        self.points = as_point_buffer(points)
        self.collinear_epsilon = (
            settings.collinear_epsilon if collinear_epsilon is None else collinear_epsilon
        )
        self.jitter_scale = settings.jitter_scale if jitter_scale is None else jitter_scale
        self.collinear: List[int] = []
        self.update()

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]], **kwargs) -> "Delaunay":
        """Build from a sequence of (x, y) pairs."""
        return cls(np.array(points, dtype=float).reshape(-1, 2), **kwargs)

    def __len__(self):
        return len(self.points)

    def update(self) -> "Delaunay":
        """Re-triangulate the current coordinates and rebuild all lookups."""
        triangulation = triangulate(self.points)

        if len(triangulation.hull) > 2 and self._is_collinear(triangulation.triangles):
            self.collinear = self._sorted_indices()
            first = self.points[self.collinear[0]]
            last = self.points[self.collinear[-1]]
            radius = self.jitter_scale * math.hypot(last[0] - first[0], last[1] - first[1])

            logger.warning("Collinear points detected, jittering",
                           points=len(self.points), radius=radius)

            jitter_points(self.points, radius)
            triangulation = triangulate(self.points)
        else:
            self.collinear = []

        self.triangles = triangulation.triangles
        self.halfedges = triangulation.halfedges
        self.hull = triangulation.hull
        self._build_lookups()
        return self

    def _is_collinear(self, triangles: np.ndarray) -> bool:
        """True when no triangle has a signed area above the epsilon."""
        tri = triangles.reshape(-1, 3)
        if len(tri) == 0:
            return True

        a = self.points[tri[:, 0]]
        b = self.points[tri[:, 1]]
        c = self.points[tri[:, 2]]
        area = cross(a[:, 0], a[:, 1], b[:, 0], b[:, 1], c[:, 0], c[:, 1])
        return not np.any(np.abs(area) > self.collinear_epsilon)

    def _sorted_indices(self) -> List[int]:
        """Finite point indices sorted by x, then y."""
        finite = np.flatnonzero(np.isfinite(self.points).all(axis=1)).tolist()
        return sorted(finite, key=lambda i: (self.points[i, 0], self.points[i, 1]))

    def _build_lookups(self):
        n = len(self.points)
        triangles = self.triangles.tolist()
        halfedges = self.halfedges.tolist()

        inedges = [-1] * n
        for e, opposite in enumerate(halfedges):
            p = triangles[next_halfedge(e)]
            if opposite == -1 or inedges[p] == -1:
                inedges[p] = e

        hull_index = np.full(n, -1, dtype=np.int64)
        hull_index[self.hull] = np.arange(len(self.hull))

        # 1 or 2 distinct points: one degenerate triangle so the cell code
        # always has a ring to walk
        if 1 <= len(self.hull) <= 2:
            h0 = int(self.hull[0])
            if len(self.hull) == 2:
                h1 = int(self.hull[1])
                self.triangles = np.array([h0, h1, h1], dtype=np.int64)
                inedges[h1] = 0
            else:
                self.triangles = np.array([h0, 0, 0], dtype=np.int64)
            self.halfedges = np.array([-1, -1, -1], dtype=np.int64)
            inedges[h0] = 1

        self.inedges = np.array(inedges, dtype=np.int64)
        self.hull_index = hull_index

        logger.debug("Delaunay lookups built",
                     points=n, triangles=len(self.triangles) // 3, hull=len(self.hull),
                     collinear=bool(self.collinear))

    def neighbors(self, i: int) -> Iterator[int]:
        """Yield the Delaunay neighbors of point i."""
        if self.collinear:
            if i not in self.collinear:
                return
            position = self.collinear.index(i)
            if position > 0:
                yield self.collinear[position - 1]
            if position < len(self.collinear) - 1:
                yield self.collinear[position + 1]
            return

        e0 = int(self.inedges[i])
        # Coincident point, or the only point
        if e0 == -1 or len(self.hull) == 1:
            return

        e = e0
        while True:
            p0 = int(self.triangles[e])
            yield p0
            e = next_halfedge(e)
            # Bad triangulation
            if self.triangles[e] != i:
                return
            e = int(self.halfedges[e])
            if e == -1:
                p = int(self.hull[(self.hull_index[i] + 1) % len(self.hull)])
                if p != p0:
                    yield p
                return
            if e == e0:
                return

    def find(self, x: float, y: float, start: int = 0) -> int:
        """Index of the point closest to (x, y), -1 for NaN input."""
        return point_location.find(self, x, y, start)

    def step(self, i: int, x: float, y: float) -> int:
        return point_location.step(self, i, x, y)

    def voronoi(self, bound=None, options=None):
        """Build the Voronoi diagram of this triangulation."""
        from .voronoi import Voronoi
        return Voronoi(self, bound, options)

    # Triangulation outputs

    def hull_coordinates(self, closed: bool = True) -> np.ndarray:
        return self.render_hull(Polygon(), closed).to_array()

    def triangle_coordinates(self) -> np.ndarray:
        """(t, 3, 2) array with the corners of every triangle."""
        return self.points[self.triangles.reshape(-1, 3)]

    def triangle_centroids(self) -> np.ndarray:
        return self.triangle_coordinates().mean(axis=1)

    def edge_indices(self) -> np.ndarray:
        """Point index pairs for every interior edge once, then the hull edges."""
        edges = []
        for e, opposite in enumerate(self.halfedges.tolist()):
            if opposite < e:
                continue
            edges.append((int(self.triangles[e]), int(self.triangles[opposite])))

        hull = self.hull.tolist()
        for i in range(len(hull) - 1):
            edges.append((hull[i], hull[i + 1]))
        if hull:
            edges.append((hull[0], hull[-1]))

        return np.array(edges, dtype=np.int64).reshape(-1, 2)

    def line_segments(self) -> np.ndarray:
        """(m, 4) array of x1, y1, x2, y2 for every edge from edge_indices()."""
        edges = self.edge_indices()
        return np.hstack([self.points[edges[:, 0]], self.points[edges[:, 1]]])

    def render(self, sink: PathSink) -> PathSink:
        self.render_halfedges(sink)
        self.render_hull(sink)
        return sink

    def render_halfedges(self, sink: PathSink) -> PathSink:
        for e, opposite in enumerate(self.halfedges.tolist()):
            if opposite < e:
                continue
            ti = self.triangles[e]
            tj = self.triangles[opposite]
            sink.move_to(*self.points[ti])
            sink.line_to(*self.points[tj])
        return sink

    def render_hull(self, sink: PathSink, closed: bool = True) -> PathSink:
        if len(self.hull) == 0:
            return sink
        sink.move_to(*self.points[self.hull[0]])
        for h in self.hull[1:]:
            sink.line_to(*self.points[h])
        if closed:
            sink.close_path()
        return sink

    def render_triangle(self, t: int, sink: PathSink, closed: bool = True) -> PathSink:
        j = t * 3
        if t < 0 or j + 2 >= len(self.triangles):
            return sink
        a, b, c = self.triangles[j:j + 3]
        sink.move_to(*self.points[a])
        sink.line_to(*self.points[b])
        sink.line_to(*self.points[c])
        if closed:
            sink.close_path()
        return sink
