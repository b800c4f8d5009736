"""
Voronoi diagram clipped to a rectangular bound.

The diagram is derived from a ``Delaunay`` triangulation: triangle
circumcenters are the Voronoi vertices and the cell of point i is the ring of
circumcenters around i. Hull points have unbounded cells which are closed
with two exterior rays before clipping.
"""

import math
from typing import Iterator, List, NamedTuple, Optional, Sequence, Union

import numpy as np
import structlog

from ..config import settings
from .circumcenters import VoronoiOptions, compute_circumcenters, compute_hull_rays
from .clipping import CellClipper, Vertex
from .delaunay import Delaunay
from .geometry import Bound
from .polygon import PathSink, Polygon, polygon_area, polygon_centroid
from .relaxation import relax
from .triangulation import next_halfedge

logger = structlog.get_logger()


class Cell(NamedTuple):
    """Clipped cell of one input point."""
    index: int
    coordinates: np.ndarray


class Voronoi:
    """
    Voronoi diagram of a Delaunay triangulation.

    Attributes:
        delaunay: Underlying triangulation, sharing the caller's point buffer
        bound: Clipping rectangle
        options: Tunables for degenerate triangles
        circumcenters: (t, 2) array, one Voronoi vertex per triangle
        vectors: (n, 4) exterior ray directions, zero for interior points
    """

    def __init__(
        self,
        delaunay: Delaunay,
        bound: Optional[Union[Bound, Sequence[float]]] = None,
        options: Optional[VoronoiOptions] = None,
    ):
        self.delaunay = delaunay
        self.bound = settings.default_bound() if bound is None else Bound.coerce(bound)
        self.options = settings.voronoi_options() if options is None else options
        self.clipper = CellClipper(self.bound, self.contains)
        self._init()

    def _init(self):
        delaunay = self.delaunay
        self.circumcenters = compute_circumcenters(
            delaunay.points,
            delaunay.triangles,
            self.options.degenerate_center_scale,
            self.options.near_degenerate_threshold,
        )
        self.vectors = compute_hull_rays(delaunay.points, delaunay.hull)

        # Plain lists for the per-vertex loops
        self._centers: List[List[float]] = self.circumcenters.tolist()
        self._rays: List[List[float]] = self.vectors.tolist()

        logger.debug("Voronoi diagram computed",
                     points=len(delaunay.points), vertices=len(self.circumcenters),
                     hull=len(delaunay.hull), bound=self.bound.as_tuple())

    def update(self) -> "Voronoi":
        """Re-triangulate the current coordinates and rebuild the diagram."""
        self.delaunay.update()
        self._init()
        return self

    def __len__(self):
        return len(self.delaunay.points)

    # Cells

    def raw_cell(self, i: int) -> Optional[List[Vertex]]:
        """Unclipped ring of circumcenters around point i, None for coincident points."""
        delaunay = self.delaunay
        e0 = int(delaunay.inedges[i])
        if e0 == -1:
            return None

        triangles = delaunay.triangles
        halfedges = delaunay.halfedges
        points = []
        e = e0
        while True:
            x, y = self._centers[e // 3]
            points.append((x, y))
            e = next_halfedge(e)
            # Bad triangulation
            if triangles[e] != i:
                break
            e = int(halfedges[e])
            if e == e0 or e == -1:
                break
        return points

    def clip(self, i: int) -> Optional[List[Vertex]]:
        """Cell of point i clipped to the bound, None when it is empty."""
        hull = self.delaunay.hull
        # A single distinct point owns the whole bound
        if len(hull) == 1 and i == hull[0]:
            return self.clipper.rectangle()

        points = self.raw_cell(i)
        if points is None:
            return None

        vx0, vy0, vxn, vyn = self._rays[i]
        if vx0 or vy0:
            return self.clipper.clip_infinite(i, points, vx0, vy0, vxn, vyn)
        return self.clipper.clip_finite(i, points)

    def contains(self, i: int, x: float, y: float) -> bool:
        """Check if (x, y) lies in the cell of point i."""
        if math.isnan(x) or math.isnan(y):
            return False
        return self.delaunay.step(i, x, y) == i

    def find(self, x: float, y: float, start: int = 0) -> int:
        """Index of the cell containing (x, y), -1 for NaN input."""
        return self.delaunay.find(x, y, start)

    def neighbors(self, i: int) -> Iterator[int]:
        """Yield the points whose clipped cells share an edge with cell i."""
        ci = self.clip(i)
        if not ci:
            return

        li = len(ci)
        for j in self.delaunay.neighbors(i):
            cj = self.clip(j)
            if not cj:
                continue
            lj = len(cj)
            # Cells are wound the same way, a shared edge runs backwards in cj
            shared = any(
                ci[a] == cj[b] and ci[(a + 1) % li] == cj[(b - 1) % lj]
                for a in range(li)
                for b in range(lj)
            )
            if shared:
                yield j

    # Rendering

    def render(self, sink: PathSink) -> PathSink:
        """Draw every Voronoi edge clipped to the bound."""
        delaunay = self.delaunay
        hull = delaunay.hull.tolist()
        if len(hull) <= 1:
            return sink

        for e, opposite in enumerate(delaunay.halfedges.tolist()):
            if opposite < e:
                continue
            xi, yi = self._centers[e // 3]
            xj, yj = self._centers[opposite // 3]
            self._render_segment(xi, yi, xj, yj, sink)

        h1 = hull[-1]
        for h in hull:
            h0, h1 = h1, h
            x, y = self._centers[int(delaunay.inedges[h1]) // 3]
            p = self.clipper.project(x, y, self._rays[h0][2], self._rays[h0][3])
            if p is not None:
                self._render_segment(x, y, p[0], p[1], sink)
        return sink

    def _render_segment(self, x0: float, y0: float, x1: float, y1: float, sink: PathSink):
        clipper = self.clipper
        c0 = clipper.region_code(x0, y0)
        c1 = clipper.region_code(x1, y1)
        if c0 == 0 and c1 == 0:
            sink.move_to(x0, y0)
            sink.line_to(x1, y1)
            return

        s = clipper.clip_segment(x0, y0, x1, y1, c0, c1)
        if s is not None:
            sink.move_to(s[0], s[1])
            sink.line_to(s[2], s[3])

    def render_bounds(self, sink: PathSink) -> PathSink:
        """Draw the bound rectangle, clockwise on screen from the top-left."""
        left, top, right, bottom = self.bound.as_tuple()
        sink.move_to(left, top)
        sink.line_to(right, top)
        sink.line_to(right, bottom)
        sink.line_to(left, bottom)
        sink.close_path()
        return sink

    def render_cell(self, i: int, sink: PathSink, closed: bool = True) -> PathSink:
        """
        Draw the clipped cell of point i.

        Repeated consecutive vertices are drawn once and trailing copies of
        the first vertex are dropped before the optional ``close_path``.
        """
        points = self.clip(i)
        if not points:
            return sink

        sink.move_to(*points[0])
        n = len(points)
        while n > 1 and points[n - 1] == points[0]:
            n -= 1
        for k in range(1, n):
            if points[k] != points[k - 1]:
                sink.line_to(*points[k])
        if closed:
            sink.close_path()
        return sink

    # Outputs

    def cell_polygon(self, i: int, closed: bool = True) -> np.ndarray:
        """(k, 2) vertices of cell i, empty when the cell is empty."""
        return self.render_cell(i, Polygon(), closed).to_array()

    def cell_polygons(self, closed: bool = True) -> Iterator[Cell]:
        """Yield every non-empty cell with its point index."""
        for i in range(len(self)):
            coordinates = self.cell_polygon(i, closed)
            if len(coordinates):
                yield Cell(i, coordinates)

    def cells_coordinates(self, closed: bool = True) -> List[np.ndarray]:
        """Vertices of every cell in point order, empty arrays included."""
        return [self.cell_polygon(i, closed) for i in range(len(self))]

    def cell_centroids(self) -> np.ndarray:
        """(n, 2) area-weighted cell centroids, NaN rows for empty cells."""
        centroids = np.full((len(self), 2), np.nan)
        for i in range(len(self)):
            points = self.clip(i)
            if points:
                centroids[i] = polygon_centroid(points)
        return centroids

    def cell_areas(self) -> np.ndarray:
        areas = np.zeros(len(self))
        for i in range(len(self)):
            points = self.clip(i)
            if points:
                areas[i] = polygon_area(points)
        return areas

    def line_segments(self) -> np.ndarray:
        """(m, 4) array of clipped Voronoi edges as x1, y1, x2, y2."""
        return self.render(Polygon()).to_array().reshape(-1, 4)

    def relax(self, iterations: int = 1, batched: bool = False):
        """Run Lloyd relaxation on the point buffer, see ``relaxation.relax``."""
        return relax(self, iterations, batched=batched)
