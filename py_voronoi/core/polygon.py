"""
Polygon measures and the path sink interface used by the render methods.

The Voronoi and Delaunay classes never build output strings themselves;
they drive any object with ``move_to``, ``line_to`` and ``close_path``.
``Polygon`` is the bundled sink and simply records vertices.
"""

import math
from typing import Iterable, List, Protocol, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString, MultiPoint
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon

from .geometry import Bound, Point

Vertex = Tuple[float, float]


class PathSink(Protocol):
    """Anything that accepts path drawing instructions."""

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...


class Polygon:
    """Path sink collecting vertices as (x, y) tuples."""

    def __init__(self, vertices: Iterable[Vertex] = ()):
        self.vertices: List[Vertex] = [(float(x), float(y)) for x, y in vertices]

    def move_to(self, x: float, y: float) -> None:
        self.vertices.append((x, y))

    def line_to(self, x: float, y: float) -> None:
        self.vertices.append((x, y))

    def close_path(self) -> None:
        # Repeat the first vertex
        if self.vertices:
            self.vertices.append(self.vertices[0])

    def to_array(self) -> np.ndarray:
        return np.array(self.vertices, dtype=float).reshape(-1, 2)

    def area(self) -> float:
        return polygon_area(self.vertices)

    def centroid(self) -> Point:
        return polygon_centroid(self.vertices)

    def contains(self, x: float, y: float) -> bool:
        return polygon_contains(self.vertices, x, y)

    def perimeter(self) -> float:
        return polygon_perimeter(self.vertices)

    def bounds(self) -> Bound:
        return polygon_bounds(self.vertices)

    def __len__(self):
        return len(self.vertices)

    def __eq__(self, other):
        if not isinstance(other, Polygon):
            return NotImplemented
        return self.vertices == other.vertices

    def __repr__(self):
        return f"Polygon({self.vertices!r})"


def polygon_area(vertices: Sequence[Vertex]) -> float:
    """Unsigned area by the shoelace formula."""
    if len(vertices) < 3:
        return 0.0

    area = 0.0
    bx, by = vertices[-1]
    for ax, ay in vertices:
        area += by * ax - bx * ay
        bx, by = ax, ay
    return abs(area / 2.0)


def polygon_centroid(vertices: Sequence[Vertex]) -> Point:
    """Compute the area-weighted centroid of a polygon.

    Falls back to the mean of the vertices when the polygon has no area,
    returns (nan, nan) for an empty polygon.
    """
    if len(vertices) == 0:
        return Point(math.nan, math.nan)

    k = 0.0
    x = 0.0
    y = 0.0
    bx, by = vertices[-1]
    for vx, vy in vertices:
        ax, ay = bx, by
        bx, by = vx, vy
        c = ax * by - bx * ay
        k += c
        x += (ax + bx) * c
        y += (ay + by) * c
    k *= 3.0

    if abs(k) < 1e-12:
        mean = np.mean(np.asarray(vertices, dtype=float), axis=0)
        return Point(float(mean[0]), float(mean[1]))

    return Point(x / k, y / k)


def polygon_contains(vertices: Sequence[Vertex], x: float, y: float) -> bool:
    """Check if (x, y) lies strictly inside the polygon."""
    if len(vertices) < 3:
        return False
    return ShapelyPolygon(vertices).contains(ShapelyPoint(x, y))


def polygon_perimeter(vertices: Sequence[Vertex]) -> float:
    if len(vertices) < 2:
        return 0.0
    # Closed ring through every vertex
    return LineString(list(vertices) + [vertices[0]]).length


def polygon_bounds(vertices: Sequence[Vertex]) -> Bound:
    """Smallest bound enclosing all vertices."""
    if len(vertices) == 0:
        return Bound(0.0, 0.0, 0.0, 0.0)

    min_x, min_y, max_x, max_y = MultiPoint(list(vertices)).bounds
    return Bound(min_x, min_y, max_x, max_y)
