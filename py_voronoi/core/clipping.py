"""
Clipping of Voronoi cells against the bound rectangle.

Two codes describe a point relative to the bound:

- region code: which outer half-planes the point lies in (0 means inside)
- edge code: which bound edges the point lies exactly on (0 means neither)

Finite cells are clipped edge by edge. When two consecutive clipped
vertices sit on different bound edges, the corners between them are walked
clockwise on screen (top, right, bottom, left) and inserted when they
belong to the cell. Unbounded hull cells are first closed by projecting
their two rays onto the bound.
"""

from typing import Callable, List, Optional, Tuple

from .geometry import Bound

Vertex = Tuple[float, float]

LEFT = 0b0001
RIGHT = 0b0010
TOP = 0b0100
BOTTOM = 0b1000


class CellClipper:
    """Clips raw cells of point i to a bound.

    Args:
        bound: Clipping rectangle
        contains: Callable (i, x, y) -> bool telling if (x, y) is in cell i
    """

    def __init__(self, bound: Bound, contains: Callable[[int, float, float], bool]):
        self.bound = bound
        self.contains = contains

        left, top, right, bottom = bound.as_tuple()
        # Edge code -> (next edge code, corner reached on the way)
        self._corner_walk = {
            TOP | LEFT: (TOP, None),
            TOP: (TOP | RIGHT, (right, top)),
            TOP | RIGHT: (RIGHT, None),
            RIGHT: (BOTTOM | RIGHT, (right, bottom)),
            BOTTOM | RIGHT: (BOTTOM, None),
            BOTTOM: (BOTTOM | LEFT, (left, bottom)),
            BOTTOM | LEFT: (LEFT, None),
            LEFT: (TOP | LEFT, (left, top)),
        }

    def region_code(self, x: float, y: float) -> int:
        b = self.bound
        code = LEFT if x < b.left else RIGHT if x > b.right else 0
        code |= TOP if y < b.top else BOTTOM if y > b.bottom else 0
        return code

    def edge_code(self, x: float, y: float) -> int:
        b = self.bound
        code = LEFT if x == b.left else RIGHT if x == b.right else 0
        code |= TOP if y == b.top else BOTTOM if y == b.bottom else 0
        return code

    def rectangle(self) -> List[Vertex]:
        """Bound corners starting at the top-right."""
        left, top, right, bottom = self.bound.as_tuple()
        return [(right, top), (right, bottom), (left, bottom), (left, top)]

    def clip_segment(
        self, x0: float, y0: float, x1: float, y1: float, c0: int, c1: int
    ) -> Optional[Tuple[float, float, float, float]]:
        """
        Clip the segment (x0, y0)-(x1, y1) to the bound.

        Args:
            x0, y0, x1, y1: Segment end points
            c0, c1: Their region codes

        Returns:
            Clipped (x0, y0, x1, y1), or None when the segment misses the bound
        """
        b = self.bound
        while True:
            if c0 == 0 and c1 == 0:
                return (x0, y0, x1, y1)
            # Both ends beyond the same edge
            if c0 & c1:
                return None

            c = c0 or c1
            if c & BOTTOM:
                x = x0 + (x1 - x0) * (b.bottom - y0) / (y1 - y0)
                y = b.bottom
            elif c & TOP:
                x = x0 + (x1 - x0) * (b.top - y0) / (y1 - y0)
                y = b.top
            elif c & RIGHT:
                y = y0 + (y1 - y0) * (b.right - x0) / (x1 - x0)
                x = b.right
            else:
                y = y0 + (y1 - y0) * (b.left - x0) / (x1 - x0)
                x = b.left

            if c0:
                x0, y0 = x, y
                c0 = self.region_code(x0, y0)
            else:
                x1, y1 = x, y
                c1 = self.region_code(x1, y1)

    def project(self, x0: float, y0: float, vx: float, vy: float) -> Optional[Vertex]:
        """Point where the ray from (x0, y0) along (vx, vy) leaves the bound."""
        b = self.bound
        t = float("inf")
        x = y = 0.0
        if vy < 0:
            if y0 <= b.top:
                return None
            c = (b.top - y0) / vy
            if c < t:
                y = b.top
                t = c
                x = x0 + t * vx
        elif vy > 0:
            if y0 >= b.bottom:
                return None
            c = (b.bottom - y0) / vy
            if c < t:
                y = b.bottom
                t = c
                x = x0 + t * vx

        if vx > 0:
            if x0 >= b.right:
                return None
            c = (b.right - x0) / vx
            if c < t:
                x = b.right
                t = c
                y = y0 + t * vy
        elif vx < 0:
            if x0 <= b.left:
                return None
            c = (b.left - x0) / vx
            if c < t:
                x = b.left
                t = c
                y = y0 + t * vy
        return (x, y)

    def clip_finite(self, i: int, points: List[Vertex]) -> Optional[List[Vertex]]:
        """
        Clip the closed polygon ``points`` of cell i.

        Returns:
            Clipped vertices, the whole rectangle when the polygon surrounds
            the bound, or None when the cell misses the bound
        """
        polygon: Optional[List[Vertex]] = None
        x1, y1 = points[-1]
        c1 = self.region_code(x1, y1)
        e1 = 0

        for x, y in points:
            x0, y0, c0 = x1, y1, c1
            x1, y1 = x, y
            c1 = self.region_code(x1, y1)

            if c0 == 0 and c1 == 0:
                e0, e1 = e1, 0
                if polygon is None:
                    polygon = []
                polygon.append((x1, y1))
                continue

            if c0 == 0:
                s = self.clip_segment(x0, y0, x1, y1, c0, c1)
                if s is None:
                    continue
                sx0, sy0, sx1, sy1 = s
            else:
                s = self.clip_segment(x1, y1, x0, y0, c1, c0)
                if s is None:
                    continue
                sx1, sy1, sx0, sy0 = s
                e0, e1 = e1, self.edge_code(sx0, sy0)
                if e0 and e1 and polygon is not None:
                    self.insert_corners(i, e0, e1, polygon, len(polygon))
                if polygon is None:
                    polygon = []
                polygon.append((sx0, sy0))

            e0, e1 = e1, self.edge_code(sx1, sy1)
            if e0 and e1 and polygon is not None:
                self.insert_corners(i, e0, e1, polygon, len(polygon))
            if polygon is None:
                polygon = []
            polygon.append((sx1, sy1))

        if polygon is not None:
            e0, e1 = e1, self.edge_code(*polygon[0])
            if e0 and e1:
                self.insert_corners(i, e0, e1, polygon, len(polygon))
        elif self.contains(i, *self.bound.center):
            return self.rectangle()
        return polygon

    def clip_infinite(
        self, i: int, points: List[Vertex], vx0: float, vy0: float, vxn: float, vyn: float
    ) -> Optional[List[Vertex]]:
        """
        Clip the unbounded cell of hull point i.

        Args:
            i: Point index
            points: Raw cell vertices
            vx0, vy0: Ray leaving the first vertex
            vxn, vyn: Ray leaving the last vertex
        """
        polygon = list(points)
        p = self.project(polygon[0][0], polygon[0][1], vx0, vy0)
        if p is not None:
            polygon.insert(0, p)
        p = self.project(polygon[-1][0], polygon[-1][1], vxn, vyn)
        if p is not None:
            polygon.append(p)

        clipped = self.clip_finite(i, polygon)
        if clipped is not None:
            n = len(clipped)
            c1 = self.edge_code(*clipped[-1])
            j = 0
            while j < n:
                c0, c1 = c1, self.edge_code(*clipped[j])
                if c0 and c1:
                    j = self.insert_corners(i, c0, c1, clipped, j)
                    n = len(clipped)
                j += 1
            return clipped

        if self.contains(i, *self.bound.center):
            left, top, right, bottom = self.bound.as_tuple()
            return [(left, top), (right, top), (right, bottom), (left, bottom)]
        return None

    def insert_corners(self, i: int, e0: int, e1: int, polygon: List[Vertex], j: int) -> int:
        """
        Insert the bound corners between edge codes e0 and e1 at index j.

        Only corners inside cell i, and not already at index j, are inserted.
        Afterwards the middle vertex of any three consecutive vertices sharing
        x or sharing y is dropped.

        Returns:
            Index of the vertex that was at j before insertion
        """
        while e0 != e1:
            if e0 not in self._corner_walk:
                break
            e0, corner = self._corner_walk[e0]
            if corner is None:
                continue
            if (j >= len(polygon) or polygon[j] != corner) and self.contains(i, *corner):
                polygon.insert(j, corner)
                j += 1

        if len(polygon) > 2:
            k = 0
            while k < len(polygon) and len(polygon) > 2:
                n = len(polygon)
                a = polygon[k]
                b = polygon[(k + 1) % n]
                c = polygon[(k + 2) % n]
                if (a[0] == b[0] == c[0]) or (a[1] == b[1] == c[1]):
                    del polygon[(k + 1) % n]
                else:
                    k += 1
        return j
