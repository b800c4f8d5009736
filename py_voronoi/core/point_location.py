"""
Point location by walking the triangulation.

Starting from a seed point, the walk repeatedly moves to whichever Delaunay
neighbor is closer to the query point. On a Delaunay triangulation the
greedy walk ends at the nearest point, i.e. the point whose Voronoi cell
contains the query.
"""

import math

from .geometry import squared_distance
from .triangulation import next_halfedge


def step(delaunay, i: int, x: float, y: float) -> int:
    """
    Move one step from point i towards (x, y).

    Args:
        delaunay: Triangulation adapter
        i: Current point index
        x, y: Query coordinates

    Returns:
        The neighbor of i closest to (x, y) if it is closer than i, else i.
        Points without an incoming edge hand over to the next index, and
        -1 is returned for an empty point set.
    """
    points = delaunay.points
    n = len(points)
    if n == 0:
        return -1
    if delaunay.inedges[i] == -1:
        return (i + 1) % n

    triangles = delaunay.triangles
    halfedges = delaunay.halfedges
    hull = delaunay.hull

    c = i
    dc = squared_distance(x, y, points[i, 0], points[i, 1])
    e0 = e = int(delaunay.inedges[i])
    while True:
        t = int(triangles[e])
        dt = squared_distance(x, y, points[t, 0], points[t, 1])
        if dt < dc:
            dc = dt
            c = t
        e = next_halfedge(e)
        # Bad triangulation
        if triangles[e] != i:
            break
        e = int(halfedges[e])
        if e == -1:
            # Last ring neighbor on the hull is only reachable along the hull
            h = int(hull[(delaunay.hull_index[i] + 1) % len(hull)])
            if h != t and squared_distance(x, y, points[h, 0], points[h, 1]) < dc:
                return h
            break
        if e == e0:
            break
    return c


def find(delaunay, x: float, y: float, start: int = 0) -> int:
    """
    Walk from start to the point nearest to (x, y).

    Stops when a step stays put, comes back to the seed, or hits the -1
    sentinel. NaN coordinates give -1.
    """
    if math.isnan(x) or math.isnan(y):
        return -1

    i0 = i = start
    c = step(delaunay, i, x, y)
    while c >= 0 and c != i and c != i0:
        i = c
        c = step(delaunay, i, x, y)
    return c
