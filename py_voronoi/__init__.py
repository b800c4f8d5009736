"""
Bounded Voronoi diagrams from Delaunay triangulations.
"""

from .core import (
    Bound, Cell, Delaunay, InvalidBoundError, Point, Polygon, RelaxationStats,
    Voronoi, VoronoiOptions, jittered_grid, random_points, relax, spacing_for,
)

__version__ = "0.1.0"

__all__ = ['Bound', 'Cell', 'Delaunay', 'InvalidBoundError', 'Point', 'Polygon',
           'RelaxationStats', 'Voronoi', 'VoronoiOptions', 'jittered_grid',
           'random_points', 'relax', 'spacing_for']
