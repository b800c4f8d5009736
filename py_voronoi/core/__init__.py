"""
Delaunay triangulation and bounded Voronoi diagrams.
"""

from .geometry import Bound, InvalidBoundError, Point
from .polygon import PathSink, Polygon
from .delaunay import Delaunay
from .circumcenters import VoronoiOptions
from .voronoi import Cell, Voronoi
from .relaxation import RelaxationStats, relax
from .sampling import jittered_grid, random_points, spacing_for

__all__ = ['Bound', 'InvalidBoundError', 'Point', 'PathSink', 'Polygon',
           'Delaunay', 'VoronoiOptions', 'Cell', 'Voronoi',
           'RelaxationStats', 'relax', 'jittered_grid', 'random_points', 'spacing_for']
