"""
Lloyd relaxation.

Moves every point to the centroid of its clipped Voronoi cell and rebuilds
the diagram, which spreads the points evenly over the bound after a few
iterations.
"""

from dataclasses import dataclass
from typing import List

import numpy as np
import structlog

from .polygon import polygon_area, polygon_centroid

logger = structlog.get_logger()


@dataclass
class RelaxationStats:
    """Cell area statistics after one iteration."""
    iteration: int
    mean_area: float
    area_variance: float


def relax(voronoi, iterations: int = 1, batched: bool = False) -> List[RelaxationStats]:
    """
    Apply Lloyd's relaxation to the point buffer of a Voronoi diagram.

    By default points are moved one at a time in index order and the diagram
    is rebuilt after every move, so later points see the earlier moves. With
    ``batched`` all centroids of an iteration are computed first and the
    diagram is rebuilt once. Points with an empty cell stay where they are.

    Args:
        voronoi: Diagram to relax, updated in place
        iterations: Number of relaxation iterations
        batched: Rebuild once per iteration instead of once per point

    Returns:
        Area statistics for each iteration
    """
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")

    logger.info("Starting Lloyd's relaxation",
                iterations=iterations, points=len(voronoi), batched=batched)

    history = []
    for iteration in range(iterations):
        if batched:
            moved = _relax_batched(voronoi)
        else:
            moved = _relax_sequential(voronoi)

        stats = area_stats(voronoi, iteration + 1)
        history.append(stats)
        logger.info("Relaxation iteration complete",
                    iteration=stats.iteration, moved=moved,
                    mean_area=stats.mean_area, area_variance=stats.area_variance)
    return history


def _relax_sequential(voronoi) -> int:
    points = voronoi.delaunay.points
    moved = 0
    for i in range(len(points)):
        cell = voronoi.clip(i)
        if not cell:
            continue
        points[i] = polygon_centroid(cell)
        voronoi.update()
        moved += 1
    return moved


def _relax_batched(voronoi) -> int:
    points = voronoi.delaunay.points
    centroids = voronoi.cell_centroids()
    keep = np.isnan(centroids).any(axis=1)
    points[~keep] = centroids[~keep]
    voronoi.update()
    return int((~keep).sum())


def area_stats(voronoi, iteration: int = 0) -> RelaxationStats:
    """Mean and variance of the non-empty cell areas."""
    areas = []
    for i in range(len(voronoi)):
        cell = voronoi.clip(i)
        if cell:
            areas.append(polygon_area(cell))

    if not areas:
        return RelaxationStats(iteration, 0.0, 0.0)
    areas = np.array(areas)
    return RelaxationStats(iteration, float(areas.mean()), float(areas.var()))
