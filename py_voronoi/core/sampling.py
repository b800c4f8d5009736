"""
Reproducible point sets inside a bound.

Used to seed diagrams for relaxation and for tests.
"""

import math
from typing import Optional, Sequence, Union

import numpy as np

from .geometry import Bound


def random_points(n: int, bound: Union[Bound, Sequence[float]], seed: Optional[int] = None) -> np.ndarray:
    """
    Generate uniformly distributed points.

    Args:
        n: Number of points
        bound: Area to fill
        seed: Random seed for reproducibility

    Returns:
        (n, 2) array of [x, y] point coordinates
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    bound = Bound.coerce(bound)
    rng = np.random.default_rng(seed)
    x = rng.uniform(bound.left, bound.right, n)
    y = rng.uniform(bound.top, bound.bottom, n)
    return np.column_stack([x, y])


def jittered_grid(bound: Union[Bound, Sequence[float]], spacing: float, seed: Optional[int] = None) -> np.ndarray:
    """
    Generate jittered square grid points.

    Creates a regular grid with randomized positions to prevent artificial
    patterns. Every point moves at most 0.45 * spacing from its grid node
    and stays inside the bound.

    Args:
        bound: Area to fill
        spacing: Distance between grid points
        seed: Random seed for reproducibility

    Returns:
        Array of [x, y] point coordinates
    """
    if spacing <= 0:
        raise ValueError(f"spacing must be positive, got {spacing}")
    bound = Bound.coerce(bound)
    rng = np.random.default_rng(seed)

    radius = spacing / 2  # square radius
    jittering = radius * 0.9  # max deviation

    xs = np.arange(bound.left + radius, bound.right, spacing)
    ys = np.arange(bound.top + radius, bound.bottom, spacing)
    gx, gy = np.meshgrid(xs, ys)
    grid = np.column_stack([gx.ravel(), gy.ravel()])

    grid += rng.uniform(-jittering, jittering, grid.shape)
    grid[:, 0] = np.clip(grid[:, 0], bound.left, bound.right)
    grid[:, 1] = np.clip(grid[:, 1], bound.top, bound.bottom)
    return grid


def spacing_for(bound: Union[Bound, Sequence[float]], cells_desired: int) -> float:
    """Grid spacing giving roughly ``cells_desired`` points in the bound."""
    if cells_desired <= 0:
        raise ValueError(f"cells_desired must be positive, got {cells_desired}")
    bound = Bound.coerce(bound)
    return round(math.sqrt(bound.area / cells_desired), 2)
