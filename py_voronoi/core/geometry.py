"""
Geometry primitives shared by the triangulation and Voronoi modules.

Provides the point type, the rectangular bound used for clipping and the
orientation and distance helpers. The helpers work element-wise on numpy
arrays as well as on floats. Coordinates follow screen conventions:
``top`` is the smaller y value and ``bottom`` the larger one.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple, Union


class InvalidBoundError(ValueError):
    """Raised when a bound is NaN or has right < left / bottom < top."""


class Point(NamedTuple):
    """A 2D point."""
    x: float
    y: float


@dataclass(frozen=True)
class Bound:
    """Axis-aligned clipping rectangle.

    The rectangle is validated on creation, an invalid bound never
    reaches the clipping code.
    """
    left: float = 0.0
    top: float = 0.0
    right: float = 960.0
    bottom: float = 500.0

    def __post_init__(self):
        values = (self.left, self.top, self.right, self.bottom)
        if any(math.isnan(v) for v in values):
            raise InvalidBoundError(f"Bound contains NaN: {values}")
        if self.right < self.left or self.bottom < self.top:
            raise InvalidBoundError(
                f"Invalid bound: left={self.left}, top={self.top}, "
                f"right={self.right}, bottom={self.bottom}"
            )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def coerce(cls, bound: Union["Bound", Sequence[float]]) -> "Bound":
        """Build a Bound from a Bound or a (left, top, right, bottom) sequence."""
        if isinstance(bound, Bound):
            return bound
        if len(bound) != 4:
            raise InvalidBoundError(
                f"Bound needs 4 values (left, top, right, bottom), got {len(bound)}"
            )
        left, top, right, bottom = (float(v) for v in bound)
        return cls(left, top, right, bottom)


def squared_distance(x0: float, y0: float, x1: float, y1: float) -> float:
    dx = x0 - x1
    dy = y0 - y1
    return dx * dx + dy * dy


def cross(ax: float, ay: float, bx: float, by: float, cx: float, cy: float) -> float:
    """Orientation of (a, b, c) as used by the triangulation.

    Positive for triangles wound the way the triangulation stores them
    (clockwise with y pointing up).
    """
    return (cx - ax) * (by - ay) - (bx - ax) * (cy - ay)
