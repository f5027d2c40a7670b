"""Boundary - immutable axis-aligned rectangle used for nodes and queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._common import Bounds, Point, as_point, validate_bounds


@dataclass(frozen=True)
class Boundary:
    """
    Axis-aligned rectangle defined by its min (top-left) and max (bottom-right) corners.

    Containment and intersection are inclusive on every edge, so a point
    lying on an edge is inside and two boxes that merely touch intersect.

    Infinite edges are allowed, so a query region can be unbounded. A tree's
    own bounds must be finite; QuadTree checks that separately.

    Attributes:
        min_x: Left edge.
        min_y: Top edge.
        max_x: Right edge.
        max_y: Bottom edge.

    Raises:
        ValueError: If the min corner exceeds the max corner or a value is NaN.

    Example:
        ```python
        b = Boundary.from_rect(0, 0, 20, 20)
        assert b.contains_point((20, 20))
        assert b.center == (10.0, 10.0)
        ```
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        validate_bounds((self.min_x, self.min_y, self.max_x, self.max_y))

    # ---- Alternate constructors ----

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> Boundary:
        """Build a boundary from its top-left corner and its size."""
        return cls(x, y, x + width, y + height)

    @classmethod
    def from_corners(cls, min_point: Any, max_point: Any) -> Boundary:
        """
        Build a boundary from two corner points.

        Args:
            min_point: Top-left corner as (x, y) or an object with x/y.
            max_point: Bottom-right corner as (x, y) or an object with x/y.
        """
        min_x, min_y = as_point(min_point)
        max_x, max_y = as_point(max_point)
        return cls(min_x, min_y, max_x, max_y)

    @classmethod
    def coerce(cls, value: Any) -> Boundary:
        """Return value unchanged if it is a Boundary, else build one from a 4-sequence."""
        if isinstance(value, cls):
            return value
        return cls(*validate_bounds(value))

    # ---- Derived geometry ----

    @property
    def min(self) -> Point:
        return (self.min_x, self.min_y)

    @property
    def max(self) -> Point:
        return (self.max_x, self.max_y)

    @property
    def center(self) -> Point:
        return ((self.max_x + self.min_x) / 2, (self.max_y + self.min_y) / 2)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def as_tuple(self) -> Bounds:
        """Return the boundary as (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    # ---- Tests ----

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def contains_point(self, point: Any) -> bool:
        """
        Check if a point is within the boundary.

        Args:
            point: (x, y) tuple or an object with x/y attributes.

        Returns:
            True if the point lies inside or on an edge.
        """
        x, y = as_point(point)
        return self.contains(x, y)

    def intersects(self, other: Boundary) -> bool:
        """Check if another boundary overlaps or touches this one."""
        if other.max_x < self.min_x:
            return False
        if other.min_x > self.max_x:
            return False
        if other.max_y < self.min_y:
            return False
        if other.min_y > self.max_y:
            return False
        return True
