# _common.py
"""Common utilities and constants shared across the quadtree modules."""

from __future__ import annotations

import math
from typing import Any, Protocol

# Type aliases
Bounds = tuple[float, float, float, float]
"""Axis-aligned rectangle as (min_x, min_y, max_x, max_y)."""

Point = tuple[float, float]
"""2D point as (x, y)."""

# Defaults
DEFAULT_CAPACITY = 4
"""Max number of items a node holds before it splits."""

DEFAULT_MAX_DEPTH = 32
"""Depth at which nodes stop splitting when max_depth is omitted."""


class Positioned(Protocol):
    """Anything the tree can index: an object exposing numeric x and y."""

    x: float
    y: float


def _is_np_array(x: Any) -> bool:
    """
    Check if x is a NumPy array without importing NumPy.

    This allows array handling without forcing NumPy as a hard dependency.

    Args:
        x: Object to check.

    Returns:
        True if x is a NumPy array.
    """
    mod = getattr(x.__class__, "__module__", "")
    return mod.startswith("numpy") and hasattr(x, "ndim") and hasattr(x, "shape")


def as_point(p: Any) -> Point:
    """Coerce an (x, y) sequence or an object with x/y attributes to a tuple."""
    if hasattr(p, "x") and hasattr(p, "y"):
        return (p.x, p.y)
    x, y = p
    return (x, y)


def validate_bounds(bounds: Any, *, finite: bool = False) -> Bounds:
    """
    Validate and normalize bounds to a tuple.

    Args:
        bounds: Bounds as sequence of 4 numbers.
        finite: Also reject infinite values. NaN is always rejected.

    Returns:
        Validated bounds as tuple.

    Raises:
        ValueError: If bounds are invalid.
    """
    if type(bounds) is not tuple:
        bounds = tuple(bounds)
    if len(bounds) != 4:
        raise ValueError(
            "bounds must be a tuple of four numeric values (x min, y min, x max, y max)"
        )
    min_x, min_y, max_x, max_y = bounds
    if any(math.isnan(v) for v in bounds):
        raise ValueError(f"bounds must not contain NaN, got {bounds!r}")
    if finite and not all(math.isfinite(v) for v in bounds):
        raise ValueError(f"bounds must be finite, got {bounds!r}")
    if min_x > max_x or min_y > max_y:
        raise ValueError(
            f"bounds min corner ({min_x}, {min_y}) exceeds max corner ({max_x}, {max_y})"
        )
    return bounds  # type: ignore[return-value]


def validate_capacity(capacity: int) -> int:
    """Check that capacity is a positive integer."""
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise TypeError(f"capacity must be an int, got {capacity!r}")
    if capacity < 1:
        raise ValueError(f"capacity must be at least 1, got {capacity}")
    return capacity


def validate_max_depth(max_depth: int | None) -> int:
    """Resolve max_depth, substituting DEFAULT_MAX_DEPTH for None."""
    if max_depth is None:
        return DEFAULT_MAX_DEPTH
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    return max_depth
