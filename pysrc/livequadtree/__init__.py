"""livequadtree - Point quadtree that keeps up with moving Python objects."""

from ._batch_result import BatchResult
from ._boundary import Boundary
from ._common import DEFAULT_CAPACITY, DEFAULT_MAX_DEPTH, Positioned
from ._item import PointItem
from ._node import QuadTreeNode
from .quadtree import QuadTree

__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_MAX_DEPTH",
    "BatchResult",
    "Boundary",
    "PointItem",
    "Positioned",
    "QuadTree",
    "QuadTreeNode",
]
