# _node.py
"""QuadTreeNode - one quadrant of the tree: a boundary, its items, and four optional children."""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from ._boundary import Boundary
from ._common import DEFAULT_CAPACITY, DEFAULT_MAX_DEPTH, Positioned

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Positioned)


class QuadTreeNode(Generic[T]):
    """
    Recursive node holding up to ``capacity`` items directly.

    Once full, the node splits into four equal quadrant children and routes
    later insertions to them in the fixed order NW, NE, SW, SE. Items held
    before the split stay at this level; they are never pushed down.

    A node at ``max_depth``, or whose boundary is too small to halve, never
    splits and keeps accepting items past ``capacity`` instead.

    Items are matched by identity, never by equality. Their positions are
    read from ``item.x`` and ``item.y`` at call time.
    """

    __slots__ = (
        "_items",
        "boundary",
        "capacity",
        "depth",
        "max_depth",
        "northeast",
        "northwest",
        "southeast",
        "southwest",
    )

    def __init__(
        self,
        boundary: Boundary,
        capacity: int = DEFAULT_CAPACITY,
        *,
        depth: int = 0,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.boundary = boundary
        self.capacity = capacity
        self.depth = depth
        self.max_depth = max_depth
        self._items: list[T] = []

        self.northwest: QuadTreeNode[T] | None = None
        self.northeast: QuadTreeNode[T] | None = None
        self.southwest: QuadTreeNode[T] | None = None
        self.southeast: QuadTreeNode[T] | None = None

    # ---- State ----

    @property
    def is_leaf(self) -> bool:
        return self.northwest is None

    @property
    def items(self) -> tuple[T, ...]:
        """Items held at this level, in insertion order."""
        return tuple(self._items)

    def _children(self) -> tuple[QuadTreeNode[T], ...]:
        if self.northwest is None:
            return ()
        return (self.northwest, self.northeast, self.southwest, self.southeast)  # type: ignore[return-value]

    def can_subdivide(self) -> bool:
        """
        Return True if this node may split into four children.

        Splitting stops at max_depth and when the midpoint would coincide
        with an edge, which covers zero-area boundaries and float underflow.
        """
        if self.depth >= self.max_depth:
            return False
        b = self.boundary
        cx, cy = b.center
        return b.min_x < cx < b.max_x and b.min_y < cy < b.max_y

    # ---- Insertion ----

    def add(self, item: T) -> bool:
        """
        Recursively add an item at its current position.

        Args:
            item: Object exposing x and y.

        Returns:
            True if the item was stored in this subtree.
        """
        if not self.boundary.contains(item.x, item.y):
            return False

        if len(self._items) < self.capacity:
            self._items.append(item)
            return True

        if self.northwest is None:
            if not self.can_subdivide():
                if len(self._items) == self.capacity:
                    logger.debug(
                        "Node %s at depth %d cannot split, holding items past capacity %d",
                        self.boundary.as_tuple(),
                        self.depth,
                        self.capacity,
                    )
                self._items.append(item)
                return True
            self.subdivide()

        for child in self._children():
            if child.add(item):
                return True

        # Children tile this boundary, so this is not expected.
        return False

    def subdivide(self) -> None:
        """Create the four quadrant children splitting this boundary at its midpoint."""
        b = self.boundary
        cx, cy = b.center
        depth = self.depth + 1

        def make(min_x: float, min_y: float, max_x: float, max_y: float) -> QuadTreeNode[T]:
            return QuadTreeNode(
                Boundary(min_x, min_y, max_x, max_y),
                self.capacity,
                depth=depth,
                max_depth=self.max_depth,
            )

        self.northwest = make(b.min_x, b.min_y, cx, cy)
        self.northeast = make(cx, b.min_y, b.max_x, cy)
        self.southwest = make(b.min_x, cy, cx, b.max_y)
        self.southeast = make(cx, cy, b.max_x, b.max_y)
        logger.debug("Subdivided node %s at depth %d", b.as_tuple(), self.depth)

    # ---- Removal ----

    def _remove_local(self, item: T) -> bool:
        for i, held in enumerate(self._items):
            if held is item:
                del self._items[i]
                return True
        return False

    def remove(self, item: T) -> bool:
        """
        Recursively remove an item, locating it by its live position.

        Returns:
            True if the item was found and removed.
        """
        return self.remove_at(item, item.x, item.y)

    def remove_at(self, item: T, x: float, y: float) -> bool:
        """
        Recursively remove an item, locating it by the given position.

        Use this when the item moved after it was indexed: pass the position
        it had when it was added, since its live position may now lie under
        a different branch.

        Args:
            item: The item to remove (matched by identity).
            x: X coordinate the item was indexed at.
            y: Y coordinate the item was indexed at.

        Returns:
            True if the item was found and removed.
        """
        if not self.boundary.contains(x, y):
            return False

        if self._remove_local(item):
            return True

        for child in self._children():
            if child.remove_at(item, x, y):
                self._clean()
                return True

        return False

    def _clean(self) -> None:
        """Release the children if every child subtree is empty."""
        if self.northwest is None:
            return
        if all(child.count() == 0 for child in self._children()):
            self.northwest = None
            self.northeast = None
            self.southwest = None
            self.southeast = None
            logger.debug("Merged empty children of node %s", self.boundary.as_tuple())

    def clear(self) -> None:
        """Remove all items and children."""
        self._items.clear()
        self.northwest = None
        self.northeast = None
        self.southwest = None
        self.southeast = None

    # ---- Queries ----

    def query(self, region: Boundary) -> list[T]:
        """
        Return all items in this subtree whose position lies inside region.

        Local items come first in insertion order, followed by the NW, NE,
        SW and SE subtrees.
        """
        if not self.boundary.intersects(region):
            return []

        found = [it for it in self._items if region.contains(it.x, it.y)]

        for child in self._children():
            found.extend(child.query(region))

        return found

    def get_all_bounds(self) -> list[Boundary]:
        """Return this boundary followed by every descendant's, in NW, NE, SW, SE order."""
        bounds = [self.boundary]
        for child in self._children():
            bounds.extend(child.get_all_bounds())
        return bounds

    def count(self) -> int:
        """Return the number of items in this node plus all descendants."""
        return len(self._items) + sum(child.count() for child in self._children())

    def depth_reached(self) -> int:
        """Return the deepest level currently materialized in this subtree."""
        children = self._children()
        if not children:
            return self.depth
        return max(child.depth_reached() for child in children)
