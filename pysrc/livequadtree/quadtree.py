# quadtree.py
"""QuadTree - point spatial index over objects whose positions change."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, MutableSequence
from typing import Any, Generic, TypeVar

from ._batch_result import BatchResult
from ._boundary import Boundary
from ._common import (
    DEFAULT_CAPACITY,
    Bounds,
    Point,
    Positioned,
    _is_np_array,
    validate_bounds,
    validate_capacity,
    validate_max_depth,
)
from ._node import QuadTreeNode

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Positioned)


class QuadTree(Generic[T]):
    """
    Point quadtree over live Python objects.

    Stores any object exposing ``x`` and ``y`` and answers rectangle queries.
    Items are tracked by identity together with the position they had when
    last indexed. When an item's coordinates change, call ``moved(item)``
    before the next query: the tree removes it at the recorded position and
    re-adds it at the new one.

    Performance characteristics:
        Inserts: average O(log n)
        Rect queries: average O(log n + k) where k is matches returned
        Contains: O(1)
        update_all: O(n), prefer moved()/moved_many()

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        mutate or query the same tree from multiple threads.

    Args:
        bounds: World bounds as a Boundary or (min_x, min_y, max_x, max_y).
        capacity: Max number of items per node before splitting.
        max_depth: Optional max tree depth. If omitted, DEFAULT_MAX_DEPTH is used.

    Raises:
        ValueError: If bounds are malformed or infinite, or capacity or max_depth
            are out of range.
        TypeError: If capacity is not an int.

    Example:
        ```python
        qt = QuadTree((0.0, 0.0, 100.0, 100.0), capacity=4)
        p = PointItem(10.0, 20.0, obj="my data")
        qt.add(p)
        p.move_to(80.0, 80.0)
        qt.moved(p)
        assert qt.query((75.0, 75.0, 85.0, 85.0)) == [p]
        ```
    """

    __slots__ = ("_boundary", "_capacity", "_max_depth", "_root", "_tracked")

    # ---- Initialization ----

    def __init__(
        self,
        bounds: Boundary | Bounds,
        capacity: int = DEFAULT_CAPACITY,
        *,
        max_depth: int | None = None,
    ):
        self._boundary = Boundary.coerce(bounds)
        validate_bounds(self._boundary.as_tuple(), finite=True)
        self._capacity = validate_capacity(capacity)
        self._max_depth = validate_max_depth(max_depth)

        self._root: QuadTreeNode[T] = self._new_root()
        # id(item) -> (item, position recorded at last add/moved)
        self._tracked: dict[int, tuple[T, Point]] = {}

    @classmethod
    def from_rect(
        cls,
        x: float,
        y: float,
        width: float,
        height: float,
        capacity: int = DEFAULT_CAPACITY,
        *,
        max_depth: int | None = None,
    ) -> QuadTree[T]:
        """Create a tree covering the rectangle at (x, y) with the given size."""
        return cls(Boundary.from_rect(x, y, width, height), capacity, max_depth=max_depth)

    @classmethod
    def from_corners(
        cls,
        min_point: Any,
        max_point: Any,
        capacity: int = DEFAULT_CAPACITY,
        *,
        max_depth: int | None = None,
    ) -> QuadTree[T]:
        """Create a tree spanning the top-left and bottom-right corner points."""
        return cls(Boundary.from_corners(min_point, max_point), capacity, max_depth=max_depth)

    def _new_root(self) -> QuadTreeNode[T]:
        return QuadTreeNode(self._boundary, self._capacity, max_depth=self._max_depth)

    # ---- Insertion ----

    def add(self, item: T) -> bool:
        """
        Add an item at its current position. No duplicates.

        Points outside the tree bounds are not indexed and not tracked.

        Args:
            item: Object exposing x and y.

        Returns:
            True if the item is now indexed, False if it was already tracked
            or lies outside the bounds.
        """
        key = id(item)
        if key in self._tracked:
            return False

        if not self._root.add(item):
            logger.debug(
                "Rejected %r at (%s, %s): outside bounds %s",
                item,
                item.x,
                item.y,
                self._boundary.as_tuple(),
            )
            return False

        self._tracked[key] = (item, (item.x, item.y))
        return True

    def add_range(self, items: Iterable[T]) -> BatchResult:
        """
        Add multiple items at once. No duplicates.

        Args:
            items: Iterable of objects exposing x and y.

        Returns:
            BatchResult listing indexed and skipped items.
        """
        result = BatchResult()
        for item in items:
            result.record(item, self.add(item))
        return result

    # ---- Deletion ----

    def remove(self, item: T) -> bool:
        """
        Remove an item, locating it by its current position.

        If the item moved since it was indexed and moved() was not called,
        this can miss it; call moved() first or use discard().

        Returns:
            True if the item was found and removed.
        """
        key = id(item)
        if key not in self._tracked:
            return False

        if self._root.remove(item):
            del self._tracked[key]
            return True
        return False

    def discard(self, item: T) -> bool:
        """
        Remove an item, locating it by the position recorded when it was indexed.

        Works whether or not the item moved since its last add/moved call.

        Returns:
            True if the item was found and removed.
        """
        entry = self._tracked.get(id(item))
        if entry is None:
            return False
        return self._remove_at(item, *entry[1])

    def clear(self) -> None:
        """Empty the tree in place, preserving bounds, capacity, and max_depth."""
        self._root.clear()
        self._tracked.clear()

    # ---- Queries ----

    def query(self, region: Boundary | Bounds) -> list[T]:
        """
        Return all items whose position lies inside the query rectangle.

        Does not consult the tracking table: an item that moved without a
        moved() call is found only where the tree still holds it.

        Args:
            region: Boundary or (min_x, min_y, max_x, max_y). Edges are inclusive.

        Returns:
            List of items. Order is deterministic for a given tree state but
            carries no meaning.
        """
        return self._root.query(Boundary.coerce(region))

    def query_corners(self, min_point: Any, max_point: Any) -> list[T]:
        """Return all items between the top-left and bottom-right corner points."""
        return self._root.query(Boundary.from_corners(min_point, max_point))

    def query_rect(self, x: float, y: float, width: float, height: float) -> list[T]:
        """Return all items in the rectangle at (x, y) with the given size."""
        return self._root.query(Boundary.from_rect(x, y, width, height))

    # ---- Relocation ----

    def _remove_at(self, item: T, x: float, y: float) -> bool:
        if self._root.remove_at(item, x, y):
            del self._tracked[id(item)]
            return True
        return False

    def moved(self, item: T) -> bool:
        """
        Update the position of an item after it has been moved.

        Call this for every moving item before calling query(). The item is
        removed at the position recorded when it was last indexed and
        re-added at its current position.

        If the item moved outside the tree bounds it is removed and no
        longer tracked; the call still returns True.

        Args:
            item: Item that has moved.

        Returns:
            True if the item was relocated, False if it is not tracked or
            could not be found at its recorded position.
        """
        entry = self._tracked.get(id(item))
        if entry is None:
            return False

        old_x, old_y = entry[1]
        if not self._remove_at(item, old_x, old_y):
            logger.warning(
                "Item %r not found at its recorded position (%s, %s)", item, old_x, old_y
            )
            return False

        if not self.add(item):
            logger.warning(
                "Item %r moved outside bounds %s and is no longer tracked",
                item,
                self._boundary.as_tuple(),
            )
        return True

    def moved_many(self, items: Iterable[T]) -> BatchResult:
        """
        Update the positions of multiple items after they have been moved.

        Each item is handled independently; there is no rollback.

        Returns:
            BatchResult listing relocated items and failures.
        """
        result = BatchResult()
        for item in items:
            result.record(item, self.moved(item))
        return result

    def update_all(self) -> BatchResult:
        """
        Relocate every tracked item whose position differs from the recorded one.

        This scans every item and is O(n). Calling moved() or moved_many()
        for the items that actually moved is strongly preferred.

        Returns:
            BatchResult for the items that needed relocation.
        """
        stale = [
            item
            for item, (x, y) in list(self._tracked.values())
            if item.x != x or item.y != y
        ]
        return self.moved_many(stale)

    # ---- Enumeration ----

    def __len__(self) -> int:
        """Return the number of tracked items."""
        return len(self._tracked)

    @property
    def count(self) -> int:
        return len(self._tracked)

    def __contains__(self, item: object) -> bool:
        return id(item) in self._tracked

    def contains(self, item: T) -> bool:
        """Check if the item (by identity) is indexed. O(1)."""
        return id(item) in self._tracked

    def __iter__(self) -> Iterator[T]:
        """Iterate over all tracked items, in the order they were indexed."""
        return (item for item, _ in list(self._tracked.values()))

    def to_list(self) -> list[T]:
        """Return all tracked items."""
        return [item for item, _ in self._tracked.values()]

    def copy_to(self, buffer: MutableSequence[Any], index: int = 0) -> None:
        """
        Copy all tracked items into buffer, starting at index.

        Args:
            buffer: Preallocated list or NumPy object array.
            index: Position in buffer at which copying begins.

        Raises:
            ValueError: If index is negative, buffer has too little room, or
                a NumPy buffer is not a 1-D object array.
        """
        if _is_np_array(buffer) and (buffer.ndim != 1 or buffer.dtype != object):
            raise ValueError("NumPy buffers must be one-dimensional with dtype=object")

        n = len(self._tracked)
        if index < 0:
            raise ValueError(f"index must be non-negative, got {index}")
        if len(buffer) - index < n:
            raise ValueError(
                f"buffer of length {len(buffer)} cannot hold {n} items from index {index}"
            )
        for off, (item, _) in enumerate(self._tracked.values()):
            buffer[index + off] = item

    def positions_np(self) -> Any:
        """
        Return the recorded positions as a NumPy array.

        Rows align with to_list().

        Returns:
            NDArray[np.float64] with shape (N, 2).

        Raises:
            ImportError: If NumPy is not installed.
        """
        import numpy as np

        out = np.empty((len(self._tracked), 2), dtype=np.float64)
        for row, (_, pos) in enumerate(self._tracked.values()):
            out[row] = pos
        return out

    def recorded_position(self, item: T) -> Point | None:
        """Return where the tree believes the item is, or None if it is not tracked."""
        entry = self._tracked.get(id(item))
        return None if entry is None else entry[1]

    # ---- Introspection ----

    @property
    def boundary(self) -> Boundary:
        return self._boundary

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def get_all_bounds(self) -> list[Boundary]:
        """Return the boundary of every node, root first. Useful for visualization."""
        return self._root.get_all_bounds()

    def get_all_node_boundaries(self) -> list[Bounds]:
        """Return every node boundary as (min_x, min_y, max_x, max_y) tuples."""
        return [b.as_tuple() for b in self._root.get_all_bounds()]

    def get_inner_max_depth(self) -> int:
        """Return the deepest node level currently in the tree (root is 0)."""
        return self._root.depth_reached()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bounds={self._boundary.as_tuple()!r}, "
            f"capacity={self._capacity}, max_depth={self._max_depth}, count={len(self)})"
        )
