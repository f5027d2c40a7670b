# _item.py
from __future__ import annotations

from typing import Any


class PointItem:
    """
    Lightweight mutable point that can be stored in a QuadTree.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        obj: The attached Python object if available, else None.

    Notes:
        - Holds a strong reference to the object when provided.
        - Compares by identity. Two items at the same position are distinct entries.
        - After changing x or y of an indexed item, call QuadTree.moved(item).
    """

    __slots__ = ("x", "y", "obj")

    def __init__(self, x: float, y: float, obj: Any | None = None):
        self.x = x
        self.y = y
        self.obj = obj

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"PointItem(x={self.x!r}, y={self.y!r}, obj={self.obj!r})"
