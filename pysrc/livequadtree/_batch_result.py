"""BatchResult dataclass for bulk add and relocation calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BatchResult:
    """
    Result from bulk operations (add_range, moved_many, update_all).

    There is no rollback across a batch: a failure on one item does not
    affect the others.

    Attributes:
        succeeded: Items for which the operation returned True, in call order.
        failed: Items for which it returned False, in call order.
    """

    succeeded: list[Any] = field(default_factory=list)
    failed: list[Any] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Return how many items succeeded."""
        return len(self.succeeded)

    @property
    def ok(self) -> bool:
        """True when no item failed."""
        return not self.failed

    def record(self, item: Any, success: bool) -> None:
        (self.succeeded if success else self.failed).append(item)
