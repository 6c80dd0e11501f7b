"""
Undo/redo history for the assignment ledger.

A snapshot holds the committed assignment map and a structural copy of the
dormitory tree. Undo keeps at most ``maxlen`` snapshots and evicts the oldest
when full; the redo stack is dropped whenever a new mutation happens.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from lodging.models import HISTORY_SIZE, Dormitory, clone_dormitories


@dataclass(frozen=True)
class HistoryState:
    """Immutable snapshot of the ledger taken before a mutation."""

    assignments: tuple[tuple[str, str], ...]
    dormitories: tuple[Dormitory, ...]

    @classmethod
    def capture(cls, assignments: dict[str, str], dormitories: list[Dormitory]) -> HistoryState:
        return cls(
            assignments=tuple(assignments.items()),
            dormitories=tuple(clone_dormitories(dormitories)),
        )

    def assignment_map(self) -> dict[str, str]:
        return dict(self.assignments)

    def restore_dormitories(self) -> list[Dormitory]:
        """Fresh copy of the stored tree, so the snapshot stays untouched."""
        return clone_dormitories(list(self.dormitories))


class HistoryStack:
    """LIFO stack with a size cap; pushing past the cap drops the oldest."""

    def __init__(self, maxlen: int | None = HISTORY_SIZE) -> None:
        self._items: deque[HistoryState] = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int | None:
        return self._items.maxlen

    def push(self, state: HistoryState) -> None:
        self._items.append(state)

    def pop(self) -> HistoryState | None:
        if not self._items:
            return None
        return self._items.pop()

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> list[HistoryState]:
        """Oldest first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
