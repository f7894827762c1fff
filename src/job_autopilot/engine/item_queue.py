"""FIFO backlog of discovered items."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from job_autopilot.models import Item


class ItemQueue:
    """Ordered backlog. Duplicate URLs are kept as separate entries."""

    def __init__(self) -> None:
        self._items: deque[Item] = deque()

    def enqueue_all(self, items: Iterable[Item]) -> int:
        self._items.extend(items)
        return len(self._items)

    def dequeue_front(self) -> Item | None:
        if not self._items:
            return None
        return self._items.popleft()

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
