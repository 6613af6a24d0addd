# pathfinding/priority_queue.py
from __future__ import annotations

from heapq import heappush, heappop
from itertools import count
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """
    Min-priority queue of (element, priority) pairs.

    Equal priorities come out in insertion order. There is no decrease-key:
    callers push an element again with its better priority and skip the
    stale copies when they surface.
    """

    def __init__(self) -> None:
        # (priority, insertion seq, element)
        self._heap: List[Tuple[float, int, T]] = []
        self._seq = count()

    def enqueue(self, element: T, priority: float) -> None:
        heappush(self._heap, (priority, next(self._seq), element))

    def dequeue(self) -> Optional[T]:
        """Lowest-priority element, or None when the queue is empty."""
        if not self._heap:
            return None
        _, _, element = heappop(self._heap)
        return element

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)
