"""
Frontier Module - Stable min-priority queue for the informed searches.
"""

import heapq
from typing import List, Tuple


class PriorityFrontier:
    """
    Min-heap of cell indices keyed by priority.

    Entries with equal priority come out in insertion order, so
    tie-breaking follows the neighbor order (up, down, left, right).
    The same index may be pushed several times; callers skip stale pops.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, int]] = []
        self._counter = 0  # tie-breaker for stability

    def push(self, index: int, priority: float) -> None:
        heapq.heappush(self._heap, (priority, self._counter, index))
        self._counter += 1

    def pop(self) -> int:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
