"""A bounded queue that keeps the items with the lowest priorities."""

from __future__ import annotations

import functools
import heapq
import itertools
import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@functools.total_ordering
@dataclass(eq=False)
class Item(Generic[T]):
    """An item with its line number; items compare by priority."""

    line_n: int
    priority: float
    item: T

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.priority == other.priority

    def __lt__(self, other: Item) -> bool:
        return self.priority < other.priority


class PriorityQueue(Generic[T]):
    """Keeps at most ``capacity`` items, dropping the highest priority on overflow."""

    def __init__(self, capacity: int) -> None:
        self.max_priority = 0.0
        self.capacity = capacity
        self.count = 0
        self._heap: list[tuple[float, int, Item[T]]] = []
        self._seq = itertools.count()

    def can_insert(self, priority: float) -> bool:
        """Tell whether an item of this priority would be worth pushing."""
        return priority <= self.max_priority or self.count < self.capacity

    def push(self, line_n: int, priority: float, item: T) -> None:
        """Add an item, evicting the highest priority one once full."""
        if math.isnan(priority):
            raise ValueError("priority must not be NaN")
        heapq.heappush(
            self._heap, (-priority, next(self._seq), Item(line_n, priority, item))
        )
        if self.max_priority < priority:
            self.max_priority = priority
        if self.count >= self.capacity:
            heapq.heappop(self._heap)
        else:
            self.count += 1

    def into_sorted_items(self) -> list[Item[T]]:
        """The kept items ordered by line number."""
        return sorted((entry[2] for entry in self._heap), key=lambda i: i.line_n)