"""
frontier.py — Frontier Containers
==================================
The three orderings the searches need, behind one tiny interface:

    push(cell, priority=0)   pop() -> cell   len()   cells()

  • FifoQueue      – BFS, pop from the front
  • LifoStack      – DFS, pop from the back
  • PriorityQueue  – greedy / A*, binary heap, smallest priority first

PriorityQueue has no decrease-key.  A* pushes a cell again when it finds
a cheaper route and skips the stale copy when it surfaces.  Equal
priorities pop in insertion order (a running sequence number is the
secondary heap key), so heap-based runs are reproducible.
"""

import heapq
import itertools
from collections import deque
from typing import Deque, List, Optional, Tuple

from grid import Cell


class FifoQueue:
    def __init__(self):
        self._items: Deque[Cell] = deque()

    def push(self, cell: Cell, priority: float = 0) -> None:
        self._items.append(cell)

    def pop(self) -> Cell:
        return self._items.popleft()

    def cells(self) -> List[Cell]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class LifoStack:
    def __init__(self):
        self._items: List[Cell] = []

    def push(self, cell: Cell, priority: float = 0) -> None:
        self._items.append(cell)

    def pop(self) -> Cell:
        return self._items.pop()

    def cells(self) -> List[Cell]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class PriorityQueue:
    """
    Min-heap of ``(priority, seq, cell)`` entries.

    ``cells()`` returns the heap array order, not sorted order; that is
    what the renderer paints and it costs nothing to produce.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, Cell]] = []
        self._seq = itertools.count()

    def push(self, cell: Cell, priority: float = 0) -> None:
        heapq.heappush(self._heap, (priority, next(self._seq), cell))

    def pop(self) -> Cell:
        return heapq.heappop(self._heap)[2]

    def pop_entry(self) -> Tuple[float, Cell]:
        priority, _, cell = heapq.heappop(self._heap)
        return priority, cell

    def peek_priority(self) -> Optional[float]:
        return self._heap[0][0] if self._heap else None

    def cells(self) -> List[Cell]:
        return [cell for _, _, cell in self._heap]

    def entries(self) -> List[Tuple[float, Cell]]:
        return [(p, cell) for p, _, cell in self._heap]

    def __len__(self) -> int:
        return len(self._heap)
