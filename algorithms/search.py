"""
search.py — Seen-at-Enqueue Search
===================================
BFS, DFS and greedy best-first are the same loop with a different
frontier container:

    frontier ← [start];  seen ← {start};  came_from ← {}
    while frontier:
        cell ← frontier.pop()
        if cell == goal: FOUND
        for nbr in neighbours(cell):
            if nbr not in seen:
                seen.add(nbr); came_from[nbr] = cell; frontier.push(nbr)
    EXHAUSTED

A cell is marked seen the moment it is enqueued, so it is never queued
twice.  ``advance()`` runs exactly one trip around the loop and returns
a Snapshot; all state survives between calls.
"""

from typing import Callable, Dict, Iterator, Optional, Set

from grid import Cell, Grid
from algorithms.step import SearchStatus, Snapshot, build_snapshot


def manhattan(a: Cell, b: Cell) -> int:
    """|Δrow| + |Δcol| — admissible and consistent on a 4-connected grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class FirstSeenSearch:
    """
    Attributes:
        grid      : The Grid being searched (never mutated).
        start     : Start cell.
        goal      : Goal cell.
        visited   : Cells already enqueued (start included).
        came_from : Predecessor map; start has no entry.
    """

    def __init__(
        self,
        grid: Grid,
        start: Cell,
        goal: Cell,
        frontier,
        priority: Optional[Callable[[Cell], float]] = None,
        label: str = "search",
    ):
        self.grid      = grid
        self.start     = start
        self.goal      = goal
        self.label     = label
        self.visited:   Set[Cell]       = {start}
        self.came_from: Dict[Cell, Cell] = {}

        self._frontier = frontier
        self._priority = priority or (lambda cell: 0)
        self._step_no  = 0
        self._last: Optional[Snapshot] = None

        self._frontier.push(start, self._priority(start))

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    @property
    def done(self) -> bool:
        return self._last is not None and self._last.is_final

    def advance(self) -> Snapshot:
        """Perform one expansion.  Once final, keeps returning the last snapshot."""
        if self.done:
            return self._last

        if not self._frontier:
            return self._emit(
                None, SearchStatus.EXHAUSTED,
                f"{self.label}: frontier is empty, goal {self.goal} is not reachable from {self.start}.",
            )

        cell = self._frontier.pop()
        if cell == self.goal:
            return self._emit(cell, SearchStatus.FOUND, f"{self.label}: goal {cell} popped.")

        added = 0
        for nbr in self.grid.neighbours(cell):
            if nbr in self.visited:
                continue
            self.visited.add(nbr)
            self.came_from[nbr] = cell
            self._frontier.push(nbr, self._priority(nbr))
            added += 1

        return self._emit(
            cell, SearchStatus.RUNNING,
            f"{self.label}: expand {cell}, {added} new neighbour(s) queued.",
        )

    def __iter__(self) -> Iterator[Snapshot]:
        while True:
            snap = self.advance()
            yield snap
            if snap.is_final:
                return

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _emit(self, cell: Optional[Cell], status: SearchStatus, explanation: str) -> Snapshot:
        self._last = build_snapshot(
            step_number=self._step_no,
            current=cell,
            frontier=self._frontier.cells(),
            visited=self.visited,
            came_from=self.came_from,
            status=status,
            explanation=explanation,
        )
        self._step_no += 1
        return self._last
