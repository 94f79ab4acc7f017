"""
astar.py — A* Search
=====================
Priority f = g + h, where g is the number of steps from the start and h
is the Manhattan distance to the goal.  With unit steps Manhattan is
admissible and consistent, so the first time the goal is popped its
predecessor chain is a shortest path.

Differences from the seen-at-enqueue searches:
  • a cell joins ``closed`` only when it is popped and expanded
  • a cell may be pushed several times; whenever a strictly cheaper g is
    found, ``cost`` and ``came_from`` are overwritten and a fresh entry
    goes on the heap
  • popping a cell that is already closed is a stale entry: the step
    yields a snapshot flagged ``stale`` and expands nothing

``scores()`` is the g / h / f table; the web app sends it with every
/api/state payload of an A* run.
"""

from typing import Dict, Iterator, List, Optional, Set

from grid import Cell, Grid
from algorithms.frontier import PriorityQueue
from algorithms.search import manhattan
from algorithms.step import SearchStatus, Snapshot, build_snapshot


PSEUDOCODE: List[str] = [
    "def AStar(grid, start, goal):",
    "    g[start] ← 0;  open ← [(h(start), start)]",
    "    while open is not empty:",
    "        cell ← open.pop_min()",
    "        if cell in closed: continue      # stale",
    "        closed.add(cell)",
    "        if cell == goal: return path",
    "        for nbr in neighbours(cell):",
    "            tentative ← g[cell] + 1",
    "            if tentative < g[nbr]:",
    "                g[nbr] ← tentative;  parent[nbr] = cell",
    "                open.push((tentative + h(nbr), nbr))",
    "    return NOT FOUND",
]

STEP_COST = 1


class AStarSearch:
    """
    Attributes:
        grid      : The Grid being searched.
        start     : Start cell.
        goal      : Goal cell.
        closed    : Cells expanded so far (the visited set).
        cost      : Best known g per cell; values only ever decrease.
        came_from : Predecessor map; may be overwritten on improvement.
    """

    label = "A*"

    def __init__(self, grid: Grid, start: Cell, goal: Cell):
        self.grid      = grid
        self.start     = start
        self.goal      = goal
        self.closed:    Set[Cell]        = set()
        self.cost:      Dict[Cell, int]  = {start: 0}
        self.came_from: Dict[Cell, Cell] = {}

        self._open    = PriorityQueue()
        self._step_no = 0
        self._last: Optional[Snapshot] = None

        self._open.push(start, self.heuristic(start))

    @property
    def visited(self) -> Set[Cell]:
        return self.closed

    @property
    def done(self) -> bool:
        return self._last is not None and self._last.is_final

    def heuristic(self, cell: Cell) -> int:
        return manhattan(cell, self.goal)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def advance(self) -> Snapshot:
        """Perform one pop.  Once final, keeps returning the last snapshot."""
        if self.done:
            return self._last

        if not self._open:
            return self._emit(
                None, SearchStatus.EXHAUSTED,
                f"A*: open set is empty, goal {self.goal} is not reachable from {self.start}.",
            )

        f, cell = self._open.pop_entry()
        if cell in self.closed:
            return self._emit(
                cell, SearchStatus.RUNNING,
                f"A*: discard stale entry {cell} (f={f}), already expanded.",
                stale=True,
            )

        self.closed.add(cell)
        if cell == self.goal:
            return self._emit(
                cell, SearchStatus.FOUND,
                f"A*: goal {cell} popped with g={self.cost[cell]}.",
            )

        improved = 0
        tentative = self.cost[cell] + STEP_COST
        for nbr in self.grid.neighbours(cell):
            if nbr in self.closed:
                continue
            if nbr not in self.cost or tentative < self.cost[nbr]:
                self.cost[nbr]      = tentative
                self.came_from[nbr] = cell
                self._open.push(nbr, tentative + self.heuristic(nbr))
                improved += 1

        return self._emit(
            cell, SearchStatus.RUNNING,
            f"A*: expand {cell} (g={self.cost[cell]}, f={f}), {improved} neighbour(s) improved.",
        )

    def __iter__(self) -> Iterator[Snapshot]:
        while True:
            snap = self.advance()
            yield snap
            if snap.is_final:
                return

    # ------------------------------------------------------------------
    # Overlay data
    # ------------------------------------------------------------------
    def scores(self) -> List[Dict[str, object]]:
        """g / h / f for every cell that has a cost, sorted by cell."""
        return [
            {"cell": c, "g": g, "h": self.heuristic(c), "f": g + self.heuristic(c)}
            for c, g in sorted(self.cost.items())
        ]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _frontier_cells(self) -> List[Cell]:
        # heap order, minus closed duplicates, each cell once
        seen: Set[Cell] = set()
        out = []
        for c in self._open.cells():
            if c in self.closed or c in seen:
                continue
            seen.add(c)
            out.append(c)
        return out

    def _emit(
        self,
        cell: Optional[Cell],
        status: SearchStatus,
        explanation: str,
        stale: bool = False,
    ) -> Snapshot:
        self._last = build_snapshot(
            step_number=self._step_no,
            current=cell,
            frontier=self._frontier_cells(),
            visited=self.closed,
            came_from=self.came_from,
            status=status,
            stale=stale,
            explanation=explanation,
        )
        self._step_no += 1
        return self._last


def astar(grid: Grid, start: Cell, goal: Cell) -> AStarSearch:
    return AStarSearch(grid, start, goal)
