"""
step.py — Search Progress Snapshot
===================================
Every search advances one expansion at a time and hands back a Snapshot:
a frozen picture of everything the renderer needs for one frame.

    • the cell that was just popped (``current``)
    • the frontier contents, in container order
    • the visited set
    • the predecessor map built so far
    • whether the search is still going, found the goal, or ran dry

Design decisions:
  - Snapshot is a frozen dataclass.  The search is the only writer; the
    runner and renderer only read.  Collections are copied at build time
    (tuple / frozenset / read-only mapping), so later expansions never
    leak into a snapshot that was already handed out.
  - ``status`` is the tag on the result of ``advance()``:
    RUNNING → keep stepping, FOUND → goal popped, EXHAUSTED → no path.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from grid import Cell


class SearchStatus(Enum):
    RUNNING   = "running"
    FOUND     = "found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        step_number : 0-based count of advance() calls that produced this.
        current     : Cell popped on this step (None before the first pop).
        frontier    : Cells waiting in the frontier, container order.
        visited     : Cells that will not be enqueued again (BFS / DFS /
                      greedy) or that are finally expanded (A*).
        came_from   : Read-only predecessor map, cell → the cell it was
                      reached from.  The start cell has no entry.
        status      : RUNNING, FOUND or EXHAUSTED.
        stale       : True when A* popped an already-expanded duplicate.
        explanation : One-line, human-readable account of the step.
    """

    step_number: int                  = 0
    current:     Optional[Cell]       = None
    frontier:    Tuple[Cell, ...]     = ()
    visited:     FrozenSet[Cell]      = frozenset()
    came_from:   Mapping[Cell, Cell]  = field(default_factory=lambda: MappingProxyType({}))
    status:      SearchStatus         = SearchStatus.RUNNING
    stale:       bool                 = False
    explanation: str                  = ""

    @property
    def is_final(self) -> bool:
        return self.status is not SearchStatus.RUNNING


def build_snapshot(
    step_number: int,
    current: Optional[Cell],
    frontier: Iterable[Cell],
    visited: Iterable[Cell],
    came_from: Dict[Cell, Cell],
    status: SearchStatus = SearchStatus.RUNNING,
    stale: bool = False,
    explanation: str = "",
) -> Snapshot:
    """Copy the live search structures into a frozen Snapshot."""
    return Snapshot(
        step_number=step_number,
        current=current,
        frontier=tuple(frontier),
        visited=frozenset(visited),
        came_from=MappingProxyType(dict(came_from)),
        status=status,
        stale=stale,
        explanation=explanation,
    )
