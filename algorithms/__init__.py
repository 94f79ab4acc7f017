"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every search the visualizer knows about.

    from algorithms import AlgorithmKind, REGISTRY, create_search

REGISTRY maps each kind's key to an AlgoInfo card:
    {
        "bfs": AlgoInfo(kind, label, factory, pseudocode, tags, …),
        …
    }

Every factory returns an object with the same contract:
``advance() -> Snapshot``, ``done``, ``visited``, ``came_from``, and
iteration over snapshots.  Adding an algorithm means writing the factory
and adding one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from grid import Cell, Grid
from algorithms.bfs    import bfs    as _bfs,    PSEUDOCODE as _bfs_pc
from algorithms.dfs    import dfs    as _dfs,    PSEUDOCODE as _dfs_pc
from algorithms.greedy import greedy as _greedy, PSEUDOCODE as _greedy_pc
from algorithms.astar  import astar  as _astar,  PSEUDOCODE as _astar_pc, AStarSearch
from algorithms.search import FirstSeenSearch, manhattan
from algorithms.step   import Snapshot, SearchStatus
from algorithms.reconstruct import reconstruct_path, path_length


class AlgorithmKind(Enum):
    BFS    = "bfs"
    DFS    = "dfs"
    GREEDY = "greedy"
    ASTAR  = "astar"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    kind:            AlgorithmKind
    label:           str                    # e.g. "Breadth-First Search"
    factory:         Callable               # (grid, start, goal) -> search
    pseudocode:      List[str]
    tags:            List[str] = field(default_factory=list)
    has_heuristic:   bool      = False
    optimal:         bool      = False      # guarantees a shortest path?
    complexity_time: str       = ""
    description:     str       = ""

    @property
    def key(self) -> str:
        return self.kind.value


REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        kind=AlgorithmKind.BFS, label="Breadth-First Search", factory=_bfs, pseudocode=_bfs_pc,
        tags=["unweighted", "shortest-path"], optimal=True,
        complexity_time="O(V + E)",
        description="Explores ring by ring. Finds a shortest path by step count.",
    ),

    "dfs": AlgoInfo(
        kind=AlgorithmKind.DFS, label="Depth-First Search", factory=_dfs, pseudocode=_dfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)",
        description="Dives deep before backtracking. No shortest-path guarantee.",
    ),

    "greedy": AlgoInfo(
        kind=AlgorithmKind.GREEDY, label="Greedy Best-First", factory=_greedy, pseudocode=_greedy_pc,
        tags=["heuristic", "suboptimal"], has_heuristic=True,
        complexity_time="O(V log V)",
        description="Always heads for the cell closest to the goal. Fast, not optimal.",
    ),

    "astar": AlgoInfo(
        kind=AlgorithmKind.ASTAR, label="A* Search", factory=_astar, pseudocode=_astar_pc,
        tags=["heuristic", "shortest-path"], has_heuristic=True, optimal=True,
        complexity_time="O(V log V)",
        description="Cost so far plus Manhattan estimate. Optimal and usually frugal.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def resolve_kind(kind: Union[AlgorithmKind, str]) -> AlgorithmKind:
    """Accept an AlgorithmKind or its key; raise ValueError otherwise."""
    if isinstance(kind, AlgorithmKind):
        return kind
    try:
        return AlgorithmKind(str(kind).lower())
    except ValueError:
        raise ValueError(f"Unknown algorithm: {kind!r}") from None


def get_algorithm(key: Union[AlgorithmKind, str]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    if isinstance(key, AlgorithmKind):
        key = key.value
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def create_search(kind: Union[AlgorithmKind, str], grid: Grid, start: Cell, goal: Cell):
    """Build a fresh, un-advanced search of the requested kind."""
    return REGISTRY[resolve_kind(kind).value].factory(grid, start, goal)


__all__ = [
    "AlgorithmKind",
    "AlgoInfo",
    "REGISTRY",
    "resolve_kind",
    "get_algorithm",
    "list_algorithms",
    "create_search",
    "FirstSeenSearch",
    "AStarSearch",
    "Snapshot",
    "SearchStatus",
    "manhattan",
    "reconstruct_path",
    "path_length",
]
