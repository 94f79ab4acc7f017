"""
reconstruct.py — Path Reconstruction
=====================================
Walk the predecessor map backwards from the goal until a cell with no
entry (the start), then reverse.  Returns None when the walk cannot
connect goal to start: the goal was never reached, the chain ends
somewhere other than start, or it loops.
"""

from typing import List, Mapping, Optional

from grid import Cell


def reconstruct_path(
    came_from: Mapping[Cell, Cell],
    start: Cell,
    goal: Cell,
) -> Optional[List[Cell]]:
    """Ordered start → goal cells (both inclusive), or None."""
    if goal == start:
        return [start]
    if goal not in came_from:
        return None

    path = [goal]
    cur = goal
    # a chain longer than the map has entries must contain a cycle
    for _ in range(len(came_from)):
        cur = came_from[cur]
        path.append(cur)
        if cur == start:
            path.reverse()
            return path
        if cur not in came_from:
            return None
    return None


def path_length(path: Optional[List[Cell]]) -> int:
    """Number of steps (edges) on a path; 0 for a missing or one-cell path."""
    return len(path) - 1 if path and len(path) > 1 else 0
