"""
greedy.py — Greedy Best-First Search
=====================================
Priority = Manhattan distance to the goal, nothing else.  Fast on open
boards, happily walks into dead ends, and gives no optimality guarantee.
Compare with A* to see what the accumulated-cost term buys.
"""

from typing import List

from grid import Cell, Grid
from algorithms.frontier import PriorityQueue
from algorithms.search import FirstSeenSearch, manhattan


PSEUDOCODE: List[str] = [
    "def Greedy(grid, start, goal):",
    "    pq ← [(h(start), start)];  seen ← {start}",
    "    while pq is not empty:",
    "        cell ← pq.pop_min()",
    "        if cell == goal: return path",
    "        for nbr in neighbours(cell):",
    "            if nbr not in seen:",
    "                seen.add(nbr);  parent[nbr] = cell",
    "                pq.push((h(nbr), nbr))",
    "    return NOT FOUND",
]


def greedy(grid: Grid, start: Cell, goal: Cell) -> FirstSeenSearch:
    return FirstSeenSearch(
        grid, start, goal, PriorityQueue(),
        priority=lambda cell: manhattan(cell, goal),
        label="Greedy",
    )
