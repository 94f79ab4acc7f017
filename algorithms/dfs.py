"""
dfs.py — Depth-First Search
============================
LIFO frontier: the most recently discovered cell is expanded next.
Neighbours are marked seen when pushed, so this is the "seen at push"
flavour of DFS.  It always finds a path if one exists; it is rarely the
shortest.
"""

from typing import List

from grid import Cell, Grid
from algorithms.frontier import LifoStack
from algorithms.search import FirstSeenSearch


PSEUDOCODE: List[str] = [
    "def DFS(grid, start, goal):",
    "    stack ← [start];  seen ← {start}",
    "    while stack is not empty:",
    "        cell ← stack.pop()",
    "        if cell == goal: return path",
    "        for nbr in neighbours(cell):",
    "            if nbr not in seen:",
    "                seen.add(nbr);  parent[nbr] = cell",
    "                stack.push(nbr)",
    "    return NOT FOUND",
]


def dfs(grid: Grid, start: Cell, goal: Cell) -> FirstSeenSearch:
    return FirstSeenSearch(grid, start, goal, LifoStack(), label="DFS")
