"""
bfs.py — Breadth-First Search
==============================
FIFO frontier.  Cells come off the queue in discovery order, so the first
time the goal is popped its predecessor chain is a shortest path by step
count.
"""

from typing import List

from grid import Cell, Grid
from algorithms.frontier import FifoQueue
from algorithms.search import FirstSeenSearch


PSEUDOCODE: List[str] = [
    "def BFS(grid, start, goal):",
    "    queue ← [start];  seen ← {start}",
    "    while queue is not empty:",
    "        cell ← queue.dequeue()",
    "        if cell == goal: return path",
    "        for nbr in neighbours(cell):",
    "            if nbr not in seen:",
    "                seen.add(nbr);  parent[nbr] = cell",
    "                queue.enqueue(nbr)",
    "    return NOT FOUND",
]


def bfs(grid: Grid, start: Cell, goal: Cell) -> FirstSeenSearch:
    return FirstSeenSearch(grid, start, goal, FifoQueue(), label="BFS")
