"""
board.py — Editable Board
==========================
The mutable surface the UI edits with pointer tools: walls, start, goal.
A search never sees the Board directly; it receives ``board.snapshot()``,
so edits made while a run is animating cannot corrupt it.

Factory helpers mirror the front-end buttons:
    Board.default(30)   – empty square board, default start / goal
    board.clear()       – wipe all walls
    board.randomize(p)  – random maze, start & goal kept open
"""

import random
from enum import Enum
from typing import Dict, Optional, Set

from grid.grid import Cell, Grid


class Tool(Enum):
    WALL  = "wall"
    ERASE = "erase"
    START = "start"
    GOAL  = "goal"


DEFAULT_SIZE = 30


def default_endpoints(rows: int, cols: int):
    """Start a quarter of the way across the middle row, goal three quarters."""
    return (rows // 2, cols // 4), (rows // 2, cols * 3 // 4)


class Board:
    """
    Attributes:
        rows, cols : Board dimensions.
        walls      : Set of blocked cells.
        start      : Start cell.
        goal       : Goal cell.
    """

    def __init__(self, rows: int = DEFAULT_SIZE, cols: int = DEFAULT_SIZE):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self.rows:  int       = rows
        self.cols:  int       = cols
        self.walls: Set[Cell] = set()
        self.start, self.goal = default_endpoints(rows, cols)

    @classmethod
    def default(cls, size: int = DEFAULT_SIZE) -> "Board":
        return cls(size, size)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def resize(self, size: int) -> None:
        """Throw away everything and start over on a size x size board."""
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}")
        self.rows = self.cols = size
        self.walls = set()
        self.start, self.goal = default_endpoints(size, size)

    def clear(self) -> None:
        self.walls.clear()

    def randomize(self, wall_prob: float = 0.3, seed: Optional[int] = None) -> None:
        if not 0.0 <= wall_prob <= 1.0:
            raise ValueError(f"wall_prob must be within [0, 1], got {wall_prob}")
        rng = random.Random(seed)
        self.walls = {
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if rng.random() < wall_prob
        }
        self.walls.discard(self.start)
        self.walls.discard(self.goal)

    def set_wall(self, cell: Cell, blocked: bool = True) -> None:
        self._check(cell)
        if blocked:
            self.walls.add(cell)
        else:
            self.walls.discard(cell)

    def move_start(self, cell: Cell) -> None:
        self._check(cell)
        self.start = cell

    def move_goal(self, cell: Cell) -> None:
        self._check(cell)
        self.goal = cell

    def apply(self, tool, cell: Cell) -> None:
        """Apply a pointer tool (Tool or its string value) at `cell`."""
        tool = Tool(tool)
        if tool is Tool.WALL:
            self.set_wall(cell, True)
        elif tool is Tool.ERASE:
            self.set_wall(cell, False)
        elif tool is Tool.START:
            self.move_start(cell)
        else:
            self.move_goal(cell)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def snapshot(self) -> Grid:
        return Grid(self.rows, self.cols, self.walls)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "walls": sorted([r, c] for r, c in self.walls),
            "start": list(self.start),
            "goal":  list(self.goal),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Board":
        board = cls(data["rows"], data["cols"])
        board.walls = {tuple(w) for w in data.get("walls", [])}
        if "start" in data:
            board.move_start(tuple(data["start"]))
        if "goal" in data:
            board.move_goal(tuple(data["goal"]))
        return board

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check(self, cell: Cell) -> None:
        r, c = cell
        if not (0 <= r < self.rows and 0 <= c < self.cols):
            raise ValueError(f"Cell {cell} is outside the {self.rows}x{self.cols} board")

    def __repr__(self) -> str:
        return (
            f"Board({self.rows}x{self.cols}, walls={len(self.walls)}, "
            f"start={self.start}, goal={self.goal})"
        )
