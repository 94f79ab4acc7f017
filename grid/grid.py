"""
grid.py — Immutable Passability Grid
=====================================
The snapshot every search runs against.  A Grid knows its dimensions and
which cells are blocked; nothing else.  It is never mutated: editing
happens on a Board, which hands out a fresh Grid per run.

Cells are plain ``(row, col)`` tuples, so they double as dictionary keys
for visited sets and predecessor maps.

Neighbour order is fixed (down, up, right, left).  It decides tie-breaks
in the FIFO / LIFO frontiers, so changing it changes path shapes.
"""

from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

Cell = Tuple[int, int]

# (d_row, d_col) — down, up, right, left
DIRECTIONS: Tuple[Cell, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

WALL_CHARS = "#X"


class Grid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        blocked    : frozenset of blocked cells.
    """

    __slots__ = ("rows", "cols", "blocked")

    def __init__(self, rows: int, cols: int, blocked: Iterable[Cell] = ()):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows: int = rows
        self.cols: int = cols
        self.blocked: FrozenSet[Cell] = frozenset(
            (r, c) for r, c in blocked if 0 <= r < rows and 0 <= c < cols
        )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def open(cls, rows: int, cols: int) -> "Grid":
        return cls(rows, cols)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[object]]) -> "Grid":
        """Truthy entries are walls.  Rows must all be the same length."""
        if not matrix or not matrix[0]:
            raise ValueError("Grid matrix must have at least one row and column")
        cols = len(matrix[0])
        blocked = []
        for r, row in enumerate(matrix):
            if len(row) != cols:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {cols}")
            blocked.extend((r, c) for c, v in enumerate(row) if v)
        return cls(len(matrix), cols, blocked)

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Grid":
        """'#' or 'X' is a wall, anything else is open."""
        return cls.from_matrix([[ch in WALL_CHARS for ch in line] for line in lines])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_passable(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and cell not in self.blocked

    def neighbours(self, cell: Cell) -> List[Cell]:
        """Passable 4-neighbours of `cell` in canonical direction order."""
        r, c = cell
        out = []
        for dr, dc in DIRECTIONS:
            nxt = (r + dr, c + dc)
            if self.is_passable(nxt):
                out.append(nxt)
        return out

    def opened(self, *cells: Cell) -> "Grid":
        """Copy of this grid with the given cells forced passable."""
        if not any(c in self.blocked for c in cells):
            return self
        return Grid(self.rows, self.cols, self.blocked.difference(cells))

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, object]:
        return {
            "rows":    self.rows,
            "cols":    self.cols,
            "blocked": sorted([r, c] for r, c in self.blocked),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Grid":
        return cls(data["rows"], data["cols"], (tuple(b) for b in data.get("blocked", [])))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Grid)
            and (self.rows, self.cols, self.blocked) == (other.rows, other.cols, other.blocked)
        )

    def __hash__(self) -> int:
        return hash((self.rows, self.cols, self.blocked))

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, walls={len(self.blocked)})"
