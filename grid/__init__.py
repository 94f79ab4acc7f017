"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, DIRECTIONS
    from grid import Board, Tool
"""

from grid.grid  import Grid, Cell, DIRECTIONS
from grid.board import Board, Tool, DEFAULT_SIZE, default_endpoints

__all__ = [
    "Grid",  "Cell", "DIRECTIONS",
    "Board", "Tool", "DEFAULT_SIZE", "default_endpoints",
]
