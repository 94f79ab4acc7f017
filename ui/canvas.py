"""
canvas.py — SVG Grid Renderer
==============================
Pure rendering function: Grid + Snapshot + path → SVG string.

Layers, bottom to top:
  1. cells        – empty or wall
  2. closed       – the visited set
  3. frontier     – cells waiting to be expanded
  4. path         – reconstructed start → goal path (once done)
  5. start / goal
  6. grid lines

Design decisions:
  - NO mutation.  The caller passes everything in and gets a string back.
  - Colours live in CanvasConfig, keyed by layer name.
  - Overlay layers are translucent so walls and start / goal stay legible.
"""

from typing import Dict, Iterable, List, Optional

from grid import Cell, Grid
from algorithms import Snapshot


# ---------------------------------------------------------------------------
# Visual Config — palette and dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    cell_size: int = 20
    bg:        str = "#0d1117"

    colors: Dict[str, str] = {
        "empty":  "#161b22",
        "wall":   "#30363d",
        "start":  "#22c55e",
        "goal":   "#ef4444",
        "open":   "#0ea5e9",   # frontier
        "closed": "#6366f1",   # visited
        "path":   "#facc15",
    }

    closed_opacity:   float = 0.8
    frontier_opacity: float = 0.7
    line_color:       str   = "rgba(255,255,255,.06)"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_grid(
    grid: Grid,
    start: Cell,
    goal: Cell,
    snapshot: Optional[Snapshot] = None,
    path: Optional[List[Cell]] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        grid     : Walls and dimensions to draw.
        start    : Start cell.
        goal     : Goal cell.
        snapshot : Current search snapshot (or None for a bare board).
        path     : Final path, drawn over everything but the endpoints.
        config   : Visual config.
    """
    s = config.cell_size
    width, height = grid.cols * s, grid.rows * s

    parts = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" class="board" '
        f'data-rows="{grid.rows}" data-cols="{grid.cols}">',
        f'<rect width="{width}" height="{height}" fill="{config.colors["empty"]}"/>',
    ]

    # -- walls --
    parts.append('<g class="walls">')
    parts.extend(_cells(sorted(grid.blocked), config.colors["wall"], s))
    parts.append("</g>")

    # -- overlays --
    if snapshot is not None:
        parts.append(f'<g class="closed" opacity="{config.closed_opacity}">')
        parts.extend(_cells(sorted(snapshot.visited), config.colors["closed"], s))
        parts.append("</g>")
        parts.append(f'<g class="frontier" opacity="{config.frontier_opacity}">')
        parts.extend(_cells(snapshot.frontier, config.colors["open"], s))
        parts.append("</g>")

    if path:
        parts.append('<g class="path">')
        parts.extend(_cells(path, config.colors["path"], s))
        parts.append("</g>")

    # -- endpoints --
    parts.extend(_cells([start], config.colors["start"], s, css_class="start"))
    parts.extend(_cells([goal], config.colors["goal"], s, css_class="goal"))

    parts.append(_grid_lines(grid, config))
    parts.append("</svg>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _cells(cells: Iterable[Cell], fill: str, size: int, css_class: str = "") -> List[str]:
    cls = f' class="{css_class}"' if css_class else ""
    return [
        f'<rect{cls} x="{c * size}" y="{r * size}" width="{size}" height="{size}" fill="{fill}"/>'
        for r, c in cells
    ]


def _grid_lines(grid: Grid, config: CanvasConfig) -> str:
    s = config.cell_size
    w, h = grid.cols * s, grid.rows * s
    lines = [f'<g class="grid-lines" stroke="{config.line_color}" stroke-width="1">']
    for r in range(grid.rows + 1):
        lines.append(f'<line x1="0" y1="{r * s}" x2="{w}" y2="{r * s}"/>')
    for c in range(grid.cols + 1):
        lines.append(f'<line x1="{c * s}" y1="0" x2="{c * s}" y2="{h}"/>')
    lines.append("</g>")
    return "\n".join(lines)
