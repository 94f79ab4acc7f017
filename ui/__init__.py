"""
ui/
---
Presentation layer.

    from ui import render_grid
    from ui import algorithm_selector, board_tools, stats_panel
"""

from ui.canvas import render_grid, CanvasConfig

from ui.controls import (
    algorithm_selector,
    board_tools,
    stats_panel,
    status_text,
)

__all__ = [
    "render_grid",
    "CanvasConfig",
    "algorithm_selector",
    "board_tools",
    "stats_panel",
    "status_text",
]
