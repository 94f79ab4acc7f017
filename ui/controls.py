"""
controls.py — UI Control Panels
=================================
Every panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_selector – algorithm dropdown + run / pause / step / reset
  • board_tools        – wall / erase / start / goal tool buttons, size, clear, maze
  • stats_panel        – status, expanded, frontier, path length, time

Output is raw HTML strings; the main app stitches them together.
"""

from html import escape
from typing import List, Optional, Sequence

from algorithms import AlgoInfo
from engine import RunMetrics
from grid import Tool


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "astar") -> str:
    options = []
    for algo in algorithms:
        sel = "selected" if algo.key == selected_key else ""
        options.append(
            f'<option value="{algo.key}" {sel} title="{escape(algo.description)}">'
            f"{escape(algo.label)}</option>"
        )

    return f"""
    <div class="panel algorithm-selector">
      <select id="algo">
        {''.join(options)}
      </select>
      <button id="run" class="btn-primary">Run</button>
      <button id="pause">Pause</button>
      <button id="step">Step</button>
      <button id="reset">Reset</button>
      <label>Speed <input id="speed" type="range" min="1" max="240" value="10"></label>
    </div>
    """


# ---------------------------------------------------------------------------
# Board Tools
# ---------------------------------------------------------------------------
def board_tools(sizes: Sequence[int], current_size: int, active_tool: str = "wall") -> str:
    tools = []
    for tool in Tool:
        active = "active" if tool.value == active_tool else ""
        tools.append(
            f'<button class="tool {active}" data-tool="{tool.value}">{tool.value.capitalize()}</button>'
        )
    size_opts = "".join(
        f'<option value="{n}" {"selected" if n == current_size else ""}>{n}×{n}</option>'
        for n in sizes
    )
    return f"""
    <div class="panel board-tools">
      <div id="tools">{''.join(tools)}</div>
      <select id="size">{size_opts}</select>
      <button id="clear">Clear</button>
      <button id="maze">Random maze</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Stats Panel
# ---------------------------------------------------------------------------
def status_text(metrics: Optional[RunMetrics]) -> str:
    if metrics is None:
        return "Ready"
    if not metrics.done:
        return f"Running: {metrics.algo_key.upper()}"
    return "Done" if metrics.path_found else "Done: no path"


def stats_panel(metrics: Optional[RunMetrics] = None) -> str:
    m = metrics or RunMetrics()
    return f"""
    <div class="panel stats" id="stats">
      <div id="status">{status_text(metrics)}</div>
      <div>Expanded <span id="sExpanded">{m.expanded}</span></div>
      <div>Frontier <span id="sFrontier">{m.frontier_size}</span></div>
      <div>Path <span id="sPath">{m.path_length}</span></div>
      <div>Time <span id="sTime">{round(m.elapsed_ms) if m.done else 0}</span> ms</div>
    </div>
    """
