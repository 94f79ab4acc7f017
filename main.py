"""
main.py — Grid Pathfinding Visualizer Flask App
================================================
The web server that powers the visualizer.

Routes:
  GET  /                  – main UI
  GET  /api/algorithms    – registry cards (label, pseudocode, tags)
  GET  /api/state         – board, current snapshot, stats
  POST /api/grid/cell     – apply a tool (wall / erase / start / goal) at a cell
  POST /api/grid/clear    – remove every wall
  POST /api/grid/maze     – random walls
  POST /api/grid/resize   – new empty square board
  POST /api/run           – start a run and begin playing
  POST /api/step          – advance one expansion (starts a paused run if idle)
  POST /api/play          – toggle play / pause
  POST /api/tick          – take the steps due since the last tick
  POST /api/speed         – set steps per second
  POST /api/reset         – drop the current run
  POST /api/compare       – run two algorithms to completion on the board

State management:
  Each browser session gets a Workspace (Board + Driver) held in process
  memory, keyed by a random id stored in the Flask session cookie.  At most
  MAX_WORKSPACES are kept; the least recently used one is dropped first.
  Each Workspace has a lock held by every handler that touches it.  The
  board is snapshotted into an immutable Grid when a run starts, so
  editing during an animation never disturbs the search.
"""

from flask import Flask, render_template_string, request, jsonify, session
from dataclasses import asdict, dataclass, field
import logging
import os
import secrets
import sys
import threading
import uuid
from collections import OrderedDict

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from grid import Board, Tool
from algorithms import get_algorithm, list_algorithms, resolve_kind
from engine import Driver, Recorder, compare
from ui import render_grid, algorithm_selector, board_tools, stats_panel, status_text


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_mapping(
    SECRET_KEY=os.environ.get("PATHVIZ_SECRET_KEY") or secrets.token_hex(32),
    DEFAULT_GRID_SIZE=30,
    GRID_SIZES=(10, 20, 30, 40, 50),
    DEFAULT_ALGORITHM="astar",
    MAX_WORKSPACES=256,
)
app.config.from_prefixed_env("PATHVIZ")


# ---------------------------------------------------------------------------
# Workspace — per-session board + driver
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    board:  Board
    driver: Driver = field(default_factory=Driver)
    algo:   str    = "astar"
    # the dev server is threaded; every handler holds this while it
    # touches the board or the driver
    lock:   threading.Lock = field(default_factory=threading.Lock, repr=False)


# least recently used first; bounded by MAX_WORKSPACES
_WORKSPACES: "OrderedDict[str, Workspace]" = OrderedDict()
_WORKSPACES_LOCK = threading.Lock()


def get_workspace() -> Workspace:
    sid = session.get("sid")
    with _WORKSPACES_LOCK:
        ws = _WORKSPACES.get(sid) if sid is not None else None
        if ws is not None:
            _WORKSPACES.move_to_end(sid)
            return ws

        sid = uuid.uuid4().hex
        session["sid"] = sid
        ws = _WORKSPACES[sid] = Workspace(
            board=Board.default(app.config["DEFAULT_GRID_SIZE"]),
            algo=resolve_kind(app.config["DEFAULT_ALGORITHM"]).value,
        )
        while len(_WORKSPACES) > max(1, app.config["MAX_WORKSPACES"]):
            evicted, _ = _WORKSPACES.popitem(last=False)
            logger.debug("evicted workspace %s", evicted)
        logger.debug("new workspace %s", sid)
        return ws


def get_json() -> dict:
    return request.get_json(silent=True) or {}


def start_run(ws: Workspace, algo: str, play: bool):
    ws.algo = resolve_kind(algo).value
    board = ws.board
    return ws.driver.start(ws.algo, board.snapshot(), board.start, board.goal, play=play)


def state_payload(ws: Workspace) -> dict:
    """Everything the page needs to repaint after any action."""
    board  = ws.board
    runner = ws.driver.runner
    metrics = runner.metrics() if runner else None
    snap    = runner.snapshot if runner else None
    path    = runner.path if runner else None
    scores  = runner.scores() if runner else None

    return {
        "svg":      render_grid(board.snapshot(), board.start, board.goal, snap, path),
        "stats":    stats_panel(metrics),
        "status":   status_text(metrics),
        "driver":   ws.driver.state.value,
        "rate":     ws.driver.rate,
        "algo":     ws.algo,
        "board":    board.to_dict(),
        "metrics":  asdict(metrics) if metrics else None,
        "outcome":  runner.outcome.value if runner else None,
        "path":     [list(c) for c in path] if path else None,
        "frontier": [list(c) for c in snap.frontier] if snap else [],
        "visited":  sorted(list(c) for c in snap.visited) if snap else [],
        "scores":   [dict(s, cell=list(s["cell"])) for s in scores] if scores is not None else None,
        "explanation": snap.explanation if snap else "",
    }


def bad_request(message: str):
    return jsonify({"error": message}), 400


@app.errorhandler(ValueError)
def handle_value_error(e):
    return bad_request(str(e))


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ws = get_workspace()
    with ws.lock:
        state = state_payload(ws)
        selector = algorithm_selector(list_algorithms(), ws.algo)
        tools = board_tools(app.config["GRID_SIZES"], ws.board.rows)
    return render_template_string(
        INDEX_TEMPLATE,
        svg=state["svg"],
        stats=state["stats"],
        algo_selector=selector,
        tools=tools,
    )


@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([
        {
            "key":             a.key,
            "label":           a.label,
            "pseudocode":      a.pseudocode,
            "tags":            a.tags,
            "has_heuristic":   a.has_heuristic,
            "optimal":         a.optimal,
            "complexity_time": a.complexity_time,
            "description":     a.description,
        }
        for a in list_algorithms()
    ])


@app.route("/api/state")
def api_state():
    ws = get_workspace()
    with ws.lock:
        return jsonify(state_payload(ws))


# ---------------------------------------------------------------------------
# API: Board Editing
# ---------------------------------------------------------------------------
@app.route("/api/grid/cell", methods=["POST"])
def api_grid_cell():
    ws = get_workspace()
    data = get_json()
    try:
        cell = (int(data["row"]), int(data["col"]))
    except (KeyError, TypeError, ValueError):
        return bad_request("row and col are required integers")
    try:
        tool = Tool(data.get("tool", "wall"))
    except ValueError:
        return bad_request(f"Unknown tool: {data.get('tool')!r}")
    with ws.lock:
        ws.board.apply(tool, cell)
        return jsonify(state_payload(ws))


@app.route("/api/grid/clear", methods=["POST"])
def api_grid_clear():
    ws = get_workspace()
    with ws.lock:
        ws.board.clear()
        return jsonify(state_payload(ws))


@app.route("/api/grid/maze", methods=["POST"])
def api_grid_maze():
    ws = get_workspace()
    data = get_json()
    seed = data.get("seed")
    try:
        wall_prob = float(data.get("wall_prob", 0.3))
    except (TypeError, ValueError):
        return bad_request("wall_prob must be a number")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return bad_request("seed must be an integer")
    with ws.lock:
        ws.board.randomize(wall_prob=wall_prob, seed=seed)
        return jsonify(state_payload(ws))


@app.route("/api/grid/resize", methods=["POST"])
def api_grid_resize():
    ws = get_workspace()
    try:
        size = int(get_json().get("size", app.config["DEFAULT_GRID_SIZE"]))
    except (TypeError, ValueError):
        return bad_request("size must be an integer")
    if size not in app.config["GRID_SIZES"]:
        return bad_request(f"Unsupported size: {size}")
    with ws.lock:
        ws.board.resize(size)
        ws.driver.reset()
        return jsonify(state_payload(ws))


# ---------------------------------------------------------------------------
# API: Run Control
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    ws = get_workspace()
    data = get_json()
    with ws.lock:
        start_run(ws, data.get("algo", ws.algo), play=True)
        return jsonify(state_payload(ws))


@app.route("/api/step", methods=["POST"])
def api_step():
    ws = get_workspace()
    data = get_json()
    with ws.lock:
        if ws.driver.is_idle:
            start_run(ws, data.get("algo", ws.algo), play=False)
        ws.driver.pause()
        ws.driver.step()
        return jsonify(state_payload(ws))


@app.route("/api/play", methods=["POST"])
def api_play():
    ws = get_workspace()
    with ws.lock:
        ws.driver.toggle_play()
        return jsonify(state_payload(ws))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    ws = get_workspace()
    with ws.lock:
        taken = ws.driver.tick()
        payload = state_payload(ws)
    payload["taken"] = taken
    return jsonify(payload)


@app.route("/api/speed", methods=["POST"])
def api_speed():
    ws = get_workspace()
    data = get_json()
    if "preset" in data:
        if not isinstance(data["preset"], str):
            return bad_request("preset must be a string")
        with ws.lock:
            ws.driver.set_speed(data["preset"])
            return jsonify({"rate": ws.driver.rate})
    try:
        rate = float(data.get("rate", 10))
    except (TypeError, ValueError):
        return bad_request("rate must be a number")
    with ws.lock:
        ws.driver.set_rate(rate)
        return jsonify({"rate": ws.driver.rate})


@app.route("/api/reset", methods=["POST"])
def api_reset():
    ws = get_workspace()
    with ws.lock:
        ws.driver.reset()
        return jsonify(state_payload(ws))


@app.route("/api/compare", methods=["POST"])
def api_compare():
    ws = get_workspace()
    data = get_json()
    with ws.lock:
        board = ws.board
        grid, start, goal = board.snapshot(), board.start, board.goal
    left  = Recorder.record(data.get("left", "bfs"), grid, start, goal)
    right = Recorder.record(data.get("right", "astar"), grid, start, goal)
    return jsonify(asdict(compare(left, right)))


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Grid Pathfinding Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { display: flex; gap: 16px; padding: 16px; background: #0d1117;
           color: #e6edf3; font-family: 'DM Sans', sans-serif; }
    #sidebar { width: 280px; display: flex; flex-direction: column; gap: 12px; }
    .panel { background: #161b22; border: 1px solid #30363d; border-radius: 8px; padding: 12px; }
    button, select { background: #21262d; color: #e6edf3; border: 1px solid #30363d;
                     border-radius: 6px; padding: 4px 8px; margin: 2px; cursor: pointer; }
    .tool.active, .btn-primary { background: #0ea5e9; color: #010409; }
    #board svg { max-width: calc(100vh - 32px); height: auto; cursor: crosshair; }
    #explanation { font-size: 12px; color: #7d8590; margin-top: 8px; }
  </style>
</head>
<body>
  <div id="sidebar">
    {{ algo_selector|safe }}
    {{ tools|safe }}
    <div id="stats-container">{{ stats|safe }}</div>
    <div id="explanation" class="panel"></div>
  </div>
  <div id="board">{{ svg|safe }}</div>

  <script>
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    let activeTool = 'wall', timer = null, ticking = false, isDown = false, lastCell = null;

    // at most one /api/tick in flight; the next one is scheduled after the reply
    function schedule(playing) {
      if (playing && !timer && !ticking) timer = setTimeout(tick, 16);
      if (!playing && timer) { clearTimeout(timer); timer = null; }
    }
    function paint(data) {
      if (data.error) { console.warn(data.error); return; }
      document.getElementById('board').innerHTML = data.svg;
      document.getElementById('stats-container').innerHTML = data.stats;
      document.getElementById('explanation').textContent = data.explanation;
      schedule(data.driver === 'playing');
      document.getElementById('pause').textContent = data.driver === 'paused' ? 'Resume' : 'Pause';
    }
    async function tick() {
      timer = null;
      ticking = true;
      try {
        const data = await post('/api/tick');
        ticking = false;
        paint(data);
      } finally {
        ticking = false;
      }
    }

    // Board editing
    function cellAt(e) {
      const svg = document.querySelector('#board svg');
      const rect = svg.getBoundingClientRect();
      const rows = +svg.dataset.rows, cols = +svg.dataset.cols;
      const col = Math.min(cols - 1, Math.max(0, Math.floor((e.clientX - rect.left) / rect.width * cols)));
      const row = Math.min(rows - 1, Math.max(0, Math.floor((e.clientY - rect.top) / rect.height * rows)));
      return {row, col};
    }
    async function handlePointer(e, tool) {
      const c = cellAt(e);
      if (lastCell && lastCell.row === c.row && lastCell.col === c.col) return;
      lastCell = c;
      paint(await post('/api/grid/cell', {...c, tool: tool || activeTool}));
    }
    const board = document.getElementById('board');
    board.addEventListener('mousedown', e => { if (e.button === 0) { isDown = true; handlePointer(e); } });
    board.addEventListener('mousemove', e => { if (isDown) handlePointer(e); });
    board.addEventListener('contextmenu', e => { e.preventDefault(); lastCell = null; handlePointer(e, 'erase'); });
    window.addEventListener('mouseup', () => { isDown = false; lastCell = null; });

    function setTool(t) {
      activeTool = t;
      document.querySelectorAll('.tool').forEach(b => b.classList.toggle('active', b.dataset.tool === t));
    }
    document.getElementById('tools').addEventListener('click', e => {
      const t = e.target.closest('.tool'); if (t) setTool(t.dataset.tool);
    });
    window.addEventListener('keydown', e => {
      if (e.key.toLowerCase() === 's') setTool('start');
      if (e.key.toLowerCase() === 'g') setTool('goal');
    });

    // Run controls
    const algo = () => document.getElementById('algo').value;
    document.getElementById('run').onclick   = async () => paint(await post('/api/run', {algo: algo()}));
    document.getElementById('pause').onclick = async () => paint(await post('/api/play'));
    document.getElementById('step').onclick  = async () => paint(await post('/api/step', {algo: algo()}));
    document.getElementById('reset').onclick = async () => paint(await post('/api/reset'));
    document.getElementById('speed').oninput = async e => post('/api/speed', {rate: +e.target.value});
    document.getElementById('size').onchange = async e => paint(await post('/api/grid/resize', {size: +e.target.value}));
    document.getElementById('clear').onclick = async () => paint(await post('/api/grid/clear'));
    document.getElementById('maze').onclick  = async () => paint(await post('/api/grid/maze', {wall_prob: 0.3}));
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("PATHVIZ_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Grid Pathfinding Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
