from engine import Runner
from grid import Grid
from ui import CanvasConfig, render_grid, stats_panel, status_text


def test_bare_board_has_walls_and_endpoints():
    grid = Grid(4, 6, [(1, 1), (2, 3)])
    svg = render_grid(grid, (0, 0), (3, 5))
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert 'width="120" height="80"' in svg
    assert svg.count(CanvasConfig.colors["wall"]) == 2
    assert 'class="start" x="0" y="0"' in svg
    assert 'class="goal" x="100" y="60"' in svg
    assert 'class="closed"' not in svg


def test_overlays_and_path_are_drawn():
    grid = Grid.open(5, 5)
    runner = Runner("bfs", grid, (2, 0), (2, 4))
    runner.run_to_completion()
    svg = render_grid(grid, runner.start, runner.goal, runner.snapshot, runner.path)
    assert 'class="closed"' in svg
    assert 'class="frontier"' in svg
    assert svg.count(CanvasConfig.colors["path"]) == 5


def test_stats_panel_status():
    assert status_text(None) == "Ready"
    runner = Runner("astar", Grid.open(3, 3), (0, 0), (2, 2))
    runner.step()
    assert status_text(runner.metrics()) == "Running: ASTAR"
    runner.run_to_completion()
    html = stats_panel(runner.metrics())
    assert '<span id="sPath">4</span>' in html
    assert ">Done<" in html
