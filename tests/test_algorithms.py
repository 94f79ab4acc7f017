import pytest

from algorithms import (
    AlgorithmKind,
    AStarSearch,
    SearchStatus,
    create_search,
    get_algorithm,
    list_algorithms,
    reconstruct_path,
    resolve_kind,
)
from engine import Recorder
from grid import Grid

from conftest import assert_valid_path, brute_force_shortest, random_grids

ALL_KINDS = list(AlgorithmKind)


def run(kind, grid, start, goal):
    search = create_search(kind, grid, start, goal)
    snaps = list(search)
    return search, snaps


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_covers_all_four_kinds():
    assert [a.key for a in list_algorithms()] == ["bfs", "dfs", "greedy", "astar"]
    assert get_algorithm("astar").optimal
    assert not get_algorithm(AlgorithmKind.DFS).optimal
    assert get_algorithm("dijkstra") is None


def test_resolve_kind_rejects_unknown_keys():
    assert resolve_kind("BFS") is AlgorithmKind.BFS
    with pytest.raises(ValueError):
        resolve_kind("dijkstra")


# ---------------------------------------------------------------------------
# First steps
# ---------------------------------------------------------------------------
def test_bfs_first_snapshot(open_5x5):
    search = create_search("bfs", open_5x5, (2, 0), (2, 4))
    snap = search.advance()
    assert snap.step_number == 0
    assert snap.current == (2, 0)
    assert snap.frontier == ((3, 0), (1, 0), (2, 1))
    assert snap.visited == {(2, 0), (3, 0), (1, 0), (2, 1)}
    assert dict(snap.came_from) == {(3, 0): (2, 0), (1, 0): (2, 0), (2, 1): (2, 0)}
    assert snap.status is SearchStatus.RUNNING


def test_dfs_pops_most_recent_neighbour(open_5x5):
    search = create_search("dfs", open_5x5, (2, 0), (2, 4))
    search.advance()
    assert search.advance().current == (2, 1)


def test_greedy_prefers_cell_closest_to_goal(open_5x5):
    search = create_search("greedy", open_5x5, (2, 0), (2, 4))
    first = search.advance()
    assert set(first.frontier) == {(3, 0), (1, 0), (2, 1)}
    assert search.advance().current == (2, 1)


def test_astar_marks_visited_only_on_pop(open_5x5):
    search = create_search("astar", open_5x5, (2, 0), (2, 4))
    snap = search.advance()
    assert snap.visited == {(2, 0)}
    assert set(snap.frontier) == {(3, 0), (1, 0), (2, 1)}
    assert search.cost == {(2, 0): 0, (3, 0): 1, (1, 0): 1, (2, 1): 1}


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("kind", ["bfs", "astar"])
def test_straight_line_on_open_grid(kind, open_5x5):
    search, snaps = run(kind, open_5x5, (2, 0), (2, 4))
    assert snaps[-1].status is SearchStatus.FOUND
    assert snaps[-1].current == (2, 4)
    path = reconstruct_path(search.came_from, (2, 0), (2, 4))
    assert path == [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4)]


@pytest.mark.parametrize("kind", ["bfs", "astar"])
def test_detour_through_top_opening(kind, column_wall_row0):
    search, _ = run(kind, column_wall_row0, (2, 0), (2, 4))
    path = reconstruct_path(search.came_from, (2, 0), (2, 4))
    assert len(path) - 1 == 8
    assert (0, 2) in path
    assert brute_force_shortest(column_wall_row0, (2, 0), (2, 4)) == 8


@pytest.mark.parametrize("kind", ["bfs", "astar"])
def test_detour_through_second_row_opening(kind, column_wall_row1):
    search, _ = run(kind, column_wall_row1, (2, 0), (2, 4))
    path = reconstruct_path(search.came_from, (2, 0), (2, 4))
    assert len(path) - 1 == 6
    assert (1, 2) in path


@pytest.mark.parametrize("kind", ["dfs", "greedy"])
@pytest.mark.parametrize("fixture", ["column_wall_row0", "column_wall_row1"])
def test_non_optimal_searches_still_connect(kind, fixture, request):
    grid = request.getfixturevalue(fixture)
    search, snaps = run(kind, grid, (2, 0), (2, 4))
    assert snaps[-1].status is SearchStatus.FOUND
    path = reconstruct_path(search.came_from, (2, 0), (2, 4))
    assert_valid_path(grid, path, (2, 0), (2, 4))


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_sealed_wall_exhausts(kind, sealed):
    search, snaps = run(kind, sealed, (2, 0), (2, 4))
    final = snaps[-1]
    assert final.status is SearchStatus.EXHAUSTED
    assert final.frontier == ()
    assert final.visited
    assert final.visited <= {(r, c) for r in range(5) for c in range(2)}
    assert reconstruct_path(search.came_from, (2, 0), (2, 4)) is None


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_start_equal_to_goal(kind, open_5x5):
    search, snaps = run(kind, open_5x5, (1, 1), (1, 1))
    assert len(snaps) == 1
    assert snaps[0].status is SearchStatus.FOUND
    assert reconstruct_path(search.came_from, (1, 1), (1, 1)) == [(1, 1)]


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("kind", ALL_KINDS)
def test_runs_are_deterministic(kind):
    grid = Grid.from_strings([
        "......",
        ".##.#.",
        "...#..",
        "#.....",
        "..##..",
    ])
    a = Recorder.record(kind, grid, (0, 0), (4, 5))
    b = Recorder.record(kind, grid, (0, 0), (4, 5))
    assert len(a.snapshots) == len(b.snapshots)
    for x, y in zip(a.snapshots, b.snapshots):
        assert (x.current, x.frontier, x.visited, x.status) == (y.current, y.frontier, y.visited, y.status)
        assert dict(x.came_from) == dict(y.came_from)
    assert a.path == b.path


def test_bfs_and_astar_match_brute_force():
    for grid, start, goal in random_grids(40):
        expected = brute_force_shortest(grid, start, goal)
        for kind in ("bfs", "astar"):
            search, snaps = run(kind, grid, start, goal)
            path = reconstruct_path(search.came_from, start, goal)
            if expected is None:
                assert snaps[-1].status is SearchStatus.EXHAUSTED
                assert path is None
            else:
                assert snaps[-1].status is SearchStatus.FOUND
                assert len(path) - 1 == expected
                assert_valid_path(grid, path, start, goal)


def test_every_found_path_is_connected():
    for grid, start, goal in random_grids(40, size=6, seed=11):
        for kind in ALL_KINDS:
            search, snaps = run(kind, grid, start, goal)
            if snaps[-1].status is SearchStatus.FOUND:
                assert_valid_path(grid, reconstruct_path(search.came_from, start, goal), start, goal)


def test_astar_expands_no_more_than_bfs_on_open_grid():
    grid = Grid.open(15, 15)
    bfs = Recorder.record("bfs", grid, (7, 1), (7, 13))
    astar = Recorder.record("astar", grid, (7, 1), (7, 13))
    assert astar.metrics.path_length == bfs.metrics.path_length == 12
    assert astar.metrics.expanded <= bfs.metrics.expanded


# ---------------------------------------------------------------------------
# Snapshot and stepping contract
# ---------------------------------------------------------------------------
def test_snapshots_do_not_change_after_later_steps(open_5x5):
    search = create_search("bfs", open_5x5, (2, 0), (2, 4))
    first = search.advance()
    visited, came = set(first.visited), dict(first.came_from)
    for _ in range(5):
        search.advance()
    assert first.visited == visited
    assert dict(first.came_from) == came
    with pytest.raises(TypeError):
        first.came_from[(0, 0)] = (0, 1)


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_advance_after_final_returns_terminal_snapshot(kind, sealed):
    search, snaps = run(kind, sealed, (2, 0), (2, 4))
    assert search.done
    assert search.advance() is snaps[-1]
    assert list(search) == [snaps[-1]]


def test_step_numbers_are_consecutive(open_5x5):
    _, snaps = run("dfs", open_5x5, (0, 0), (4, 4))
    assert [s.step_number for s in snaps] == list(range(len(snaps)))


def first_run_with_stale_pop(count=5000):
    # seeded, so the same grid is picked every time
    for grid, start, goal in random_grids(count, size=8, wall_prob=0.3, seed=11):
        if any(s.stale for s in AStarSearch(grid, start, goal)):
            return grid, start, goal
    return None


def test_astar_lazy_deletion_on_a_real_stale_pop():
    found = first_run_with_stale_pop()
    assert found is not None
    grid, start, goal = found

    search = AStarSearch(grid, start, goal)
    first_cost, first_parent = {}, {}
    stale_snaps, prev = [], None
    for snap in search:
        for cell, g in search.cost.items():
            if cell not in first_cost:
                first_cost[cell] = g
                first_parent[cell] = search.came_from.get(cell)
        # the heap holds duplicates after an improvement; the snapshot never does
        assert len(set(snap.frontier)) == len(snap.frontier)
        if snap.stale:
            assert snap.status is SearchStatus.RUNNING
            assert snap.current in prev.visited
            assert snap.visited == prev.visited
            stale_snaps.append(snap)
        prev = snap

    assert stale_snaps
    for snap in stale_snaps:
        cell = snap.current
        assert search.cost[cell] < first_cost[cell]
        assert search.came_from[cell] != first_parent[cell]

    astar_path = reconstruct_path(prev.came_from, start, goal)
    _, bfs_snaps = run("bfs", grid, start, goal)
    bfs_path = reconstruct_path(bfs_snaps[-1].came_from, start, goal)
    assert (astar_path is None) == (bfs_path is None)
    if bfs_path is not None:
        assert len(astar_path) == len(bfs_path)
        assert_valid_path(grid, astar_path, start, goal)


def test_astar_scores_table(open_5x5):
    search = AStarSearch(open_5x5, (2, 0), (2, 4))
    search.advance()
    rows = {r["cell"]: r for r in search.scores()}
    assert rows[(2, 1)] == {"cell": (2, 1), "g": 1, "h": 3, "f": 4}
