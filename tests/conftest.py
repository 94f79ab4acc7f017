from itertools import product

import pytest

from grid import Grid


def assert_valid_path(grid, path, start, goal):
    assert path[0] == start
    assert path[-1] == goal
    for cell in path:
        assert grid.is_passable(cell)
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    assert len(set(path)) == len(path)


def brute_force_shortest(grid, start, goal):
    """Shortest simple-path length by exhaustive search; None if unreachable."""
    best = [None]

    def walk(cell, seen, length):
        if best[0] is not None and length >= best[0]:
            return
        if cell == goal:
            best[0] = length
            return
        for nbr in grid.neighbours(cell):
            if nbr not in seen:
                seen.add(nbr)
                walk(nbr, seen, length + 1)
                seen.remove(nbr)

    walk(start, {start}, 0)
    return best[0]


@pytest.fixture
def open_5x5():
    return Grid.open(5, 5)


@pytest.fixture
def column_wall_row0():
    # column 2 blocked except row 0
    return Grid(5, 5, [(r, 2) for r in range(1, 5)])


@pytest.fixture
def column_wall_row1():
    return Grid(5, 5, [(r, 2) for r in range(5) if r != 1])


@pytest.fixture
def sealed():
    # column 2 fully blocked
    return Grid(5, 5, [(r, 2) for r in range(5)])


def random_grids(count, size=4, wall_prob=0.3, seed=7):
    import random
    rng = random.Random(seed)
    cells = list(product(range(size), range(size)))
    for _ in range(count):
        blocked = [c for c in cells if rng.random() < wall_prob]
        start, goal = rng.sample(cells, 2)
        yield Grid(size, size, blocked).opened(start, goal), start, goal
