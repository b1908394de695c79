import pytest

from algorithms import AlgorithmKind, algorithms_by_kind, get_algorithm
from algorithms.path import reconstruct_path
from grid import Grid

SEARCHES = [info.key for info in algorithms_by_kind(AlgorithmKind.SEARCH)]

OPEN_MAZE = [
    ".....",
    ".###.",
    "...#.",
    ".#...",
    ".#.#.",
]

ENCLOSED_GOAL = [
    ".....",
    ".....",
    ".....",
    "....#",
    "...#.",
]


def run_search(key, grid):
    steps = list(get_algorithm(key).fn(grid, grid.start, grid.goal))
    return steps, reconstruct_path(grid, grid.start, grid.goal)


def assert_valid_path(grid, path):
    assert path[0] == grid.start
    assert path[-1] == grid.goal
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    for pos in path:
        assert not grid.cell(pos).obstacle
    assert len(set(path)) == len(path)


@pytest.mark.parametrize("key", SEARCHES)
def test_search_finds_connected_path(key):
    grid = Grid.from_rows(OPEN_MAZE)
    steps, path = run_search(key, grid)
    assert steps[-1].kind == "found"
    assert grid.cell(grid.goal).visited
    assert_valid_path(grid, path)


@pytest.mark.parametrize("key", SEARCHES)
def test_enclosed_goal_yields_empty_path(key):
    grid = Grid.from_rows(ENCLOSED_GOAL)
    steps, path = run_search(key, grid)
    assert steps[-1].kind == "exhausted"
    assert sum(s.is_final for s in steps) == 1
    assert not grid.cell(grid.goal).visited
    assert path == []


@pytest.mark.parametrize("key", SEARCHES)
def test_search_never_enters_obstacles(key):
    grid = Grid.from_rows(OPEN_MAZE)
    run_search(key, grid)
    for cell in grid:
        if cell.obstacle:
            assert not cell.visited


@pytest.mark.parametrize("key", SEARCHES)
def test_start_equals_goal(key):
    grid = Grid(3, 3, start=(1, 1), goal=(1, 1))
    steps, path = run_search(key, grid)
    assert [s.kind for s in steps] == ["found"]
    assert path == [(1, 1)]


def test_dijkstra_and_bfs_agree_on_shortest_length():
    for seed in range(20):
        grid = Grid(15, 15)
        grid.generate_obstacles(0.28, seed=seed)
        _, bfs_path = run_search("bfs", grid)
        _, dij_path = run_search("dijkstra", grid)
        assert len(bfs_path) == len(dij_path)


def test_bfs_path_is_shortest_on_open_grid():
    grid = Grid(6, 6)
    _, path = run_search("bfs", grid)
    assert len(path) - 1 == 10


def test_dijkstra_records_distances():
    grid = Grid(4, 4)
    run_search("dijkstra", grid)
    assert grid.cell(grid.start).distance == 0
    assert grid.cell(grid.goal).distance == 6


def test_runs_do_not_leak_state_into_each_other():
    grid = Grid.from_rows(OPEN_MAZE)
    run_search("dfs", grid)
    grid.cell((0, 4)).on_path = True
    steps, path = run_search("bfs", grid)
    assert steps[-1].kind == "found"
    assert_valid_path(grid, path)
    assert not grid.cell((0, 4)).on_path


def test_reconstruct_path_rejects_broken_chain():
    grid = Grid(3, 3)
    grid.cell(grid.goal).visited = True
    grid.cell(grid.goal).predecessor = (1, 2)
    assert reconstruct_path(grid, grid.start, grid.goal) == []


def test_reconstruct_path_unvisited_goal():
    grid = Grid(3, 3)
    assert reconstruct_path(grid, grid.start, grid.goal) == []


@pytest.mark.parametrize("key", SEARCHES)
def test_only_popped_cells_are_expanded(key):
    grid = Grid(5, 5)
    steps, _ = run_search(key, grid)
    popped = {s.cell for s in steps if s.cell is not None}
    expanded = {c.coord for c in grid if c.expanded}
    assert expanded == popped
    assert all(grid.cell(pos).visited for pos in expanded)


def test_bfs_frontier_is_visited_but_not_expanded():
    grid = Grid(5, 5, goal=(0, 2))
    run_search("bfs", grid)
    frontier = [c for c in grid if c.visited and not c.expanded]
    assert frontier
