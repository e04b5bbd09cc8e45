import random
from math import inf

import pytest

from gridpath.core.algorithms import ALGORITHMS, Algorithm, run_algorithm
from gridpath.core.grid import Grid
from gridpath.core.terrain import WALL

ALL = list(Algorithm)


def reference_costs(grid, unit=False):
    """Bellman-Ford style relaxation from start: entering a cell costs its weight."""
    dist = {n.cell: inf for n in grid.nodes()}
    dist[grid.start] = 0
    changed = True
    while changed:
        changed = False
        for node in grid.nodes():
            if dist[node.cell] == inf:
                continue
            for nb in grid.neighbors(node):
                alt = dist[node.cell] + (1 if unit else nb.weight)
                if alt < dist[nb.cell]:
                    dist[nb.cell] = alt
                    changed = True
    return dist


def assert_valid_path(grid, path):
    assert path[0] == grid.start
    assert path[-1] == grid.finish
    assert len(set(path)) == len(path)
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
        assert not grid.is_blocking(b)


def random_grid(seed, rows=8, cols=10):
    rng = random.Random(seed)
    grid = Grid.create(rows, cols, start=(0, 0), finish=(rows - 1, cols - 1))
    names = grid.table.names()
    for node in list(grid.nodes()):
        if node.cell in (grid.start, grid.finish):
            continue
        if rng.random() < 0.45:
            grid.set_terrain(node.cell, rng.choice(names))
    return grid


def test_every_algorithm_is_registered():
    assert set(ALGORITHMS) == set(Algorithm)


@pytest.mark.parametrize("algorithm", ALL)
def test_single_row_corridor(algorithm):
    grid = Grid.create(1, 5, start=(0, 0), finish=(0, 4))
    result = run_algorithm(algorithm, grid)
    assert result.algorithm == algorithm.value
    assert result.shortest_path_length == 4
    assert result.shortest_path == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]
    assert result.total_cost == 4
    assert result.visited_nodes_in_order[0] == grid.start
    assert result.num_nodes_visited + 1 == len(result.visited_nodes_in_order)


@pytest.mark.parametrize("algorithm", ALL)
def test_walled_off_finish_is_unreachable(algorithm):
    grid = Grid.create(5, 5, start=(0, 0), finish=(2, 2))
    for c in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        grid.set_terrain(c, WALL)

    result = run_algorithm(algorithm, grid)

    reachable = {n.cell for n in grid.nodes()
                 if not grid.is_blocking(n.cell) and n.cell != grid.finish}
    assert len(reachable) == 20
    assert result.shortest_path == []
    assert result.shortest_path_length == 0
    assert not result.found
    assert result.total_cost is None
    assert result.visited_nodes_in_order[0] == grid.start
    assert len(result.visited_nodes_in_order) == 20
    assert set(result.visited_nodes_in_order) == reachable


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("algorithm", ALL)
def test_trace_and_path_invariants(algorithm, seed):
    grid = random_grid(seed)
    result = run_algorithm(algorithm, grid)
    trace = result.visited_nodes_in_order

    assert trace[0] == grid.start
    assert result.num_nodes_visited + 1 == len(trace)
    assert len(set(trace)) == len(trace)
    assert not any(grid.is_blocking(c) for c in trace)

    reachable = reference_costs(grid)[grid.finish] < inf
    assert result.found == reachable
    if reachable:
        assert_valid_path(grid, result.shortest_path)
        assert trace[-1] == grid.finish
        assert result.total_cost == grid.path_cost(result.shortest_path)


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("algorithm", [Algorithm.DIJKSTRA, Algorithm.A_STAR])
def test_weighted_searches_are_optimal(algorithm, seed):
    grid = random_grid(seed)
    best = reference_costs(grid)[grid.finish]
    result = run_algorithm(algorithm, grid)
    if best == inf:
        assert not result.found
    else:
        assert result.total_cost == best


@pytest.mark.parametrize("seed", range(12))
def test_bfs_is_edge_count_optimal(seed):
    grid = random_grid(seed)
    best = reference_costs(grid, unit=True)[grid.finish]
    result = run_algorithm(Algorithm.BFS, grid)
    if best == inf:
        assert not result.found
    else:
        assert result.shortest_path_length == best


def mud_detour_grid():
    # S . M . F on the middle row; going around the mud costs 6, through it 53
    grid = Grid.create(3, 5, start=(1, 0), finish=(1, 4))
    grid.set_terrain((1, 2), "Mud")
    return grid


def test_weighted_searches_avoid_mud():
    for algorithm in (Algorithm.DIJKSTRA, Algorithm.A_STAR):
        result = run_algorithm(algorithm, mud_detour_grid())
        assert result.total_cost == 6
        assert result.shortest_path_length == 6
        assert (1, 2) not in result.shortest_path


def test_unweighted_and_greedy_go_through_mud():
    for algorithm in (Algorithm.BFS, Algorithm.GREEDY):
        result = run_algorithm(algorithm, mud_detour_grid())
        assert result.shortest_path == [(1, 0), (1, 1), (1, 2), (1, 3), (1, 4)]
        assert result.total_cost == 53


def test_greedy_expands_fewer_nodes_than_dijkstra_on_open_grid():
    grid = Grid.create(15, 15, start=(7, 1), finish=(7, 13))
    greedy = run_algorithm(Algorithm.GREEDY, grid)
    dijkstra = run_algorithm(Algorithm.DIJKSTRA, grid)
    assert greedy.shortest_path_length == dijkstra.shortest_path_length == 12
    assert greedy.num_nodes_visited < dijkstra.num_nodes_visited


def test_dfs_follows_fixed_neighbor_order():
    grid = Grid.create(3, 3, start=(0, 0), finish=(2, 2))
    result = run_algorithm(Algorithm.DFS, grid)
    expected = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]
    assert result.visited_nodes_in_order == expected
    assert result.shortest_path == expected
    assert result.shortest_path_length == 8


def test_dfs_handles_large_open_grid():
    grid = Grid.create(60, 60, start=(0, 0), finish=(59, 59))
    result = run_algorithm(Algorithm.DFS, grid)
    assert_valid_path(grid, result.shortest_path)


def test_run_algorithm_resets_scratch_between_runs():
    grid = mud_detour_grid()
    first = run_algorithm(Algorithm.A_STAR, grid)
    second = run_algorithm(Algorithm.A_STAR, grid)
    assert first == second


def test_run_algorithm_accepts_display_names():
    grid = Grid.create(1, 5, start=(0, 0), finish=(0, 4))
    assert run_algorithm("Breadth-first Search", grid).shortest_path_length == 4


def test_unknown_algorithm_fails_loudly():
    with pytest.raises(ValueError):
        run_algorithm("Bogo Search", Grid.create(3, 3))
