# src/gridpath/core/algorithms.py
#!/usr/bin/env python3
"""
Closed set of search algorithms, all with the signature
(grid, start, finish) -> SearchResult.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Union

from gridpath.core import astar, bfs, dfs, dijkstra, greedy
from gridpath.core.grid import Grid
from gridpath.core.types import Cell, SearchResult

logger = logging.getLogger(__name__)

SearchFn = Callable[[Grid, Cell, Cell], SearchResult]


class Algorithm(Enum):
    DIJKSTRA = dijkstra.NAME
    A_STAR = astar.NAME
    GREEDY = greedy.NAME
    BFS = bfs.NAME
    DFS = dfs.NAME


ALGORITHMS: Dict[Algorithm, SearchFn] = {
    Algorithm.DIJKSTRA: dijkstra.dijkstra,
    Algorithm.A_STAR: astar.a_star_search,
    Algorithm.GREEDY: greedy.greedy_best_first_search,
    Algorithm.BFS: bfs.breadth_first_search,
    Algorithm.DFS: dfs.depth_first_search,
}
assert set(ALGORITHMS) == set(Algorithm), "every Algorithm needs a search function"


def run_algorithm(algorithm: Union[Algorithm, str], grid: Grid) -> SearchResult:
    """Reset scratch state and run one search to completion on grid."""
    algorithm = Algorithm(algorithm)   # unknown names raise ValueError
    grid.reset_scratch()
    result = ALGORITHMS[algorithm](grid, grid.start, grid.finish)
    logger.debug("%s: visited=%d path_len=%d found=%s", algorithm.value,
                 result.num_nodes_visited, result.shortest_path_length, result.found)
    return result
