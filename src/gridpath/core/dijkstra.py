# src/gridpath/core/dijkstra.py
#!/usr/bin/env python3

import heapq
import itertools
import logging
from typing import List, Tuple

from gridpath.core.grid import Grid
from gridpath.core.types import Cell, SearchResult

logger = logging.getLogger(__name__)

NAME = "Dijkstra's Algorithm"


def dijkstra(grid: Grid, start: Cell, finish: Cell) -> SearchResult:
    """
    Weighted shortest path. Entering a cell costs that cell's weight.

    PQ entries are (g, seq, cell); seq keeps equal-g pops in insertion order.
    Improved cells are pushed again and the stale entry is skipped when it
    surfaces (lazy deletion), so there is no decrease-key.
    """
    visited_in_order: List[Cell] = []
    seq = itertools.count()
    open_pq: List[Tuple[float, int, Cell]] = []

    s = grid.node(start)
    s.distance = 0
    heapq.heappush(open_pq, (0, next(seq), start))
    stale = 0

    while open_pq:
        g_u, _, u = heapq.heappop(open_pq)
        node = grid.node(u)
        if node.visited:
            stale += 1
            continue

        node.visited = True
        visited_in_order.append(u)

        # stop when the finish is popped, not when it is first pushed
        if u == finish:
            logger.debug("dijkstra: %d stale pops skipped", stale)
            return SearchResult(NAME, visited_in_order, grid.path_to(finish), node.distance)

        for v in grid.neighbors(node):
            if v.visited:
                continue
            alt = g_u + v.weight
            if alt < v.distance:
                v.distance = alt
                v.f_score = alt
                v.previous = u
                heapq.heappush(open_pq, (alt, next(seq), v.cell))

    return SearchResult(NAME, visited_in_order)
