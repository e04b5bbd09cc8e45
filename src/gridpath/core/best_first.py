# src/gridpath/core/best_first.py
#!/usr/bin/env python3
"""
Heuristic best-first loop shared by A* and Greedy Best-first Search.

Both relax neighbors on g (cost so far) improvement; they differ only in the
priority key used to order the open list:
- A*:     f = g + h
- Greedy: f = h

Heuristic: Manhattan distance to the finish. Every weight is >= 1, so it
never overestimates on a 4-connected grid.

PQ entries are (f, seq, cell): lower f first, then FIFO by seq.
"""

import heapq
import itertools
from typing import Callable, List, Tuple

from gridpath.core.grid import Grid
from gridpath.core.types import Cell, SearchResult, manhattan

Priority = Callable[[float, float], float]   # (g, h) -> f


def best_first_search(grid: Grid, start: Cell, finish: Cell,
                      priority: Priority, name: str) -> SearchResult:
    visited_in_order: List[Cell] = []
    seq = itertools.count()
    open_pq: List[Tuple[float, int, Cell]] = []

    s = grid.node(start)
    s.distance = 0
    s.heuristic = manhattan(start, finish)
    s.f_score = priority(s.distance, s.heuristic)
    heapq.heappush(open_pq, (s.f_score, next(seq), start))

    while open_pq:
        _, _, u = heapq.heappop(open_pq)
        node = grid.node(u)
        if node.visited:
            continue   # stale duplicate

        node.visited = True
        visited_in_order.append(u)

        if u == finish:
            return SearchResult(name, visited_in_order, grid.path_to(finish), node.distance)

        for v in grid.neighbors(node):
            if v.visited:
                continue
            alt = node.distance + v.weight
            if alt < v.distance:
                v.distance = alt
                v.heuristic = manhattan(v.cell, finish)
                v.f_score = priority(alt, v.heuristic)
                v.previous = u
                heapq.heappush(open_pq, (v.f_score, next(seq), v.cell))

    return SearchResult(name, visited_in_order)
