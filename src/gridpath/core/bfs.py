# src/gridpath/core/bfs.py
#!/usr/bin/env python3
from collections import deque
from typing import Deque, List

from gridpath.core.grid import Grid
from gridpath.core.types import Cell, Node, SearchResult

NAME = "Breadth-first Search"


def breadth_first_search(grid: Grid, start: Cell, finish: Cell) -> SearchResult:
    """Unweighted BFS. Nodes are marked visited when queued so each is queued once."""
    visited_in_order: List[Cell] = []
    first = grid.node(start)
    first.visited = True
    first.distance = 0
    queue: Deque[Node] = deque([first])

    while queue:
        node = queue.popleft()
        visited_in_order.append(node.cell)
        if node.cell == finish:
            path = grid.path_to(finish)
            # weights were ignored while searching; report what the path costs
            return SearchResult(NAME, visited_in_order, path, grid.path_cost(path))

        for nb in grid.neighbors(node):
            if nb.visited:
                continue
            nb.visited = True
            nb.distance = node.distance + 1
            nb.previous = node.cell
            queue.append(nb)

    return SearchResult(NAME, visited_in_order)
