# src/gridpath/core/dfs.py
#!/usr/bin/env python3
"""
Depth-first Search.

Recursive descent written with an explicit stack of neighbor iterators, so
large open grids do not hit the interpreter's recursion limit. Visit order
matches the recursive form exactly: a node is marked visited on entry, its
unvisited neighbors are collected at entry time, and each one is descended
into (unless visited in the meantime) until the finish is entered.
"""

from typing import Iterator, List, Tuple

from gridpath.core.grid import Grid
from gridpath.core.types import Cell, Node, SearchResult

NAME = "Depth-first Search"


def depth_first_search(grid: Grid, start: Cell, finish: Cell) -> SearchResult:
    visited_in_order: List[Cell] = []

    def enter(node: Node) -> Iterator[Node]:
        node.visited = True
        visited_in_order.append(node.cell)
        return iter([n for n in grid.neighbors(node) if not n.visited])

    root = grid.node(start)
    root.distance = 0
    if start == finish:
        enter(root)
        return SearchResult(NAME, visited_in_order, [start], 0)

    stack: List[Tuple[Node, Iterator[Node]]] = [(root, enter(root))]
    while stack:
        node, pending = stack[-1]
        nb = next(pending, None)
        if nb is None:
            stack.pop()        # exhausted: backtrack
            continue
        if nb.visited:
            continue
        nb.previous = node.cell
        nb.distance = node.distance + 1
        children = enter(nb)
        if nb.cell == finish:
            path = grid.path_to(finish)
            return SearchResult(NAME, visited_in_order, path, grid.path_cost(path))
        stack.append((nb, children))

    return SearchResult(NAME, visited_in_order)
