# src/gridpath/core/astar.py
#!/usr/bin/env python3
"""
A*: weighted shortest path guided by the Manhattan heuristic.

Priority is f = g + h; relaxation still compares g, so the first time the
finish is popped its g is optimal.
"""

from gridpath.core.best_first import best_first_search
from gridpath.core.grid import Grid
from gridpath.core.types import Cell, SearchResult

NAME = "A* Search"


def a_star_search(grid: Grid, start: Cell, finish: Cell) -> SearchResult:
    return best_first_search(grid, start, finish, priority=lambda g, h: g + h, name=NAME)
