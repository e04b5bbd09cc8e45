# src/gridpath/core/greedy.py
#!/usr/bin/env python3
from gridpath.core.best_first import best_first_search
from gridpath.core.grid import Grid
from gridpath.core.types import Cell, SearchResult

NAME = "Greedy Best-first Search"


def greedy_best_first_search(grid: Grid, start: Cell, finish: Cell) -> SearchResult:
    # greedy: f = h only, accumulated cost does not steer the search
    return best_first_search(grid, start, finish, priority=lambda g, h: h, name=NAME)
