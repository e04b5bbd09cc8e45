# src/gridpath/core/grid.py
#!/usr/bin/env python3
"""
Grid model: the node array plus the Start/Finish designation.

Start and Finish coordinates live on the Grid instance; algorithms receive
them explicitly. Every mutator returns True when applied, False when it was
rejected as an invalid edit (e.g. painting over Start).
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from gridpath.core.terrain import NodeTypeTable, WALL
from gridpath.core.types import Cell, Node, Role

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 20
DEFAULT_COLS = 50

# up, down, left, right. Every algorithm expands in this order.
NEIGHBOR_OFFSETS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _spread(n: int) -> Tuple[int, int]:
    """Two distinct indices at ~25% / ~75% of n, off the boundary when n allows."""
    a, b = n // 4, (3 * n) // 4
    if n >= 3:
        a, b = max(a, 1), min(b, n - 2)
    if a == b:
        a, b = 0, n - 1
    return a, b


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[Node]]            # [row][col]
    start: Cell
    finish: Cell
    table: NodeTypeTable = field(default_factory=NodeTypeTable)
    revision: int = 0                  # bumped by every terrain/placement change
    # terrain that was under Start/Finish before they were placed there
    _under_start: Optional[str] = None
    _under_finish: Optional[str] = None

    # -------------------- construction --------------------

    @classmethod
    def create(cls, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
               table: Optional[NodeTypeTable] = None,
               start: Optional[Cell] = None, finish: Optional[Cell] = None) -> "Grid":
        if rows < 1 or cols < 1 or rows * cols < 2:
            raise ValueError(f"grid must hold at least two cells, got {rows}x{cols}")

        if cols >= 2:
            sc, fc = _spread(cols)
            default_start, default_finish = (rows // 2, sc), (rows // 2, fc)
        else:
            sr, fr = _spread(rows)
            default_start, default_finish = (sr, 0), (fr, 0)
        start = tuple(start) if start is not None else default_start
        finish = tuple(finish) if finish is not None else default_finish

        for c in (start, finish):
            if not (0 <= c[0] < rows and 0 <= c[1] < cols):
                raise ValueError(f"{c} is outside a {rows}x{cols} grid")
        if start == finish:
            raise ValueError("start and finish must differ")

        cells = [[Node(r, c) for c in range(cols)] for r in range(rows)]
        cells[start[0]][start[1]].role = Role.START
        cells[finish[0]][finish[1]].role = Role.FINISH
        grid = cls(rows, cols, cells, start, finish, table if table is not None else NodeTypeTable())
        logger.debug("created %dx%d grid, start=%s finish=%s", rows, cols, start, finish)
        return grid

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def node(self, c: Cell) -> Node:
        if not self.in_bounds(c):
            raise IndexError(f"{c} is outside a {self.rows}x{self.cols} grid")
        return self.cells[c[0]][c[1]]

    def nodes(self) -> Iterator[Node]:
        for row in self.cells:
            yield from row

    def is_blocking(self, c: Cell) -> bool:
        return self.table.is_blocking(self.node(c).terrain)

    def neighbors(self, node: Node) -> List[Node]:
        """In-bounds, non-blocking 4-neighbors in NEIGHBOR_OFFSETS order."""
        out: List[Node] = []
        for dr, dc in NEIGHBOR_OFFSETS:
            n = (node.row + dr, node.col + dc)
            if self.in_bounds(n) and not self.is_blocking(n):
                out.append(self.cells[n[0]][n[1]])
        return out

    # -------------------- terrain edits --------------------

    def set_terrain(self, c: Cell, terrain: Optional[str]) -> bool:
        """Paint a cell. Painting over any typed cell clears it back to default."""
        node = self.node(c)
        if node.role is not Role.NORMAL:
            logger.debug("set_terrain rejected on %s cell %s", node.role.value, c)
            return False
        if terrain is not None and terrain not in self.table:
            raise KeyError(terrain)
        if terrain is not None and node.terrain is not None:
            terrain = None
        node.terrain = terrain
        node.weight = self.table.weight_of(terrain)
        self.revision += 1
        return True

    def clear_terrain(self) -> None:
        self._bulk_clear(lambda t: True)

    def remove_walls(self) -> None:
        self._bulk_clear(lambda t: t == WALL)

    def _bulk_clear(self, match) -> None:
        for node in self.nodes():
            if node.terrain is not None and match(node.terrain):
                node.terrain = None
                node.weight = self.table.weight_of(None)
        # remembered terrain under the special nodes goes too
        if self._under_start is not None and match(self._under_start):
            self._under_start = None
        if self._under_finish is not None and match(self._under_finish):
            self._under_finish = None
        self.revision += 1

    def recompute_weights(self, table: Optional[NodeTypeTable] = None) -> None:
        if table is not None:
            self.table = table
        for node in self.nodes():
            node.weight = self.table.weight_of(node.terrain)
        self.revision += 1

    # -------------------- start / finish --------------------

    def move_start(self, c: Cell) -> bool:
        return self._move_special(Role.START, c)

    def move_finish(self, c: Cell) -> bool:
        return self._move_special(Role.FINISH, c)

    def _move_special(self, role: Role, c: Cell) -> bool:
        c = tuple(c)
        dest = self.node(c)
        old = self.start if role is Role.START else self.finish
        if c == old:
            return False
        if dest.role is not Role.NORMAL or self.is_blocking(c):
            logger.debug("move %s rejected onto %s", role.value, c)
            return False

        vacated = self.node(old)
        vacated.role = Role.NORMAL
        vacated.terrain = self._under_start if role is Role.START else self._under_finish
        vacated.weight = self.table.weight_of(vacated.terrain)

        under = dest.terrain
        dest.role = role
        dest.terrain = None
        dest.weight = self.table.weight_of(None)
        if role is Role.START:
            self.start, self._under_start = c, under
        else:
            self.finish, self._under_finish = c, under
        self.revision += 1
        return True

    # -------------------- search scratch --------------------

    def reset_scratch(self) -> None:
        for node in self.nodes():
            node.reset_scratch()

    def path_to(self, end: Cell) -> List[Cell]:
        """Follow `previous` back-links from end; [] if end was never reached."""
        if not self.node(end).visited:
            return []
        path: List[Cell] = []
        cur: Optional[Cell] = end
        while cur is not None:
            path.append(cur)
            cur = self.node(cur).previous
        path.reverse()
        return path

    def path_cost(self, path: List[Cell]) -> float:
        """Weighted cost of walking path; entering a cell costs its weight."""
        return sum(self.node(c).weight for c in path[1:])
