# src/gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, Tuple, Optional

Cell = Tuple[int, int]  # (row, col)


class Role(Enum):
    NORMAL = "normal"
    START = "start"
    FINISH = "finish"


class RevealKind(Enum):
    VISITED = "visited"
    ON_SHORTEST_PATH = "shortest_path"


@dataclass
class Node:
    row: int
    col: int
    role: Role = Role.NORMAL
    terrain: Optional[str] = None      # None -> default passable terrain
    weight: float = 1

    # search scratch, owned by whichever algorithm runs next
    visited: bool = False
    distance: float = inf              # g
    heuristic: float = 0               # h
    f_score: float = inf
    previous: Optional[Cell] = None    # back-link for path reconstruction only

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)

    def reset_scratch(self) -> None:
        self.visited = False
        self.distance = inf
        self.heuristic = 0
        self.f_score = inf
        self.previous = None


@dataclass
class SearchResult:
    algorithm: str
    visited_nodes_in_order: List[Cell] = field(default_factory=list)
    shortest_path: List[Cell] = field(default_factory=list)
    total_cost: Optional[float] = None   # weighted cost of shortest_path

    @property
    def num_nodes_visited(self) -> int:
        # start node is not counted
        return max(0, len(self.visited_nodes_in_order) - 1)

    @property
    def shortest_path_length(self) -> int:
        return max(0, len(self.shortest_path) - 1)

    @property
    def found(self) -> bool:
        return bool(self.shortest_path)


@dataclass(frozen=True)
class AnimationStep:
    cell: Cell
    kind: RevealKind


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
