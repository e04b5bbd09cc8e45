# src/gridpath/core/controller.py
#!/usr/bin/env python3
"""
Interaction controller: the boundary between a presentation layer and the engine.

- Grid edits (paint strokes, dragging Start/Finish) are refused while an
  animation is RUNNING or PAUSED.
- Transport: start / pause / resume / restart / skip / reset(mode).
- Every run appends a RunSummary to run_log.

Rendering is delegated through three callbacks:
    on_reveal(cell, kind)   one animation step
    on_complete()           playback finished
    on_clear()              visual overlays must be wiped (reset / restart)
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from gridpath.core.algorithms import Algorithm, run_algorithm
from gridpath.core.grid import Grid
from gridpath.core.scheduler import AnimationScheduler, DEFAULT_SPEED, SchedulerState, build_steps
from gridpath.core.terrain import NodeTypeTable, WALL
from gridpath.core.types import AnimationStep, Cell, RevealKind, Role, SearchResult

logger = logging.getLogger(__name__)

# searches whose path is cost-optimal; only these report a total cost
WEIGHTED = frozenset({Algorithm.DIJKSTRA.value, Algorithm.A_STAR.value})


class ResetMode(Enum):
    RESET = "Reset"
    CLEAR_GRID = "Clear Grid"
    REMOVE_WALLS = "Remove Walls"


@dataclass(frozen=True)
class RunSummary:
    algorithm: str
    num_nodes_visited: int
    shortest_path_length: Optional[int]       # None -> unreachable
    total_cost: Optional[float] = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "RunSummary":
        if not result.found:
            return cls(result.algorithm, result.num_nodes_visited, None)
        cost = result.total_cost if result.algorithm in WEIGHTED else None
        return cls(result.algorithm, result.num_nodes_visited, result.shortest_path_length, cost)

    def describe(self) -> str:
        text = f"{self.algorithm} visited {self.num_nodes_visited} nodes. "
        if self.shortest_path_length is None:
            return text + "Could not find the finish node."
        text += f"Shortest Path Length: {self.shortest_path_length}."
        if self.total_cost is not None:
            text += f" Total Cost: {self.total_cost:g}."
        return text


RevealFn = Callable[[Cell, RevealKind], None]


class Controller:
    def __init__(self, grid: Optional[Grid] = None,
                 algorithm: Union[Algorithm, str] = Algorithm.DIJKSTRA,
                 on_reveal: Optional[RevealFn] = None,
                 on_complete: Optional[Callable[[], None]] = None,
                 on_clear: Optional[Callable[[], None]] = None,
                 clock: Optional[Callable[[], float]] = None,
                 speed: float = DEFAULT_SPEED):
        self.grid = grid if grid is not None else Grid.create()
        self.algorithm = Algorithm(algorithm)
        self.selected_terrain: str = WALL
        self.run_log: List[RunSummary] = []
        self.last_result: Optional[SearchResult] = None
        self.on_reveal = on_reveal
        self.on_complete = on_complete
        self.on_clear = on_clear

        self.scheduler = AnimationScheduler(self._reveal, self._completed,
                                            clock=clock or time.monotonic, speed=speed)

        self._result_revision: Optional[int] = None    # grid.revision the last run used
        self._result_algorithm: Optional[Algorithm] = None
        # drag state
        self._pressed = False
        self._dragging: Optional[Role] = None

    # -------------------- properties --------------------

    @property
    def table(self) -> NodeTypeTable:
        return self.grid.table

    @property
    def state(self) -> SchedulerState:
        return self.scheduler.state

    @property
    def editable(self) -> bool:
        return not self.scheduler.is_active

    # -------------------- selection --------------------

    def select_algorithm(self, algorithm: Union[Algorithm, str]) -> None:
        self.algorithm = Algorithm(algorithm)

    def select_terrain(self, name: str) -> None:
        if name not in self.table:
            raise KeyError(name)
        self.selected_terrain = name

    def set_weight(self, name: str, weight: float) -> bool:
        """Edit the node-type table; affected nodes get their weight recomputed."""
        if not self.table.set_weight(name, weight):
            return False
        self.grid.recompute_weights()
        return True

    def set_speed(self, speed: float) -> None:
        self.scheduler.set_speed(speed)

    # -------------------- grid edits --------------------

    def paint(self, cell: Cell, terrain: Optional[str] = None) -> bool:
        if not self.editable:
            logger.debug("edit refused while %s", self.state.value)
            return False
        return self.grid.set_terrain(cell, terrain if terrain is not None else self.selected_terrain)

    def move_start(self, cell: Cell) -> bool:
        return self.editable and self.grid.move_start(cell)

    def move_finish(self, cell: Cell) -> bool:
        return self.editable and self.grid.move_finish(cell)

    def press(self, cell: Cell) -> bool:
        """Pointer pressed on cell: grab Start/Finish, or begin a paint stroke."""
        if not self.editable:
            return False
        self._pressed = True
        role = self.grid.node(cell).role
        if role is not Role.NORMAL:
            self._dragging = role
            return True
        return self.grid.set_terrain(cell, self.selected_terrain)

    def enter(self, cell: Cell) -> bool:
        """Pointer moved onto cell while pressed."""
        if not self._pressed or not self.editable:
            return False
        if self._dragging is Role.START:
            return self.grid.move_start(cell)
        if self._dragging is Role.FINISH:
            return self.grid.move_finish(cell)
        if self.grid.node(cell).role is not Role.NORMAL:
            return False
        return self.grid.set_terrain(cell, self.selected_terrain)

    def release(self) -> None:
        self._pressed = False
        self._dragging = None

    # -------------------- transport --------------------

    def start(self) -> Optional[RunSummary]:
        """Run the selected algorithm and begin playback. None if already animating."""
        if self.scheduler.is_active:
            return None
        if self.state is SchedulerState.DONE:
            self._clear_visuals()
        result = self._run()
        self.scheduler.start(result)
        return self.run_log[-1]

    def pause(self) -> bool:
        return self.scheduler.pause()

    def resume(self) -> bool:
        return self.scheduler.resume()

    def step_once(self) -> bool:
        return self.scheduler.step_once()

    def skip(self) -> int:
        return self.scheduler.skip()

    def update(self, now: Optional[float] = None) -> int:
        return self.scheduler.update(now)

    def restart(self) -> bool:
        """Replay from step 0; rerun the search only if the grid or algorithm changed."""
        if self.last_result is None:
            return False
        self._clear_visuals()
        steps = None
        if self._result_revision != self.grid.revision or self._result_algorithm is not self.algorithm:
            steps = build_steps(self._run())
        return self.scheduler.restart(steps)

    def reset(self, mode: Union[ResetMode, str] = ResetMode.RESET) -> None:
        mode = ResetMode(mode)    # unknown modes raise ValueError
        self.scheduler.cancel()
        self.release()
        if mode is ResetMode.CLEAR_GRID:
            self.grid.clear_terrain()
        elif mode is ResetMode.REMOVE_WALLS:
            self.grid.remove_walls()
        self.grid.reset_scratch()
        self.last_result = None
        self._result_revision = None
        self._clear_visuals()
        logger.debug("grid reset (%s)", mode.value)

    # -------------------- internals --------------------

    def _run(self) -> SearchResult:
        result = run_algorithm(self.algorithm, self.grid)
        self.last_result = result
        self._result_revision = self.grid.revision
        self._result_algorithm = self.algorithm
        summary = RunSummary.from_result(result)
        self.run_log.append(summary)
        logger.info(summary.describe())
        return result

    def _reveal(self, step: AnimationStep) -> None:
        if self.on_reveal is not None:
            self.on_reveal(step.cell, step.kind)

    def _completed(self) -> None:
        if self.on_complete is not None:
            self.on_complete()

    def _clear_visuals(self) -> None:
        if self.on_clear is not None:
            self.on_clear()
