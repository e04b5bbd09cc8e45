# src/gridpath/core/scheduler.py
#!/usr/bin/env python3
"""
Animation scheduler: replays a search result as discrete reveal steps.

The host loop calls update() every frame (the viewer does this from its
pygame loop); every step whose deadline has passed is executed through the
on_step callback. States:

    IDLE -> RUNNING -> (PAUSED <-> RUNNING) -> DONE
    cancel(): RUNNING / PAUSED / DONE -> IDLE

All transitions are guarded by the current state and return True when they
happened; calling one in the wrong state is a no-op.
"""

import logging
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from gridpath.core.types import AnimationStep, Cell, RevealKind, SearchResult

logger = logging.getLogger(__name__)

# speed multiplier -> (visited reveal delay, path reveal delay) in ms
SPEEDS: Dict[float, Tuple[float, float]] = {
    0.25: (40.0, 200.0),
    0.5: (20.0, 100.0),
    1.0: (10.0, 50.0),
    2.0: (5.0, 25.0),
    4.0: (2.5, 12.5),
}
DEFAULT_SPEED = 1.0


class SchedulerState(Enum):
    IDLE = "Idle"
    RUNNING = "Running"
    PAUSED = "Paused"
    DONE = "Done"


def build_steps(result: SearchResult) -> List[AnimationStep]:
    """Visited reveals in trace order (minus start and finish), then the path."""
    trace = result.visited_nodes_in_order
    start: Optional[Cell] = trace[0] if trace else None
    finish: Optional[Cell] = result.shortest_path[-1] if result.shortest_path else None
    steps = [AnimationStep(c, RevealKind.VISITED) for c in trace[1:] if c != finish and c != start]
    steps.extend(AnimationStep(c, RevealKind.ON_SHORTEST_PATH) for c in result.shortest_path)
    return steps


class AnimationScheduler:
    def __init__(self, on_step: Callable[[AnimationStep], None],
                 on_complete: Optional[Callable[[], None]] = None,
                 clock: Callable[[], float] = time.monotonic,
                 speed: float = DEFAULT_SPEED):
        self.on_step = on_step
        self.on_complete = on_complete
        self.clock = clock                  # seconds
        self.state = SchedulerState.IDLE
        self.steps: List[AnimationStep] = []
        self.current_step = 0
        self._next_due: Optional[float] = None
        self.speed = DEFAULT_SPEED
        self.set_speed(speed)

    # -------------------- queries --------------------

    @property
    def is_active(self) -> bool:
        """True while an animation is in progress (grid edits should be refused)."""
        return self.state in (SchedulerState.RUNNING, SchedulerState.PAUSED)

    @property
    def remaining(self) -> int:
        return len(self.steps) - self.current_step

    def delay_for(self, step: AnimationStep) -> float:
        """Seconds to wait after executing step, at the current speed."""
        visited_ms, path_ms = SPEEDS[self.speed]
        ms = path_ms if step.kind is RevealKind.ON_SHORTEST_PATH else visited_ms
        return ms / 1000.0

    # -------------------- transport --------------------

    def start(self, source: Union[SearchResult, Sequence[AnimationStep]]) -> bool:
        if self.is_active:
            return False
        steps = build_steps(source) if isinstance(source, SearchResult) else list(source)
        self.steps = steps
        self.current_step = 0
        self._set_state(SchedulerState.RUNNING)
        self._next_due = self.clock()
        if not self.steps:
            self._finish()
        return True

    def pause(self) -> bool:
        if self.state is not SchedulerState.RUNNING:
            return False
        self._next_due = None
        self._set_state(SchedulerState.PAUSED)
        return True

    def resume(self) -> bool:
        if self.state is not SchedulerState.PAUSED:
            return False
        self._set_state(SchedulerState.RUNNING)
        self._next_due = self.clock()
        return True

    def restart(self, steps: Optional[Sequence[AnimationStep]] = None) -> bool:
        """Cancel and replay from step 0; steps=None replays the current list."""
        replay = list(steps) if steps is not None else list(self.steps)
        if self.state is SchedulerState.IDLE and steps is None:
            return False
        self.cancel()
        return self.start(replay)

    def skip(self) -> int:
        """Execute every remaining step now. Returns how many were executed."""
        if not self.is_active:
            return 0
        executed = 0
        while self.is_active and self.current_step < len(self.steps):
            self._execute()
            executed += 1
        if self.is_active:
            self._finish()
        return executed

    def cancel(self) -> bool:
        """Drop the step list. Reveals already applied are not reverted."""
        if self.state is SchedulerState.IDLE:
            return False
        self.steps = []
        self.current_step = 0
        self._next_due = None
        self._set_state(SchedulerState.IDLE)
        return True

    def set_speed(self, speed: float) -> None:
        """Takes effect from the next scheduled tick; the pending one keeps its deadline."""
        if speed not in SPEEDS:
            raise ValueError(f"unsupported speed {speed!r}, expected one of {sorted(SPEEDS)}")
        self.speed = speed

    # -------------------- ticking --------------------

    def tick(self) -> bool:
        """Execute exactly the current step while RUNNING and schedule the next one."""
        if self.state is not SchedulerState.RUNNING:
            return False
        step = self._execute()
        if self.state is not SchedulerState.RUNNING:
            return True
        if self.current_step >= len(self.steps):
            self._finish()
        else:
            self._next_due = self.clock() + self.delay_for(step)
        return True

    def step_once(self) -> bool:
        """Single step while PAUSED; stays paused unless that was the last step."""
        if self.state is not SchedulerState.PAUSED:
            return False
        self._execute()
        if self.state is SchedulerState.PAUSED and self.current_step >= len(self.steps):
            self._finish()
        return True

    def update(self, now: Optional[float] = None) -> int:
        """Run every step that is due by `now`. Returns how many were executed."""
        if self.state is not SchedulerState.RUNNING or self._next_due is None:
            return 0
        now = self.clock() if now is None else now
        executed = 0
        while self.state is SchedulerState.RUNNING and self._next_due is not None and now >= self._next_due:
            due = self._next_due
            step = self._execute()
            executed += 1
            if self.state is not SchedulerState.RUNNING:
                break      # on_step paused or cancelled playback
            if self.current_step >= len(self.steps):
                self._finish()
                break
            # deadlines chain from the previous deadline, not from now
            self._next_due = due + self.delay_for(step)
        return executed

    # -------------------- internals --------------------

    def _execute(self) -> AnimationStep:
        step = self.steps[self.current_step]
        self.current_step += 1
        self.on_step(step)
        return step

    def _finish(self) -> None:
        self._next_due = None
        self._set_state(SchedulerState.DONE)
        if self.on_complete is not None:
            self.on_complete()

    def _set_state(self, state: SchedulerState) -> None:
        if state is not self.state:
            logger.debug("scheduler %s -> %s (step %d/%d)", self.state.value, state.value,
                         self.current_step, len(self.steps))
        self.state = state
