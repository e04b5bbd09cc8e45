import time

import pytest

from gridpath.core.algorithms import Algorithm
from gridpath.core.controller import Controller, ResetMode, RunSummary
from gridpath.core.grid import Grid
from gridpath.core.scheduler import SchedulerState
from gridpath.core.terrain import WALL
from gridpath.core.types import RevealKind


class Recorder:
    def __init__(self):
        self.reveals = []
        self.completed = 0
        self.cleared = 0

    def reveal(self, cell, kind):
        self.reveals.append((cell, kind))

    def complete(self):
        self.completed += 1

    def clear(self):
        self.cleared += 1


@pytest.fixture
def rec():
    return Recorder()


def make(rec, rows=1, cols=5, algorithm=Algorithm.BFS, **kw):
    grid = Grid.create(rows, cols, start=(0, 0), finish=(0, cols - 1), **kw)
    return Controller(grid, algorithm=algorithm, on_reveal=rec.reveal,
                      on_complete=rec.complete, on_clear=rec.clear, clock=lambda: 0.0)


def test_start_runs_and_logs(rec):
    c = make(rec)
    summary = c.start()
    assert summary == RunSummary("Breadth-first Search", 4, 4)
    assert c.run_log == [summary]
    assert c.state is SchedulerState.RUNNING
    assert summary.describe() == "Breadth-first Search visited 4 nodes. Shortest Path Length: 4."


@pytest.mark.parametrize("algorithm", [Algorithm.DIJKSTRA, Algorithm.A_STAR])
def test_weighted_searches_report_total_cost(rec, algorithm):
    c = make(rec, rows=3, cols=5, algorithm=algorithm)
    c.paint((0, 2), "Grass")
    summary = c.start()
    assert summary.total_cost == 6
    # detour around the grass: six steps of weight 1 beat four steps through it (cost 8)
    assert summary.describe().endswith("Shortest Path Length: 6. Total Cost: 6.")


@pytest.mark.parametrize("algorithm", [Algorithm.BFS, Algorithm.DFS, Algorithm.GREEDY])
def test_unweighted_searches_omit_total_cost(rec, algorithm):
    summary = make(rec, algorithm=algorithm).start()
    assert summary.total_cost is None
    assert "Total Cost" not in summary.describe()


def test_reveals_visited_then_path(rec):
    c = make(rec)
    c.start()
    c.skip()
    visited = [(0, 1), (0, 2), (0, 3)]
    path = [(0, i) for i in range(5)]
    assert rec.reveals == ([(v, RevealKind.VISITED) for v in visited]
                           + [(p, RevealKind.ON_SHORTEST_PATH) for p in path])
    assert rec.completed == 1
    assert c.state is SchedulerState.DONE


def test_unreachable_summary(rec):
    c = make(rec, rows=3, cols=3)
    c.paint((0, 1), WALL)
    c.paint((1, 2), WALL)
    summary = c.start()
    assert summary.shortest_path_length is None
    assert summary.describe().endswith("Could not find the finish node.")


def test_edits_refused_while_animating(rec):
    c = make(rec, rows=3, cols=5)
    c.start()
    assert c.paint((1, 1)) is False
    assert c.press((1, 1)) is False
    assert c.move_start((2, 2)) is False
    c.pause()
    assert c.move_finish((2, 2)) is False
    assert c.start() is None
    c.skip()
    assert c.paint((1, 1)) is True
    assert c.grid.node((1, 1)).terrain == WALL


def test_run_log_is_appended(rec):
    c = make(rec)
    c.start()
    c.skip()
    c.select_algorithm(Algorithm.DIJKSTRA)
    c.start()
    assert [s.algorithm for s in c.run_log] == ["Breadth-first Search", "Dijkstra's Algorithm"]
    assert rec.cleared == 1     # second start wiped the first run's overlay


def test_restart_replays_without_rerunning(rec):
    c = make(rec)
    c.start()
    c.skip()
    first = list(rec.reveals)
    assert c.restart()
    c.skip()
    assert rec.reveals == first + first
    assert len(c.run_log) == 1


def test_restart_reruns_after_terrain_change(rec):
    c = make(rec, rows=3, cols=5)
    c.start()
    c.skip()
    c.paint((0, 2), "Mud")
    assert c.restart()
    assert len(c.run_log) == 2


def test_restart_reruns_after_weight_change(rec):
    c = make(rec, rows=3, cols=5, algorithm=Algorithm.DIJKSTRA)
    c.paint((0, 2), "Grass")
    c.start()
    c.skip()
    assert c.set_weight("Grass", 1)
    assert c.grid.node((0, 2)).weight == 1
    c.restart()
    assert len(c.run_log) == 2


def test_restart_before_any_run(rec):
    assert make(rec).restart() is False


def test_reset_modes(rec):
    c = make(rec, rows=3, cols=5)
    c.paint((1, 1), WALL)
    c.paint((1, 2), "Sand")
    c.start()

    c.reset(ResetMode.RESET)
    assert c.state is SchedulerState.IDLE
    assert c.grid.node((1, 1)).terrain == WALL
    assert not any(n.visited for n in c.grid.nodes())

    c.reset("Remove Walls")
    assert c.grid.node((1, 1)).terrain is None
    assert c.grid.node((1, 2)).terrain == "Sand"

    c.reset(ResetMode.CLEAR_GRID)
    assert c.grid.node((1, 2)).terrain is None
    assert rec.cleared == 3


def test_unknown_reset_mode(rec):
    with pytest.raises(ValueError):
        make(rec).reset("Shuffle")


def test_drag_start_node(rec):
    c = make(rec, rows=3, cols=5)
    assert c.press((0, 0))
    assert c.enter((1, 0))
    assert c.enter((1, 1))
    c.release()
    assert c.grid.start == (1, 1)
    assert c.grid.node((0, 0)).terrain is None
    assert c.enter((2, 2)) is False   # not pressed any more


def test_drag_finish_skips_walls(rec):
    c = make(rec, rows=3, cols=5)
    c.paint((1, 4), WALL)
    c.press((0, 4))
    assert c.enter((1, 4)) is False
    assert c.grid.finish == (0, 4)
    c.release()


def test_paint_stroke(rec):
    c = make(rec, rows=3, cols=5)
    c.select_terrain("Water")
    c.press((1, 1))
    c.enter((1, 2))
    c.enter((0, 0))              # start node is skipped
    c.release()
    assert c.grid.node((1, 1)).terrain == "Water"
    assert c.grid.node((1, 2)).terrain == "Water"
    assert c.grid.node((0, 0)).terrain is None


def test_paint_stroke_clears_typed_cells(rec):
    c = make(rec, rows=3, cols=5)
    c.paint((0, 2), "Mud")
    c.paint((1, 2), "Sand")
    c.select_terrain(WALL)
    assert c.press((0, 2))
    assert c.enter((1, 2))
    assert c.enter((2, 2))
    c.release()
    for cell in [(0, 2), (1, 2)]:
        assert c.grid.node(cell).terrain is None
        assert c.grid.node(cell).weight == 1
    assert c.grid.node((2, 2)).terrain == WALL


def test_selection_errors(rec):
    c = make(rec)
    with pytest.raises(ValueError):
        c.select_algorithm("Bogo Search")
    with pytest.raises(KeyError):
        c.select_terrain("Lava")


def test_clock_defaults_to_monotonic():
    assert Controller(Grid.create(1, 5)).scheduler.clock is time.monotonic
    fake = lambda: 42.0
    assert Controller(Grid.create(1, 5), clock=fake).scheduler.clock is fake
