"""
runner.py — Single-Run State Machine
=====================================
A Runner owns one search for one (grid, start, goal) and drives it a
single expansion per ``step()``.  It is what the renderer reads between
frames.

State machine:
    construct()          →  RUNNING
    RUNNING  → step()    →  RUNNING   (one expansion, counters updated)
    RUNNING  → step()    →  DONE      (search found goal or ran dry)
    DONE     → step()    →  DONE      (no-op)

On entering DONE the elapsed time is frozen and, if the goal was popped,
the path is reconstructed.  "No path" is an outcome, not an exception.

Starting another run means building another Runner; the old one is
simply dropped.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from grid import Cell, Grid
from algorithms import (
    AlgorithmKind,
    Snapshot,
    SearchStatus,
    create_search,
    get_algorithm,
    path_length,
    reconstruct_path,
    resolve_kind,
)

logger = logging.getLogger(__name__)


class InvalidConfigurationError(ValueError):
    """Start or goal does not lie on the grid."""


class RunnerState(Enum):
    RUNNING = "running"
    DONE    = "done"


class RunOutcome(Enum):
    RUNNING = "running"
    FOUND   = "found"
    NO_PATH = "no_path"


# ---------------------------------------------------------------------------
# Metrics dataclass — what the stats panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    expanded:      int   = 0          # size of the visited set
    frontier_size: int   = 0
    steps_taken:   int   = 0          # advance() calls, stale pops included
    path_length:   int   = 0          # edges on the final path
    path_found:    bool  = False
    done:          bool  = False
    elapsed_ms:    float = 0.0


class Runner:
    """
    Attributes:
        kind        : AlgorithmKind being run.
        grid        : The Grid this run searches (start / goal forced open).
        start, goal : Endpoints.
        state       : RunnerState.
        snapshot    : Most recent Snapshot (an empty one before the first step).
        path        : Start → goal cells once DONE and found, else None.
        steps_taken : Number of step() calls that advanced the search.
    """

    def __init__(
        self,
        kind: Union[AlgorithmKind, str],
        grid: Grid,
        start: Cell,
        goal: Cell,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.kind = resolve_kind(kind)
        for name, cell in (("start", start), ("goal", goal)):
            if not grid.in_bounds(cell):
                raise InvalidConfigurationError(
                    f"{name} {cell} is outside the {grid.rows}x{grid.cols} grid"
                )

        self.grid:  Grid = grid.opened(start, goal)
        self.start: Cell = start
        self.goal:  Cell = goal
        self.state: RunnerState = RunnerState.RUNNING
        self.snapshot: Snapshot = Snapshot()
        self.path: Optional[List[Cell]] = None
        self.steps_taken: int = 0

        self._search = create_search(self.kind, self.grid, start, goal)
        self._clock  = clock
        self._started_at: float = clock()
        self._elapsed_ms: Optional[float] = None

        logger.debug("run started: %s %s -> %s on %r", self.kind.value, start, goal, self.grid)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def step(self) -> Snapshot:
        """Advance one expansion; a no-op once DONE."""
        if self.done:
            return self.snapshot

        self.snapshot = self._search.advance()
        self.steps_taken += 1

        if self.snapshot.is_final:
            self._finish()
        return self.snapshot

    def run_to_completion(self, max_steps: Optional[int] = None) -> Snapshot:
        """Step until DONE (or `max_steps` more steps have been taken)."""
        taken = 0
        while not self.done and (max_steps is None or taken < max_steps):
            self.step()
            taken += 1
        return self.snapshot

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def done(self) -> bool:
        return self.state is RunnerState.DONE

    @property
    def outcome(self) -> RunOutcome:
        if not self.done:
            return RunOutcome.RUNNING
        return RunOutcome.FOUND if self.path is not None else RunOutcome.NO_PATH

    @property
    def expanded(self) -> int:
        return len(self.snapshot.visited)

    @property
    def frontier_size(self) -> int:
        return len(self.snapshot.frontier)

    @property
    def path_length(self) -> int:
        return path_length(self.path)

    @property
    def elapsed_ms(self) -> float:
        """Live while running; frozen at the moment the run finished."""
        if self._elapsed_ms is not None:
            return self._elapsed_ms
        return max(0.0, (self._clock() - self._started_at) * 1000)

    def scores(self) -> Optional[List[Dict[str, object]]]:
        """The g / h / f table of a cost-tracking search (A*); None otherwise."""
        scores = getattr(self._search, "scores", None)
        return scores() if scores is not None else None

    def metrics(self) -> RunMetrics:
        info = get_algorithm(self.kind)
        return RunMetrics(
            algo_key=self.kind.value,
            algo_label=info.label if info else self.kind.value,
            expanded=self.expanded,
            frontier_size=self.frontier_size,
            steps_taken=self.steps_taken,
            path_length=self.path_length,
            path_found=self.outcome is RunOutcome.FOUND,
            done=self.done,
            elapsed_ms=round(self.elapsed_ms, 2),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _finish(self) -> None:
        self.state = RunnerState.DONE
        self._elapsed_ms = max(0.0, (self._clock() - self._started_at) * 1000)
        if self.snapshot.status is SearchStatus.FOUND:
            self.path = reconstruct_path(self.snapshot.came_from, self.start, self.goal)
        logger.debug(
            "run finished: %s outcome=%s expanded=%d path_length=%d elapsed_ms=%.2f",
            self.kind.value, self.outcome.value, self.expanded, self.path_length, self._elapsed_ms,
        )

    def __repr__(self) -> str:
        return (
            f"Runner({self.kind.value}, {self.start}->{self.goal}, "
            f"state={self.state.value}, expanded={self.expanded})"
        )
