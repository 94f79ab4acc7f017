"""
recorder.py — Run Recorder & Comparison
========================================
Runs a search to completion while keeping every Snapshot, then hands
back the metrics.  Used for side-by-side comparison of two algorithms
on the same board, and by the tests to check determinism.

Usage:
    rec = Recorder.record("astar", grid, start, goal)
    rec.metrics.expanded
    compare(Recorder.record("bfs", ...), rec)  → ComparisonResult
"""

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from grid import Cell, Grid
from algorithms import AlgorithmKind, Snapshot
from engine.runner import Runner, RunMetrics


@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: algo label of the winner, or "tie"
    winner_expanded: str = ""     # fewer cells expanded
    winner_path:     str = ""     # shorter path (a found path beats none)


class Recorder:
    """
    Attributes:
        runner    : The finished Runner.
        snapshots : Every Snapshot in expansion order.
        metrics   : RunMetrics of the finished run.
    """

    def __init__(self, runner: Runner):
        self.runner:    Runner          = runner
        self.snapshots: List[Snapshot]  = []
        self.metrics:   Optional[RunMetrics] = None

    @classmethod
    def record(
        cls,
        kind: Union[AlgorithmKind, str],
        grid: Grid,
        start: Cell,
        goal: Cell,
        clock: Callable[[], float] = time.monotonic,
    ) -> "Recorder":
        rec = cls(Runner(kind, grid, start, goal, clock=clock))
        rec.run_to_completion()
        return rec

    def run_to_completion(self) -> RunMetrics:
        while not self.runner.done:
            self.snapshots.append(self.runner.step())
        self.metrics = self.runner.metrics()
        return self.metrics

    @property
    def path(self) -> Optional[List[Cell]]:
        return self.runner.path


def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two finished Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    inf = float("inf")
    return ComparisonResult(
        left=l,
        right=r,
        winner_expanded=winner(l.expanded, r.expanded),
        winner_path=winner(
            l.path_length if l.path_found else inf,
            r.path_length if r.path_found else inf,
        ),
    )
