"""
driver.py — Playback Driver
============================
Pacing lives here, outside the search engine.  The Driver holds at most
one Runner and decides *when* to step it: on demand (``step()``) or on a
timer while playing (``tick()``, called from the UI's event loop).

State machine:
    IDLE     →  start()           →  PAUSED
    PAUSED   →  play()            →  PLAYING
    PLAYING  →  pause()           →  PAUSED
    PLAYING / PAUSED → (run done) →  FINISHED
    any      →  reset()           →  IDLE

Thread safety:
  Not thread-safe.  Call it from one thread at a time: the web app holds
  the workspace lock around every call, a desktop UI uses its main loop.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Union

from grid import Cell, Grid
from algorithms import AlgorithmKind, Snapshot
from engine.runner import Runner

logger = logging.getLogger(__name__)


class DriverState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   0.5,
    "medium": 0.1,
    "fast":   0.025,
    "turbo":  1 / 240,
}

MIN_RATE = 1      # steps per second
MAX_RATE = 240


class Driver:
    """
    Attributes:
        runner   : Current Runner, or None while IDLE.
        state    : DriverState.
        interval : Seconds between auto-advance ticks.
        on_step  : Optional callback(Snapshot) fired after every step taken.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Snapshot], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.runner:   Optional[Runner] = None
        self.state:    DriverState      = DriverState.IDLE
        self.interval: float            = SPEED_PRESETS["medium"]
        self.on_step = on_step

        self._clock = clock
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        kind: Union[AlgorithmKind, str],
        grid: Grid,
        start: Cell,
        goal: Cell,
        play: bool = False,
    ) -> Runner:
        """Drop any previous run and load a fresh one (paused unless `play`)."""
        self.runner = Runner(kind, grid, start, goal, clock=self._clock)
        self.state  = DriverState.PAUSED
        logger.debug("driver loaded %r", self.runner)
        if play:
            self.play()
        return self.runner

    def reset(self) -> None:
        """Back to IDLE; the current run is discarded."""
        self.runner = None
        self.state  = DriverState.IDLE

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def step(self) -> Optional[Snapshot]:
        """Advance one step.  Returns None when there is nothing to step."""
        if self.runner is None:
            return None
        if self.runner.done:
            self.state = DriverState.FINISHED
            return self.runner.snapshot

        snap = self.runner.step()
        if self.runner.done:
            self.state = DriverState.FINISHED
            logger.debug("driver finished: %s", self.runner.outcome.value)
        if self.on_step:
            self.on_step(snap)
        return snap

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (DriverState.IDLE, DriverState.FINISHED):
            return
        self.state      = DriverState.PLAYING
        self._last_tick = self._clock()

    def pause(self) -> None:
        if self.state is DriverState.PLAYING:
            self.state = DriverState.PAUSED

    def toggle_play(self) -> None:
        if self.state is DriverState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> int:
        """
        Take every step that is due since the last tick (playing only).
        Returns the number of steps taken.
        """
        if self.state is not DriverState.PLAYING:
            return 0
        now = self._clock()
        due = min(MAX_RATE, int((now - self._last_tick) / self.interval))
        taken = 0
        while taken < due and self.state is DriverState.PLAYING:
            self.step()
            taken += 1
        if taken:
            self._last_tick = now
        return taken

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset!r}")
        self.interval = SPEED_PRESETS[preset]

    def set_rate(self, steps_per_second: float) -> None:
        rate = min(MAX_RATE, max(MIN_RATE, float(steps_per_second)))
        self.interval = 1.0 / rate

    @property
    def rate(self) -> float:
        return round(1.0 / self.interval, 2)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_idle(self) -> bool:
        return self.state is DriverState.IDLE

    @property
    def is_playing(self) -> bool:
        return self.state is DriverState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.state is DriverState.FINISHED
