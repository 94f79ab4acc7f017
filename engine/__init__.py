"""
engine/
-------
Run & playback layer.

    from engine import Runner, Driver, Recorder, compare
"""

from engine.runner   import Runner, RunnerState, RunOutcome, RunMetrics, InvalidConfigurationError
from engine.driver   import Driver, DriverState, SPEED_PRESETS
from engine.recorder import Recorder, ComparisonResult, compare

__all__ = [
    "Runner",
    "RunnerState",
    "RunOutcome",
    "RunMetrics",
    "InvalidConfigurationError",
    "Driver",
    "DriverState",
    "SPEED_PRESETS",
    "Recorder",
    "ComparisonResult",
    "compare",
]
