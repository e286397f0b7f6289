"""
engine/
-------
Playback, observation & recording layer.

    from engine import PlaybackDriver, start_run, RunStatus
    from engine import Stepper, Recorder, StatsCollector, compare
"""

from engine.config   import PlaybackConfig, DEFAULT_CONFIG, SPEED_PRESETS, delay_for_speed, resolve_speed
from engine.observer import EventBus, Sink
from engine.driver   import PlaybackDriver, RunHandle, RunDescriptor, RunStatus, start_run, default_driver
from engine.stepper  import Stepper, StepperState
from engine.recorder import Recorder, RunMetrics, ComparisonResult, StatsCollector, compare, record

__all__ = [
    "PlaybackConfig",
    "DEFAULT_CONFIG",
    "SPEED_PRESETS",
    "delay_for_speed",
    "resolve_speed",
    "EventBus",
    "Sink",
    "PlaybackDriver",
    "RunHandle",
    "RunDescriptor",
    "RunStatus",
    "start_run",
    "default_driver",
    "Stepper",
    "StepperState",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "StatsCollector",
    "compare",
    "record",
]
