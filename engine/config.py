"""Playback configuration and the speed → delay mapping."""

from dataclasses import dataclass
from typing import Union


# named presets → speed level
SPEED_PRESETS = {
    "slow":   1,    # teaching mode
    "medium": 3,
    "fast":   5,    # demo mode
    "turbo":  10,
}

Speed = Union[int, str]


@dataclass
class PlaybackConfig:
    """Tunables for playback and array generation."""

    # delay_ms = max(min_delay_ms, base_delay_ms - delay_step_ms * speed)
    base_delay_ms: float = 20.0
    delay_step_ms: float = 3.0
    min_delay_ms:  float = 1.0   # must stay > 0 so every step is observable

    min_speed:     int = 1
    max_speed:     int = 10
    default_speed: int = 3

    # array generation
    default_size: int = 80
    max_size:     int = 150
    min_value:    int = 25
    max_value:    int = 350

    def __post_init__(self):
        if self.min_delay_ms <= 0:
            raise ValueError("min_delay_ms must be > 0")
        if self.min_speed > self.max_speed:
            raise ValueError("min_speed must not exceed max_speed")


DEFAULT_CONFIG = PlaybackConfig()


def resolve_speed(speed: Speed, config: PlaybackConfig = DEFAULT_CONFIG) -> int:
    """Turn a preset name or a raw level into a level clamped to the configured range."""
    if isinstance(speed, str):
        if speed in SPEED_PRESETS:
            level = SPEED_PRESETS[speed]
        else:
            try:
                level = int(speed)
            except ValueError:
                raise ValueError(f"Unknown speed preset: {speed!r}") from None
    elif isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise ValueError(f"Speed must be a level or preset name, got {speed!r}")
    else:
        level = int(speed)
    return max(config.min_speed, min(config.max_speed, level))


def delay_for_speed(speed: Speed, config: PlaybackConfig = DEFAULT_CONFIG) -> float:
    """Seconds to pause after each step.  Higher speed → shorter delay, never below the floor."""
    level = resolve_speed(speed, config)
    delay_ms = max(config.min_delay_ms, config.base_delay_ms - config.delay_step_ms * level)
    return delay_ms / 1000.0
