"""
stepper.py — Step-by-Step Playback Engine
==========================================
Synchronous counterpart of the PlaybackDriver for pull-based UIs
(a web page polling for the next frame, a REPL, a test).

It owns the algorithm generator, buffers every StepEvent it has seen,
and keeps `array` equal to the state right after the current event.
Going backwards UNDOES events (Swap is its own inverse, Assign restores
the value it overwrote), so rewind never re-runs the algorithm.

State machine:
    IDLE  →  start()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (Done reached) → FINISHED
    any     →  reset()  →  IDLE

When the generator is exhausted the Stepper appends the Done event
itself, so the final buffered step is always Done.

Thread safety:
  Not thread-safe.  Drive it from one thread (or one event loop).
"""

import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms import AlgoInfo, require_algorithm
from algorithms.emitter import StepEmitter
from core.events import Number, StepEvent, StepKind
from engine.config import DEFAULT_CONFIG, PlaybackConfig, Speed, delay_for_speed


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


_NOTHING = object()


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : All StepEvents fetched so far (buffer for rewind).
        current_idx : Index into `steps` currently displayed (-1 = initial array).
        array       : Array state after steps[current_idx].
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(StepEvent) fired when moving onto a step.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[StepEvent], None]] = None,
        config: Optional[PlaybackConfig] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.steps:       List[StepEvent] = []
        self.current_idx: int             = -1
        self.array:       List[Number]    = []
        self.state:       StepperState    = StepperState.IDLE
        self.speed:       float           = delay_for_speed(self.config.default_speed, self.config)
        self.on_step:     Optional[Callable[[StepEvent], None]] = on_step

        self._info:      Optional[AlgoInfo]    = None
        self._emitter:   Optional[StepEmitter] = None
        self._generator = None
        self._overwritten: List[object] = []     # per step: value an Assign replaced
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, algo_key: str, initial: Sequence[Number]) -> None:
        """Attach a fresh run of `algo_key` over `initial` (InvalidAlgorithmId if unknown)."""
        info = require_algorithm(algo_key)
        self._info        = info
        self._emitter     = StepEmitter(initial)
        self._generator   = info.fn(self._emitter)
        self.steps        = []
        self._overwritten = []
        self.current_idx  = -1
        self.array        = list(initial)
        self.state        = StepperState.PAUSED

    def reset(self) -> None:
        """Back to IDLE; caller must call start() again."""
        if self._generator is not None:
            self._generator.close()
        self._info        = None
        self._emitter     = None
        self._generator   = None
        self.steps        = []
        self._overwritten = []
        self.current_idx  = -1
        self.array        = []
        self.state        = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at the end."""
        target = self.current_idx + 1
        if target >= len(self.steps) and not self._fetch_next():
            self.state = StepperState.FINISHED
            return False
        self._forward()
        if self.steps[self.current_idx].kind is StepKind.DONE:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at the initial array."""
        if self.current_idx < 0:
            return False
        self._backward()
        if self.state is StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to step `idx` (-1 = initial array), fetching forward if needed."""
        while idx >= len(self.steps):
            if not self._fetch_next():
                break
        if not -1 <= idx < len(self.steps):
            return False
        while self.current_idx < idx:
            self.next_step()
        while self.current_idx > idx:
            self.prev_step()
        return True

    def rewind(self) -> None:
        """Jump back to the initial array."""
        self.goto_step(-1)

    def jump_to_end(self) -> None:
        """Exhaust the generator and jump to the final (Done) step."""
        while self._fetch_next():
            pass
        self.goto_step(len(self.steps) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Call periodically.  If playing and at least `speed` seconds have
        elapsed since the last advance, advances one step.  Returns True
        if a step was taken.
        """
        if self.state is not StepperState.PLAYING:
            return False
        now = time.monotonic()
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: Speed) -> None:
        """Level or preset name, mapped through the configured delay curve."""
        self.speed = delay_for_speed(speed, self.config)

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(self.config.min_delay_ms / 1000.0, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[StepEvent]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def algo_key(self) -> Optional[str]:
        return self._info.key if self._info else None

    @property
    def emitter(self) -> Optional[StepEmitter]:
        return self._emitter

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Pull one event into the buffer; append Done once the generator ends."""
        if self._generator is None:
            return False
        try:
            event = next(self._generator)
        except StopIteration:
            self._generator = None
            event = self._emitter.finish()
        self.steps.append(event)
        return True

    def _forward(self) -> None:
        self.current_idx += 1
        event = self.steps[self.current_idx]
        if event.kind is StepKind.ASSIGN:
            previous = self.array[event.i]
            self.array[event.i] = event.value
        else:
            previous = _NOTHING
            if event.kind is StepKind.SWAP:
                self.array[event.i], self.array[event.j] = self.array[event.j], self.array[event.i]
        if len(self._overwritten) <= self.current_idx:
            self._overwritten.append(previous)
        else:
            self._overwritten[self.current_idx] = previous
        self._notify(event)

    def _backward(self) -> None:
        event = self.steps[self.current_idx]
        if event.kind is StepKind.ASSIGN:
            self.array[event.i] = self._overwritten[self.current_idx]
        elif event.kind is StepKind.SWAP:
            self.array[event.i], self.array[event.j] = self.array[event.j], self.array[event.i]
        self.current_idx -= 1
        if self.current_step is not None:
            self._notify(self.current_step)

    def _notify(self, step: StepEvent) -> None:
        if self.on_step:
            self.on_step(step)
