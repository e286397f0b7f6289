"""
driver.py — Async Playback Driver
==================================
Runs ONE sorting algorithm end-to-end as an asyncio task, pacing it so
observers can watch every step.

State machine (per RunHandle):
    IDLE  →  start()  →  RUNNING
    RUNNING  →  (algorithm returns)     →  COMPLETED   (Done emitted)
    RUNNING  →  cancel()                →  CANCELLED   (no Done)
    RUNNING  →  (algorithm raises)      →  FAILED      (RunFailed stored)

The driver itself is IDLE whenever it has no RUNNING handle, and it
refuses a second start() with AlreadyRunning until then.

Pacing & cancellation:
  The algorithm generator is resumed one event at a time.  After each
  Compare / Assign / Swap the driver waits `delay` seconds (RangeMarks
  are not paced).  The cancel flag is checked right before resuming the
  generator, i.e. strictly between primitives.  A cancel() that arrives
  during the wait ends the wait immediately.

Usage:
    driver = PlaybackDriver()
    handle = driver.start("quick", [5, 3, 8, 1], speed=5)
    handle.subscribe(print)
    status = await handle.wait()
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from algorithms import AlgoInfo, require_algorithm
from algorithms.emitter import StepEmitter
from core.errors import AlreadyRunning, RunFailed
from core.events import Number, StepEvent, TIMED
from engine.config import DEFAULT_CONFIG, PlaybackConfig, Speed, delay_for_speed, resolve_speed
from engine.observer import EventBus, Sink


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunStatus(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    FAILED    = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.CANCELLED, RunStatus.COMPLETED, RunStatus.FAILED)


# ---------------------------------------------------------------------------
# Run Descriptor
# ---------------------------------------------------------------------------
@dataclass
class RunDescriptor:
    algo_key: str
    initial:  Tuple[Number, ...]
    speed:    int
    delay:    float                     # seconds per paced step
    status:   RunStatus = RunStatus.IDLE


# ---------------------------------------------------------------------------
# Run Handle
# ---------------------------------------------------------------------------
class RunHandle:
    """
    Attributes:
        descriptor  : The RunDescriptor (algo, snapshot, speed, status).
        failure     : RunFailed if the run ended FAILED, else None.
        started_at  : time.monotonic() when the run task began.
        finished_at : time.monotonic() when it reached a terminal state.
    """

    def __init__(self, descriptor: RunDescriptor, info: AlgoInfo):
        self.descriptor:  RunDescriptor        = descriptor
        self.failure:     Optional[RunFailed]  = None
        self.started_at:  float                = 0.0
        self.finished_at: float                = 0.0

        self._info      = info
        self._emitter   = StepEmitter(descriptor.initial)
        self._bus       = EventBus()
        self._cancel    = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    def subscribe(self, sink: Sink) -> None:
        self._bus.subscribe(sink)

    def unsubscribe(self, sink: Sink) -> None:
        self._bus.unsubscribe(sink)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def status(self) -> RunStatus:
        return self.descriptor.status

    def cancel(self) -> None:
        """Request termination.  Takes effect before the next primitive."""
        if self.descriptor.status is RunStatus.RUNNING:
            self._cancel.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel.is_set()

    async def wait(self) -> RunStatus:
        """Wait for the run to reach a terminal state and return it."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                if not self._task.cancelled():
                    raise
        return self.descriptor.status

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def algo_key(self) -> str:
        return self.descriptor.algo_key

    @property
    def array(self) -> List[Number]:
        """Copy of the working array (final order once terminal)."""
        return self._emitter.array.to_list()

    @property
    def steps(self) -> int:
        return self._emitter.steps

    @property
    def last_event(self) -> Optional[StepEvent]:
        return self._emitter.last_event

    @property
    def elapsed(self) -> float:
        if not self.started_at:
            return 0.0
        end = self.finished_at or time.monotonic()
        return end - self.started_at

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    async def _run(self) -> None:
        d   = self.descriptor
        em  = self._emitter
        gen = self._info.fn(em)

        self.started_at = time.monotonic()
        logger.info("Run started: %s on %d element(s), delay %.3fs", d.algo_key, len(d.initial), d.delay)

        try:
            while True:
                if self._cancel.is_set():
                    self._finish(RunStatus.CANCELLED)
                    logger.info("Run cancelled: %s after %d step(s)", d.algo_key, em.steps)
                    return
                try:
                    event = next(gen)
                except StopIteration:
                    break
                self._bus.publish(event)
                if event.kind in TIMED:
                    await self._pause(d.delay)
        except asyncio.CancelledError:
            self._finish(RunStatus.CANCELLED)
            logger.info("Run task cancelled: %s after %d step(s)", d.algo_key, em.steps)
            raise
        except Exception as exc:
            failure = RunFailed(d.algo_key, em.steps, em.last_event, exc)
            failure.__cause__ = exc
            self.failure = failure
            self._finish(RunStatus.FAILED)
            logger.exception("Run failed: %s", failure)
            return
        finally:
            gen.close()

        self._bus.publish(em.finish())
        self._finish(RunStatus.COMPLETED)
        logger.info(
            "Run completed: %s in %d step(s), %.1f ms",
            d.algo_key, em.steps, self.elapsed * 1000,
        )

    async def _pause(self, delay: float) -> None:
        if delay <= 0:
            await asyncio.sleep(0)
            return
        try:
            await asyncio.wait_for(self._cancel.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

    def _finish(self, status: RunStatus) -> None:
        self.descriptor.status = status
        self.finished_at       = time.monotonic()

    def __repr__(self) -> str:
        return f"RunHandle({self.algo_key!r}, {self.descriptor.status.value}, steps={self.steps})"


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------
class PlaybackDriver:
    """Owns at most one RUNNING RunHandle at a time."""

    def __init__(self, config: Optional[PlaybackConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._active: Optional[RunHandle] = None

    @property
    def active(self) -> Optional[RunHandle]:
        return self._active

    @property
    def is_running(self) -> bool:
        return self._active is not None and self._active.status() is RunStatus.RUNNING

    @property
    def state(self) -> RunStatus:
        return RunStatus.RUNNING if self.is_running else RunStatus.IDLE

    def start(
        self,
        algorithm: str,
        array: Sequence[Number],
        speed: Optional[Speed] = None,
        *,
        delay: Optional[float] = None,
        sinks: Iterable[Sink] = (),
    ) -> RunHandle:
        """
        Begin a run and return its handle.  Must be called inside a
        running event loop; the run task starts at the caller's next await,
        so sinks subscribed right after start() see every event.

        Args:
            algorithm : Registry key (bubble, selection, insertion, merge, quick, heap).
            array     : Values to sort; snapshotted, never mutated.
            speed     : Level or preset name; defaults to config.default_speed.
            delay     : Explicit seconds per step (0 for headless runs); overrides speed.
            sinks     : Sinks to subscribe before the run begins.

        Raises:
            InvalidAlgorithmId, AlreadyRunning, ValueError
        """
        info  = require_algorithm(algorithm)
        if self.is_running:
            raise AlreadyRunning(self._active.algo_key)

        level = resolve_speed(self.config.default_speed if speed is None else speed, self.config)
        if delay is None:
            delay = delay_for_speed(level, self.config)
        elif delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        loop = asyncio.get_running_loop()

        descriptor = RunDescriptor(
            algo_key=info.key,
            initial=tuple(array),
            speed=level,
            delay=delay,
        )
        handle = RunHandle(descriptor, info)
        for sink in sinks:
            handle.subscribe(sink)

        descriptor.status = RunStatus.RUNNING
        handle._task      = loop.create_task(handle._run())
        self._active      = handle
        return handle

    async def restart(
        self,
        algorithm: str,
        array: Sequence[Number],
        speed: Optional[Speed] = None,
        **kwargs,
    ) -> RunHandle:
        """Cancel the active run (if any), wait for it to stop, start a new one."""
        require_algorithm(algorithm)
        if self._active is not None and self.is_running:
            self._active.cancel()
            await self._active.wait()
        return self.start(algorithm, array, speed, **kwargs)

    def cancel(self) -> None:
        if self._active is not None:
            self._active.cancel()


# ---------------------------------------------------------------------------
# Process-wide entry point
# ---------------------------------------------------------------------------
_default_driver = PlaybackDriver()


def default_driver() -> PlaybackDriver:
    return _default_driver


def start_run(
    algorithm_id: str,
    array: Sequence[Number],
    speed_level: Optional[Speed] = None,
    **kwargs,
) -> RunHandle:
    """start() on the shared driver: only one run may be RUNNING per process."""
    return _default_driver.start(algorithm_id, array, speed_level, **kwargs)
