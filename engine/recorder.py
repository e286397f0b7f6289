"""
recorder.py — Run Recorder & Statistics
=========================================
Records a complete algorithm run (every StepEvent) without pacing, then
computes the numbers a statistics panel shows:

    rec = Recorder()
    rec.start(algo_key="merge", array=[5, 3, 8, 1])
    metrics = rec.run_to_completion()     # exhausts the algorithm
    rec.export()                          # JSON-ready snapshot for replay

For LIVE async runs the same counters come from StatsCollector, a sink:

    stats = StatsCollector()
    handle.subscribe(stats)
    await handle.wait()
    stats.comparisons, stats.swaps, stats.elapsed_ms

Comparison Mode:
    Two Recorders over the SAME array, then compare(rec1, rec2) →
    ComparisonResult naming which algorithm needed less work.
"""

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from algorithms import AlgoInfo, require_algorithm
from core.events import Number, StepEvent, StepKind
from engine.stepper import Stepper


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what a statistics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    array_size:   int   = 0
    comparisons:  int   = 0
    swaps:        int   = 0
    assigns:      int   = 0
    marks:        int   = 0
    total_steps:  int   = 0          # compare + assign + swap events
    wall_time_ms: float = 0.0        # wall-clock time to run to completion
    sorted_ok:    bool  = False      # final array is non-decreasing

    @property
    def writes(self) -> int:
        """Array writes: a swap touches two slots, an assign one."""
        return 2 * self.swaps + self.assigns

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "writes": self.writes}


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_writes:      str = ""
    winner_steps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left":               self.left.to_dict(),
            "right":              self.right.to_dict(),
            "winner_comparisons": self.winner_comparisons,
            "winner_swaps":       self.winner_swaps,
            "winner_writes":      self.winner_writes,
            "winner_steps":       self.winner_steps,
        }


# ---------------------------------------------------------------------------
# StatsCollector — live sink
# ---------------------------------------------------------------------------
class StatsCollector:
    """Counts events by kind; times first event → Done on the wall clock."""

    def __init__(self):
        self.counts: Dict[StepKind, int] = {kind: 0 for kind in StepKind}
        self.started_at:  Optional[float] = None
        self.finished_at: Optional[float] = None

    def __call__(self, event: StepEvent) -> None:
        now = time.monotonic()
        if self.started_at is None:
            self.started_at = now
        self.counts[event.kind] += 1
        if event.kind is StepKind.DONE:
            self.finished_at = now

    @property
    def comparisons(self) -> int:
        return self.counts[StepKind.COMPARE]

    @property
    def swaps(self) -> int:
        return self.counts[StepKind.SWAP]

    @property
    def assigns(self) -> int:
        return self.counts[StepKind.ASSIGN]

    @property
    def done(self) -> bool:
        return self.finished_at is not None

    @property
    def elapsed_ms(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return (end - self.started_at) * 1000


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events  : Full list of StepEvents from the run (Done last).
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The underlying Stepper; holds the full event buffer once recorded.
    """

    def __init__(self):
        self.events:  List[StepEvent]      = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo]  = None
        self._initial:   List[Number]        = []

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, array: Sequence[Number]) -> None:
        """Prepare a run of `algo_key` over a copy of `array`."""
        self._algo_info = require_algorithm(algo_key)
        self._initial   = list(array)
        self.events     = []
        self.metrics    = None

        self.stepper = Stepper()
        self.stepper.start(algo_key, self._initial)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the algorithm, record every event, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        wall_ms = (time.monotonic() - started) * 1000

        self.events  = list(self.stepper.steps)
        self.metrics = self._compute_metrics(wall_ms)
        logger.debug(
            "Recorded %s: %d event(s), %d comparison(s), %d swap(s)",
            self.metrics.algo_key, len(self.events), self.metrics.comparisons, self.metrics.swaps,
        )
        return self.metrics

    @property
    def initial(self) -> List[Number]:
        return list(self._initial)

    @property
    def final_array(self) -> List[Number]:
        """Array carried by the Done event (empty before run_to_completion)."""
        if self.events and self.events[-1].kind is StepKind.DONE:
            return list(self.events[-1].final_array)
        return []

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "initial":  list(self._initial),
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "events":   [e.to_dict() for e in self.events],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info   = self._algo_info
        counts = self.stepper.emitter.counts
        final  = self.stepper.array

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            array_size=len(self._initial),
            comparisons=counts[StepKind.COMPARE],
            swaps=counts[StepKind.SWAP],
            assigns=counts[StepKind.ASSIGN],
            marks=counts[StepKind.RANGE_MARK],
            total_steps=self.stepper.emitter.steps,
            wall_time_ms=round(wall_ms, 2),
            sorted_ok=all(final[k] <= final[k + 1] for k in range(len(final) - 1)),
        )


def record(algo_key: str, array: Sequence[Number]) -> Recorder:
    """Convenience: start + run_to_completion in one call."""
    rec = Recorder()
    rec.start(algo_key, array)
    rec.run_to_completion()
    return rec


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
        winner_writes=winner(l.writes, r.writes),
        winner_steps=winner(l.total_steps, r.total_steps),
    )
