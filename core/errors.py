"""
errors.py — Error Kinds
========================
Every failure the sorting core can report.  All of them derive from
SortVisualizerError so callers (the web layer, a UI, a test harness)
can catch the whole family with one clause.

    IndexOutOfRange     – a primitive was handed an index outside [0, n).
                          Always a bug in an algorithm; fatal to the run.
    AlreadyRunning      – start() while another run is still RUNNING.
    InvalidAlgorithmId  – unknown algorithm key, rejected up front.
    RunFailed           – diagnostic wrapper the driver stores when a run
                          dies; carries algo key, step counter, last event.

Cancellation is NOT an error and has no exception here.
"""

from typing import Any, Optional


class SortVisualizerError(Exception):
    """Base class for every error raised by the sorting core."""


class IndexOutOfRange(SortVisualizerError, IndexError):
    def __init__(self, index: Any, length: int):
        self.index  = index
        self.length = length
        super().__init__(f"Index {index!r} out of range for array of length {length}")


class AlreadyRunning(SortVisualizerError, RuntimeError):
    def __init__(self, algo_key: str):
        self.algo_key = algo_key
        super().__init__(f"A '{algo_key}' run is already in progress")


class InvalidAlgorithmId(SortVisualizerError, ValueError):
    def __init__(self, algo_key: Any):
        self.algo_key = algo_key
        super().__init__(f"Unknown algorithm: {algo_key!r}")


class RunFailed(SortVisualizerError):
    """
    Raised into / stored on a RunHandle when an algorithm faults mid-run.

    Attributes:
        algo_key   : Registry key of the algorithm that failed.
        steps      : Emitter step counter at the moment of failure.
        last_event : The last StepEvent that was emitted (None if none).
        cause      : The original exception (also chained as __cause__).
    """

    def __init__(
        self,
        algo_key: str,
        steps: int,
        last_event: Optional[Any],
        cause: BaseException,
    ):
        self.algo_key   = algo_key
        self.steps      = steps
        self.last_event = last_event
        self.cause      = cause
        super().__init__(
            f"'{algo_key}' run failed after {steps} step(s) "
            f"(last event: {last_event!r}): {cause}"
        )
