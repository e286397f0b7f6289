"""
emitter.py — Step Emitter
==========================
The only way an algorithm touches the working array.

Every primitive is a tiny generator: it performs the index-level work,
yields exactly one StepEvent, and (for compare) returns a result.  An
algorithm delegates to it with `yield from`:

    order = yield from em.compare(j, j + 1)
    if order > 0:
        yield from em.swap(j, j + 1)

Whoever drives the algorithm generator (the async PlaybackDriver, the
manual Stepper, the Recorder) receives the event, renders / counts /
sleeps as it likes, and only THEN resumes the generator.  That resume
is the "suspend for the step delay before returning" of each primitive,
and it is also the only place a run can be cancelled, so cancellation
always lands between primitives and never mid-mutation.

Ordering of mutation vs. event:
  - compare : no mutation, event yielded, result returned after resume.
  - assign  : array written, THEN event yielded.
  - swap    : values exchanged, THEN event yielded (nothing at all if i == j).
  - mark    : annotation only; does not advance the step counter.
"""

from typing import Dict, Generator, Iterable, Optional

from core.events import (
    Number, StepEvent, StepKind, MarkTag,
    Compare, Assign, Swap, RangeMark, Done,
)
from core.working_array import WorkingArray


Primitive = Generator[StepEvent, None, None]


class StepEmitter:
    """
    Attributes:
        array      : The WorkingArray owned by this run.
        steps      : Monotonic count of compare / assign / swap events emitted.
        counts     : Per-kind tally {StepKind: int}, marks included.
        last_event : Most recent event yielded (None before the first).
    """

    def __init__(self, values: Iterable[Number]):
        self.array:      WorkingArray          = values if isinstance(values, WorkingArray) else WorkingArray(values)
        self.steps:      int                   = 0
        self.counts:     Dict[StepKind, int]   = {kind: 0 for kind in StepKind}
        self.last_event: Optional[StepEvent]   = None

    # -- read access (algorithms may look, never write directly) --
    def __getitem__(self, index: int) -> Number:
        return self.array[index]

    def __len__(self) -> int:
        return len(self.array)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def compare(self, i: int, j: int) -> Generator[StepEvent, None, int]:
        """Yield Compare(i, j); return -1, 0 or 1 for array[i] <, ==, > array[j]."""
        a, b = self.array[i], self.array[j]
        yield self._emit(Compare(i, j))
        return (a > b) - (a < b)

    def assign(self, i: int, value: Number) -> Primitive:
        self.array[i] = value
        yield self._emit(Assign(i, value))

    def swap(self, i: int, j: int) -> Primitive:
        self.array.check(i)
        self.array.check(j)
        if i == j:
            return
        values = self.array
        values[i], values[j] = values[j], values[i]
        yield self._emit(Swap(i, j))

    def mark(self, start: int, end: int, tag: MarkTag) -> Primitive:
        self.array.check(start)
        self.array.check(end)
        yield self._emit(RangeMark(start, end, tag))

    # ------------------------------------------------------------------
    # Terminal
    # ------------------------------------------------------------------
    def finish(self) -> Done:
        done = Done(self.array.snapshot())
        self.counts[StepKind.DONE] += 1
        self.last_event = done
        return done

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _emit(self, event: StepEvent) -> StepEvent:
        if event.kind is not StepKind.RANGE_MARK:
            self.steps += 1
        self.counts[event.kind] += 1
        self.last_event = event
        return event
