"""
events.py — Step Events
========================
Every primitive operation an algorithm performs is described by one
immutable StepEvent.  The stream of events is the ONLY thing a renderer,
statistics collector or test harness ever sees of a run:

    Compare(i, j)             – values at i and j were compared (no mutation)
    Assign(i, value)          – index i was overwritten with value
    Swap(i, j)                – values at i and j were exchanged
    RangeMark(start, end, tag)– annotation only: "this range is sorted",
                                "this index is the pivot", …
    Done(final_array)         – the run completed; terminal

Design decisions:
  - Events are frozen dataclasses.  The emitter is the only producer;
    everyone downstream is a pure reader.
  - RangeMark ranges are INCLUSIVE on both ends (start == end marks a
    single index).
  - replay() is the reference semantics: folding Assign / Swap over the
    initial array must reproduce the live array at every point.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union


Number = Union[int, float]


# ---------------------------------------------------------------------------
# Kinds & tags
# ---------------------------------------------------------------------------
class StepKind(Enum):
    COMPARE    = "compare"
    ASSIGN     = "assign"
    SWAP       = "swap"
    RANGE_MARK = "range_mark"
    DONE       = "done"


class MarkTag(str, Enum):
    SORTED    = "sorted"      # range is in its final position
    PIVOT     = "pivot"       # quick sort pivot
    ACTIVE    = "active"      # merge sort sub-range being divided
    MERGED    = "merged"      # merge sort sub-range just merged
    CANDIDATE = "candidate"   # selection sort: current minimum
    KEY       = "key"         # insertion sort: element being inserted


# ---------------------------------------------------------------------------
# Event variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Compare:
    i: int
    j: int

    kind = StepKind.COMPARE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class Assign:
    i:     int
    value: Number

    kind = StepKind.ASSIGN

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class Swap:
    i: int
    j: int

    kind = StepKind.SWAP

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class RangeMark:
    start: int
    end:   int
    tag:   MarkTag

    kind = StepKind.RANGE_MARK

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "start": self.start, "end": self.end, "tag": self.tag.value}


@dataclass(frozen=True)
class Done:
    final_array: Tuple[Number, ...]

    kind = StepKind.DONE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "final_array": list(self.final_array)}


StepEvent = Union[Compare, Assign, Swap, RangeMark, Done]

MUTATING = (StepKind.ASSIGN, StepKind.SWAP)
TIMED    = (StepKind.COMPARE, StepKind.ASSIGN, StepKind.SWAP)


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------
def apply(array: List[Number], event: StepEvent) -> None:
    """Apply a single event to `array` in place.  Non-mutating events are ignored."""
    if event.kind is StepKind.SWAP:
        array[event.i], array[event.j] = array[event.j], array[event.i]
    elif event.kind is StepKind.ASSIGN:
        array[event.i] = event.value


def replay(initial: Sequence[Number], events: Iterable[StepEvent]) -> List[Number]:
    """Reconstruct the array state after `events`, starting from `initial`."""
    array = list(initial)
    for event in events:
        apply(array, event)
    return array
