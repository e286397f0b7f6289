"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows.

    from algorithms import REGISTRY, get_algorithm, require_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, complexity, …),
        …
    }

Each `fn` is a generator function taking a StepEmitter and yielding
StepEvents.  The driver, stepper, recorder and web layer all consume
AlgoInfo, so adding an algorithm is: write the generator, add one entry.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Generator, List, Optional

from algorithms.emitter   import StepEmitter
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc
from core.errors import InvalidAlgorithmId
from core.events import StepEvent


SortFn = Callable[[StepEmitter], Generator[StepEvent, None, None]]


# ---------------------------------------------------------------------------
# Complexity — opaque display labels
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Complexity:
    time_best:    str
    time_average: str
    time_worst:   str
    space_worst:  str

    def to_dict(self) -> Dict[str, str]:
        return {
            "timeBest":    self.time_best,
            "timeAverage": self.time_average,
            "timeWorst":   self.time_worst,
            "spaceWorst":  self.space_worst,
        }


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:         str                      # registry key, e.g. "quick"
    label:       str                      # human label, e.g. "Quick Sort"
    fn:          SortFn                   # the generator function
    pseudocode:  List[str]                # lines for a side panel
    complexity:  Complexity
    tags:        List[str] = field(default_factory=list)   # e.g. ["stable", "in-place"]
    description: str       = ""

    def to_dict(self) -> dict:
        return {
            "key":         self.key,
            "label":       self.label,
            "pseudocode":  list(self.pseudocode),
            "complexity":  self.complexity.to_dict(),
            "tags":        list(self.tags),
            "description": self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        complexity=Complexity("O(n)", "O(n²)", "O(n²)", "O(1)"),
        tags=["stable", "in-place", "adaptive"],
        description="Swaps adjacent pairs until a pass makes no swaps.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        complexity=Complexity("O(n²)", "O(n²)", "O(n²)", "O(1)"),
        tags=["in-place"],
        description="Selects the minimum of the unsorted suffix, one position at a time.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        complexity=Complexity("O(n)", "O(n²)", "O(n²)", "O(1)"),
        tags=["stable", "in-place", "adaptive"],
        description="Shifts each key left into a growing sorted prefix.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        complexity=Complexity("O(n log n)", "O(n log n)", "O(n log n)", "O(n)"),
        tags=["stable", "divide-and-conquer"],
        description="Splits in half, sorts each half, merges them back.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        complexity=Complexity("O(n log n)", "O(n log n)", "O(n²)", "O(log n)"),
        tags=["in-place", "divide-and-conquer"],
        description="Lomuto partition around the last element, then recurse.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        complexity=Complexity("O(n log n)", "O(n log n)", "O(n log n)", "O(1)"),
        tags=["in-place"],
        description="Builds a max-heap, then repeatedly moves the root to the end.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    """Return AlgoInfo by key, raising InvalidAlgorithmId if unknown."""
    info = REGISTRY.get(key) if isinstance(key, str) else None
    if info is None:
        raise InvalidAlgorithmId(key)
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "Complexity",
    "REGISTRY",
    "StepEmitter",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
