"""
core/
-----
Data layer.  Public API:

    from core import WorkingArray, generate_array, parse_array
    from core import Compare, Assign, Swap, RangeMark, Done, StepKind, MarkTag, replay
    from core import SortVisualizerError, IndexOutOfRange, AlreadyRunning, …
"""

from core.errors import (
    SortVisualizerError,
    IndexOutOfRange,
    AlreadyRunning,
    InvalidAlgorithmId,
    RunFailed,
)
from core.events import (
    StepEvent, StepKind, MarkTag,
    Compare, Assign, Swap, RangeMark, Done,
    apply, replay,
)
from core.working_array import WorkingArray, generate_array, parse_array

__all__ = [
    "SortVisualizerError", "IndexOutOfRange", "AlreadyRunning",
    "InvalidAlgorithmId",  "RunFailed",
    "StepEvent", "StepKind", "MarkTag",
    "Compare",   "Assign",   "Swap", "RangeMark", "Done",
    "apply",     "replay",
    "WorkingArray", "generate_array", "parse_array",
]
