"""
working_array.py — The Array Being Sorted
==========================================
A fixed-length, bounds-checked wrapper around a plain list.

Unlike a Python list it never wraps negative indices and never grows or
shrinks: every index must satisfy 0 <= i < len.  Any violation raises
IndexOutOfRange, which the driver treats as a fatal algorithm bug.

Also home to the two ways a fresh array is produced:
    generate_array(size, …)   – random values (the "new array" button)
    parse_array(text)         – user-supplied "5, 3, 8, 1"
"""

import math
import random
import re
from typing import Iterable, Iterator, List, Optional, Tuple

from core.errors import IndexOutOfRange
from core.events import Number


class WorkingArray:
    """
    Attributes:
        initial : Tuple snapshot of the values the run started from.
    """

    __slots__ = ("_values", "initial")

    def __init__(self, values: Iterable[Number]):
        self._values: List[Number]        = list(values)
        self.initial: Tuple[Number, ...]  = tuple(self._values)

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def check(self, index: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool):
            raise IndexOutOfRange(index, len(self._values))
        if not 0 <= index < len(self._values):
            raise IndexOutOfRange(index, len(self._values))
        return index

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def __getitem__(self, index: int) -> Number:
        return self._values[self.check(index)]

    def __setitem__(self, index: int, value: Number) -> None:
        self._values[self.check(index)] = value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Number]:
        return iter(self._values)

    def snapshot(self) -> Tuple[Number, ...]:
        return tuple(self._values)

    def to_list(self) -> List[Number]:
        return list(self._values)

    def __repr__(self) -> str:
        return f"WorkingArray({self._values!r})"


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def generate_array(
    size: int = 80,
    min_value: int = 25,
    max_value: int = 350,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Random integer values in [min_value, max_value).
    Pass `seed` for a reproducible array.
    """
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    if max_value <= min_value:
        raise ValueError(f"max_value ({max_value}) must exceed min_value ({min_value})")

    rng = random.Random(seed)
    return [rng.randrange(min_value, max_value) for _ in range(size)]


_SEPARATORS = re.compile(r"[,\s;]+")


def parse_array(text: str) -> List[Number]:
    """
    Parse a user-typed array.

    Accepted:
        "5, 3, 8, 1"      → [5, 3, 8, 1]
        "5 3 8 1"         → [5, 3, 8, 1]
        "[2.5; 1; 4]"     → [2.5, 1, 4]
    """
    body = text.strip().strip("[]()")
    values: List[Number] = []
    for token in _SEPARATORS.split(body):
        if not token:
            continue
        try:
            value: Number = int(token)
        except ValueError:
            try:
                value = float(token)
            except ValueError:
                raise ValueError(f"Not a number: {token!r}") from None
            if not math.isfinite(value):     # nan, inf
                raise ValueError(f"Not a number: {token!r}")
        values.append(value)
    return values
