"""
selection.py — Selection Sort
==============================
For each position i, scan [i+1, n) for the minimum, swap it into i, mark
i SORTED.  Every time the running minimum changes it is re-marked as the
CANDIDATE so a renderer can follow the scan.
"""

from typing import Generator, List

from algorithms.emitter import StepEmitter
from core.events import MarkTag, StepEvent


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                     # 0
    "    for i in 0 .. n-2:",                     # 1
    "        min ← i",                            # 2
    "        for j in i+1 .. n-1:",               # 3
    "            if a[j] < a[min]: min ← j",      # 4
    "        swap(a[i], a[min])",                 # 5
    "        mark a[i] sorted",                   # 6
    "    mark a[n-1] sorted",                     # 7
]


def selection_sort(em: StepEmitter) -> Generator[StepEvent, None, None]:
    n = len(em)

    for i in range(n - 1):
        min_index = i
        yield from em.mark(i, i, MarkTag.CANDIDATE)

        for j in range(i + 1, n):
            if (yield from em.compare(min_index, j)) > 0:
                min_index = j
                yield from em.mark(j, j, MarkTag.CANDIDATE)

        yield from em.swap(i, min_index)
        yield from em.mark(i, i, MarkTag.SORTED)

    if n:
        yield from em.mark(n - 1, n - 1, MarkTag.SORTED)
