"""
bubble.py — Bubble Sort
========================
Adjacent compare-and-swap passes.  After pass i the largest remaining
value has bubbled to index n-i-1, which is marked SORTED.

Early exit: a pass with zero swaps proves the remaining prefix is already
in order, so the whole prefix is marked SORTED and the sort stops.  On an
already-sorted array that means exactly n-1 compares and no swaps.
"""

from typing import Generator, List

from algorithms.emitter import StepEmitter
from core.events import MarkTag, StepEvent


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                        # 0
    "    for i in 0 .. n-2:",                     # 1
    "        swapped ← false",                    # 2
    "        for j in 0 .. n-i-2:",               # 3
    "            if a[j] > a[j+1]:",              # 4
    "                swap(a[j], a[j+1])",         # 5
    "                swapped ← true",             # 6
    "        mark a[n-i-1] sorted",               # 7
    "        if not swapped: break",              # 8
]


def bubble_sort(em: StepEmitter) -> Generator[StepEvent, None, None]:
    n = len(em)

    for i in range(n - 1):
        swapped = False
        last    = n - i - 1

        for j in range(last):
            if (yield from em.compare(j, j + 1)) > 0:
                yield from em.swap(j, j + 1)
                swapped = True

        if not swapped:
            # nothing moved: everything up to `last` is already in place
            yield from em.mark(0, last, MarkTag.SORTED)
            return

        yield from em.mark(last, last, MarkTag.SORTED)

    if n:
        yield from em.mark(0, 0, MarkTag.SORTED)
