"""
insertion.py — Insertion Sort
==============================
Grows a sorted prefix.  For each i the key a[i] is lifted out, larger
prefix elements are shifted one slot right with `assign`, and a final
`assign` drops the key into the hole.

The key lives in a local while the hole travels left, so the shift
decision is made against that value (a[j] > key).  The Compare(j, j+1)
event is the highlight of the pair being examined; on the first probe
a[j+1] still holds the key, afterwards it holds a shifted copy.
"""

from typing import Generator, List

from algorithms.emitter import StepEmitter
from core.events import MarkTag, StepEvent


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                     # 0
    "    mark a[0] sorted",                       # 1
    "    for i in 1 .. n-1:",                     # 2
    "        key ← a[i]; j ← i-1",                # 3
    "        while j ≥ 0 and a[j] > key:",        # 4
    "            a[j+1] ← a[j]",                  # 5
    "            j ← j-1",                        # 6
    "        a[j+1] ← key",                       # 7
    "        mark a[0..i] sorted",                # 8
]


def insertion_sort(em: StepEmitter) -> Generator[StepEvent, None, None]:
    n = len(em)
    if n == 0:
        return

    yield from em.mark(0, 0, MarkTag.SORTED)

    for i in range(1, n):
        key = em[i]
        j   = i - 1
        yield from em.mark(i, i, MarkTag.KEY)

        while j >= 0:
            yield from em.compare(j, j + 1)
            if not em[j] > key:
                break
            yield from em.assign(j + 1, em[j])
            j -= 1

        if j + 1 != i:
            yield from em.assign(j + 1, key)

        yield from em.mark(0, i, MarkTag.SORTED)
