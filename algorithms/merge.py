"""
merge.py — Merge Sort
======================
Top-down recursive merge sort, mid = (left + right) // 2.

Yields:
  1. RangeMark ACTIVE over [left, right] before dividing
  2. For every output slot k of a merge: Compare(k, k) while both halves
     still have elements, then Assign(k, value)
  3. RangeMark MERGED over [left, right] once the merge is written back

The merge works from buffered copies of both halves, so the comparison
that decides each slot is `left_half[i] <= right_half[j]` on those copies
(ties keep the left element first, which makes the sort stable).  The
Compare event highlights the destination slot being decided.

Recursion goes through nested `yield from`, depth O(log n).
"""

from typing import Generator, List

from algorithms.emitter import StepEmitter
from core.events import MarkTag, StepEvent


PSEUDOCODE: List[str] = [
    "def merge_sort(a, left, right):",            # 0
    "    if left ≥ right: return",                # 1
    "    mid ← (left + right) // 2",              # 2
    "    merge_sort(a, left, mid)",               # 3
    "    merge_sort(a, mid+1, right)",            # 4
    "    L ← a[left..mid]; R ← a[mid+1..right]",  # 5
    "    while L and R not exhausted:",           # 6
    "        a[k] ← L[i] if L[i] ≤ R[j] else R[j]",  # 7
    "    copy the rest of L, then of R",          # 8
]


def merge_sort(em: StepEmitter) -> Generator[StepEvent, None, None]:
    yield from _merge_sort(em, 0, len(em) - 1)


def _merge_sort(em: StepEmitter, left: int, right: int) -> Generator[StepEvent, None, None]:
    if left >= right:
        return

    mid = (left + right) // 2
    yield from em.mark(left, right, MarkTag.ACTIVE)

    yield from _merge_sort(em, left, mid)
    yield from _merge_sort(em, mid + 1, right)
    yield from _merge(em, left, mid, right)


def _merge(em: StepEmitter, left: int, mid: int, right: int) -> Generator[StepEvent, None, None]:
    left_half  = [em[x] for x in range(left, mid + 1)]
    right_half = [em[x] for x in range(mid + 1, right + 1)]

    i = j = 0
    k = left

    while i < len(left_half) and j < len(right_half):
        yield from em.compare(k, k)
        if left_half[i] <= right_half[j]:
            value = left_half[i]
            i += 1
        else:
            value = right_half[j]
            j += 1
        yield from em.assign(k, value)
        k += 1

    for value in left_half[i:]:
        yield from em.assign(k, value)
        k += 1

    for value in right_half[j:]:
        yield from em.assign(k, value)
        k += 1

    yield from em.mark(left, right, MarkTag.MERGED)
