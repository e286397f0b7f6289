"""
quick.py — Quick Sort (Lomuto partition)
=========================================
Pivot is always the LAST element of [low, high].

partition():
  - mark the pivot index PIVOT
  - compare every a[j], j in [low, high), against a[high]
  - i tracks the end of the "< pivot" region; smaller elements are
    swapped to i (a swap with itself emits nothing)
  - finally swap the pivot into i+1 and mark that index SORTED

Example, [5, 3, 8, 1]:
    partition(0, 3) pivot 1 → nothing smaller → Swap(0, 3) → [1, 3, 8, 5]
    partition(1, 3) pivot 5 → 3 stays (i == j) → Swap(2, 3) → [1, 3, 5, 8]
"""

from typing import Generator, List, Tuple

from algorithms.emitter import StepEmitter
from core.events import MarkTag, StepEvent


PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",              # 0
    "    if low < high:",                         # 1
    "        p ← partition(a, low, high)",        # 2
    "        quick_sort(a, low, p-1)",            # 3
    "        quick_sort(a, p+1, high)",           # 4
    "def partition(a, low, high):",               # 5
    "    pivot ← a[high]; i ← low-1",             # 6
    "    for j in low .. high-1:",                # 7
    "        if a[j] < pivot:",                   # 8
    "            i ← i+1; swap(a[i], a[j])",      # 9
    "    swap(a[i+1], a[high])",                  # 10
    "    return i+1",                             # 11
]


def quick_sort(em: StepEmitter) -> Generator[StepEvent, None, None]:
    # pending (low, high) ranges; left is pushed last so it is sorted first
    stack: List[Tuple[int, int]] = [(0, len(em) - 1)]
    while stack:
        low, high = stack.pop()
        if low >= high:
            continue
        pivot_index = yield from _partition(em, low, high)

        stack.append((pivot_index + 1, high))
        stack.append((low, pivot_index - 1))


def _partition(em: StepEmitter, low: int, high: int) -> Generator[StepEvent, None, int]:
    yield from em.mark(high, high, MarkTag.PIVOT)

    i = low - 1
    for j in range(low, high):
        if (yield from em.compare(j, high)) < 0:
            i += 1
            yield from em.swap(i, j)

    yield from em.swap(i + 1, high)
    yield from em.mark(i + 1, i + 1, MarkTag.SORTED)
    return i + 1
