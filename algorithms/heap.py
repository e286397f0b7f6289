"""
heap.py — Heap Sort
====================
1. Build a max-heap bottom-up: heapify every index from n//2 - 1 down to 0.
2. Repeatedly swap the root (current maximum) with the last unsorted
   element, mark that element SORTED, shrink the heap and sift the new
   root down.

heapify compares each existing child against the current `largest`
(Compare(child, largest)) and recurses after a swap.
"""

from typing import Generator, List

from algorithms.emitter import StepEmitter
from core.events import MarkTag, StepEvent


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                          # 0
    "    for i in n//2-1 .. 0: heapify(a, n, i)", # 1
    "    for end in n-1 .. 1:",                   # 2
    "        swap(a[0], a[end]); mark a[end] sorted",  # 3
    "        heapify(a, end, 0)",                 # 4
    "def heapify(a, size, i):",                   # 5
    "    largest ← i; l ← 2i+1; r ← 2i+2",        # 6
    "    if l < size and a[l] > a[largest]: largest ← l",  # 7
    "    if r < size and a[r] > a[largest]: largest ← r",  # 8
    "    if largest ≠ i:",                        # 9
    "        swap(a[i], a[largest]); heapify(a, size, largest)",  # 10
]


def heap_sort(em: StepEmitter) -> Generator[StepEvent, None, None]:
    n = len(em)

    for i in range(n // 2 - 1, -1, -1):
        yield from _heapify(em, n, i)

    for end in range(n - 1, 0, -1):
        yield from em.swap(0, end)
        yield from em.mark(end, end, MarkTag.SORTED)
        yield from _heapify(em, end, 0)

    if n:
        yield from em.mark(0, 0, MarkTag.SORTED)


def _heapify(em: StepEmitter, size: int, i: int) -> Generator[StepEvent, None, None]:
    largest = i
    left    = 2 * i + 1
    right   = 2 * i + 2

    if left < size and (yield from em.compare(left, largest)) > 0:
        largest = left

    if right < size and (yield from em.compare(right, largest)) > 0:
        largest = right

    if largest != i:
        yield from em.swap(i, largest)
        yield from _heapify(em, size, largest)
