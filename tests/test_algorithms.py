"""Algorithm Library: every algorithm, replayed from its events alone."""

import asyncio
import random

import pytest

from algorithms import REGISTRY, AlgoInfo, algorithms_by_tag, get_algorithm, list_algorithms, require_algorithm
from algorithms.emitter import StepEmitter
from core import (
    Compare, InvalidAlgorithmId, MarkTag, RangeMark, StepKind, Swap, replay,
)
from engine import PlaybackDriver, RunStatus

ALGORITHMS = ["bubble", "selection", "insertion", "merge", "quick", "heap"]

INPUTS = [
    [5, 3, 8, 1],
    [1, 2, 3, 4, 5, 6],
    [6, 5, 4, 3, 2, 1],
    [4, 1, 4, 2, 1, 4, 3],
    [7, 7, 7],
    [2.5, -1, 0, 3.25, -7.5],
    [2, 1],
]


def run(algo_key, values):
    """Exhaust an algorithm synchronously; return (events, emitter)."""
    em = StepEmitter(values)
    events = list(REGISTRY[algo_key].fn(em))
    return events, em


def kinds(events, kind):
    return [e for e in events if e.kind is kind]


@pytest.mark.parametrize("algo_key", ALGORITHMS)
@pytest.mark.parametrize("values", INPUTS)
def test_replay_reproduces_sorted_array(algo_key, values):
    events, em = run(algo_key, values)
    final = em.array.to_list()
    assert replay(values, events) == final
    assert final == sorted(values)


@pytest.mark.parametrize("algo_key", ALGORITHMS)
def test_random_arrays(algo_key):
    rng = random.Random(1234)
    for size in (3, 17, 64):
        values = [rng.randint(0, 20) for _ in range(size)]
        events, em = run(algo_key, values)
        assert replay(values, events) == sorted(values)


@pytest.mark.parametrize("algo_key", ALGORITHMS)
def test_mutating_events_are_deterministic(algo_key):
    values = [9, 4, 7, 1, 8, 2, 2, 6]
    first, _  = run(algo_key, values)
    second, _ = run(algo_key, values)
    mutating = lambda evs: [e for e in evs if e.kind in (StepKind.SWAP, StepKind.ASSIGN)]
    assert mutating(first) == mutating(second)
    assert first == second


@pytest.mark.parametrize("algo_key", ALGORITHMS)
@pytest.mark.parametrize("values", [[], [42]])
def test_trivial_arrays_emit_no_compare_or_swap(algo_key, values):
    events, em = run(algo_key, values)
    assert kinds(events, StepKind.COMPARE) == []
    assert kinds(events, StepKind.SWAP) == []
    assert em.array.to_list() == values


@pytest.mark.parametrize("algo_key", ALGORITHMS)
def test_every_index_in_events_is_in_range(algo_key):
    values = [3, 9, 1, 7, 5]
    events, _ = run(algo_key, values)
    for e in events:
        for attr in ("i", "j", "start", "end"):
            if hasattr(e, attr):
                assert 0 <= getattr(e, attr) < len(values)


# ---------------------------------------------------------------------------
# Bubble
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("n", [2, 5, 20])
def test_bubble_early_exit_on_sorted_input(n):
    events, _ = run("bubble", list(range(n)))
    assert len(kinds(events, StepKind.COMPARE)) == n - 1
    assert kinds(events, StepKind.SWAP) == []
    assert events[-1] == RangeMark(0, n - 1, MarkTag.SORTED)


def test_bubble_marks_suffix_after_each_pass():
    events, _ = run("bubble", [3, 2, 1])
    marks = kinds(events, StepKind.RANGE_MARK)
    assert marks[0] == RangeMark(2, 2, MarkTag.SORTED)
    assert marks[-1].start == 0


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
def test_selection_scans_for_minimum():
    events, _ = run("selection", [3, 1, 2])
    assert kinds(events, StepKind.COMPARE)[:2] == [Compare(0, 1), Compare(1, 2)]
    assert kinds(events, StepKind.SWAP) == [Swap(0, 1), Swap(1, 2)]
    sorted_marks = [e for e in kinds(events, StepKind.RANGE_MARK) if e.tag is MarkTag.SORTED]
    assert [m.start for m in sorted_marks] == [0, 1, 2]


# ---------------------------------------------------------------------------
# Insertion
# ---------------------------------------------------------------------------
def test_insertion_shifts_with_assign():
    events, _ = run("insertion", [2, 3, 1])
    assert kinds(events, StepKind.SWAP) == []
    assigns = kinds(events, StepKind.ASSIGN)
    # 1 is shifted past 3 and 2, then placed at index 0
    assert [(a.i, a.value) for a in assigns] == [(2, 3), (1, 2), (0, 1)]
    assert events[0] == RangeMark(0, 0, MarkTag.SORTED)
    assert events[-1] == RangeMark(0, 2, MarkTag.SORTED)


def test_insertion_skips_placement_when_key_does_not_move():
    events, _ = run("insertion", [1, 2, 3])
    assert kinds(events, StepKind.ASSIGN) == []
    assert len(kinds(events, StepKind.COMPARE)) == 2


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------
def test_merge_writes_every_slot_with_assign():
    events, _ = run("merge", [4, 3, 2, 1])
    assert kinds(events, StepKind.SWAP) == []
    # 2 merges of size 2 + 1 merge of size 4
    assert len(kinds(events, StepKind.ASSIGN)) == 8
    assert events[0] == RangeMark(0, 3, MarkTag.ACTIVE)
    assert events[-1] == RangeMark(0, 3, MarkTag.MERGED)


def test_merge_compare_highlights_destination_slot():
    events, _ = run("merge", [2, 1])
    assert kinds(events, StepKind.COMPARE) == [Compare(0, 0)]


# ---------------------------------------------------------------------------
# Quick
# ---------------------------------------------------------------------------
def test_quick_reference_trace():
    events, em = run("quick", [5, 3, 8, 1])
    assert events == [
        RangeMark(3, 3, MarkTag.PIVOT),
        Compare(0, 3),
        Compare(1, 3),
        Compare(2, 3),
        Swap(0, 3),
        RangeMark(0, 0, MarkTag.SORTED),
        RangeMark(3, 3, MarkTag.PIVOT),
        Compare(1, 3),
        Compare(2, 3),
        Swap(2, 3),
        RangeMark(2, 2, MarkTag.SORTED),
    ]
    assert em.array.to_list() == [1, 3, 5, 8]


@pytest.mark.parametrize("values", [list(range(1000)), list(range(1000, 0, -1))])
def test_quick_handles_degenerate_partitions_on_large_input(values):
    # sorted and reversed input split off one element per partition
    events, em = run("quick", values)
    assert em.array.to_list() == sorted(values)
    assert len(kinds(events, StepKind.RANGE_MARK)) == 2 * (len(values) - 1)

    async def scenario():
        handle = PlaybackDriver().start("quick", values, delay=0)
        return handle, await handle.wait()
    handle, status = asyncio.run(scenario())
    assert status is RunStatus.COMPLETED
    assert handle.failure is None
    assert handle.array == sorted(values)


# ---------------------------------------------------------------------------
# Heap
# ---------------------------------------------------------------------------
def test_heap_builds_max_heap_first():
    values = [1, 2, 3, 4, 5, 6, 7]
    events, _ = run("heap", values)
    first_sorted = next(k for k, e in enumerate(events) if e.kind is StepKind.RANGE_MARK)
    # the event before the first mark is the root extraction swap
    assert events[first_sorted - 1] == Swap(0, len(values) - 1)
    heap = replay(values, events[:first_sorted - 1])
    for parent in range(len(heap)):
        for child in (2 * parent + 1, 2 * parent + 2):
            if child < len(heap):
                assert heap[parent] >= heap[child]


def test_heap_marks_each_extracted_root():
    events, _ = run("heap", [4, 1, 3, 2])
    sorted_marks = [e.start for e in kinds(events, StepKind.RANGE_MARK) if e.tag is MarkTag.SORTED]
    assert sorted_marks == [3, 2, 1, 0]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_lists_all_six_with_complexity():
    assert [a.key for a in list_algorithms()] == ALGORITHMS
    quick = get_algorithm("quick")
    assert isinstance(quick, AlgoInfo)
    assert quick.complexity.to_dict() == {
        "timeBest": "O(n log n)", "timeAverage": "O(n log n)",
        "timeWorst": "O(n²)", "spaceWorst": "O(log n)",
    }


def test_require_algorithm_rejects_unknown_keys():
    assert get_algorithm("bogo") is None
    with pytest.raises(InvalidAlgorithmId):
        require_algorithm("bogo")
    with pytest.raises(InvalidAlgorithmId):
        require_algorithm(None)


def test_algorithms_by_tag():
    assert {a.key for a in algorithms_by_tag("stable")} == {"bubble", "insertion", "merge"}
