"""Step Emitter primitives."""

import pytest

from algorithms.emitter import StepEmitter
from core import Assign, Compare, IndexOutOfRange, MarkTag, RangeMark, StepKind, Swap


def drive(gen):
    """Exhaust a primitive, returning (events, return value)."""
    events = []
    try:
        while True:
            events.append(next(gen))
    except StopIteration as stop:
        return events, stop.value


def test_compare_returns_ordering_without_mutation():
    em = StepEmitter([3, 1, 3])
    assert drive(em.compare(0, 1)) == ([Compare(0, 1)], 1)
    assert drive(em.compare(1, 0)) == ([Compare(1, 0)], -1)
    assert drive(em.compare(0, 2)) == ([Compare(0, 2)], 0)
    assert em.array.to_list() == [3, 1, 3]


def test_assign_writes_before_yielding():
    em  = StepEmitter([1, 2])
    gen = em.assign(1, 9)
    event = next(gen)
    assert event == Assign(1, 9)
    assert em[1] == 9


def test_swap_exchanges_values():
    em = StepEmitter([1, 2, 3])
    events, _ = drive(em.swap(0, 2))
    assert events == [Swap(0, 2)]
    assert em.array.to_list() == [3, 2, 1]


def test_swap_with_itself_emits_nothing():
    em = StepEmitter([1, 2])
    events, _ = drive(em.swap(1, 1))
    assert events == []
    assert em.steps == 0


@pytest.mark.parametrize("primitive", [
    lambda em: em.compare(0, 4),
    lambda em: em.compare(-1, 0),
    lambda em: em.assign(4, 1),
    lambda em: em.swap(0, 4),
    lambda em: em.swap(4, 4),
    lambda em: em.mark(0, 4, MarkTag.SORTED),
])
def test_out_of_range_indices_raise(primitive):
    em = StepEmitter([1, 2, 3, 4])
    with pytest.raises(IndexOutOfRange):
        drive(primitive(em))


def test_step_counter_counts_compare_assign_swap_only():
    em = StepEmitter([2, 1, 3])
    drive(em.compare(0, 1))
    drive(em.swap(0, 1))
    drive(em.assign(2, 5))
    drive(em.mark(0, 2, MarkTag.SORTED))
    assert em.steps == 3
    assert em.counts[StepKind.RANGE_MARK] == 1
    assert em.last_event == RangeMark(0, 2, MarkTag.SORTED)


def test_finish_builds_done_from_current_array():
    em = StepEmitter([2, 1])
    drive(em.swap(0, 1))
    done = em.finish()
    assert done.final_array == (1, 2)
    assert em.last_event is done
