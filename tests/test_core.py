"""Data layer: events, replay, the bounds-checked working array, factories."""

from dataclasses import FrozenInstanceError

import pytest

from core import (
    Assign, Compare, Done, IndexOutOfRange, MarkTag, RangeMark, StepKind, Swap,
    WorkingArray, generate_array, parse_array, replay,
)


def test_replay_applies_only_mutating_events():
    events = [
        Compare(0, 1),
        Swap(0, 1),
        RangeMark(0, 0, MarkTag.SORTED),
        Assign(2, 9),
    ]
    assert replay([3, 1, 2], events) == [1, 3, 9]


def test_replay_does_not_touch_the_initial_sequence():
    initial = [2, 1]
    replay(initial, [Swap(0, 1)])
    assert initial == [2, 1]


def test_events_are_frozen():
    event = Swap(0, 1)
    with pytest.raises(FrozenInstanceError):
        event.i = 5


def test_event_kinds_and_dicts():
    assert Compare(1, 2).kind is StepKind.COMPARE
    assert Assign(0, 7).to_dict() == {"kind": "assign", "i": 0, "value": 7}
    assert RangeMark(1, 3, MarkTag.PIVOT).to_dict() == {
        "kind": "range_mark", "start": 1, "end": 3, "tag": "pivot",
    }
    assert Done((1, 2)).to_dict() == {"kind": "done", "final_array": [1, 2]}


def test_working_array_rejects_out_of_range_and_negative_indices():
    arr = WorkingArray([4, 5, 6])
    assert arr[2] == 6
    with pytest.raises(IndexOutOfRange):
        arr[3]
    with pytest.raises(IndexOutOfRange):
        arr[-1]
    with pytest.raises(IndexOutOfRange):
        arr[0.5] = 1


def test_index_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        WorkingArray([]).check(0)


def test_working_array_keeps_initial_snapshot():
    arr = WorkingArray([3, 1])
    arr[0] = 10
    assert arr.initial == (3, 1)
    assert arr.snapshot() == (10, 1)


def test_generate_array_is_reproducible_and_bounded():
    a = generate_array(50, 10, 20, seed=3)
    assert a == generate_array(50, 10, 20, seed=3)
    assert len(a) == 50
    assert all(10 <= v < 20 for v in a)


def test_generate_array_validates_arguments():
    with pytest.raises(ValueError):
        generate_array(-1)
    with pytest.raises(ValueError):
        generate_array(5, 10, 10)


@pytest.mark.parametrize("text, expected", [
    ("5, 3, 8, 1", [5, 3, 8, 1]),
    ("5 3 8 1", [5, 3, 8, 1]),
    ("[2.5; 1; 4]", [2.5, 1, 4]),
    ("", []),
])
def test_parse_array(text, expected):
    assert parse_array(text) == expected


def test_parse_array_rejects_garbage():
    with pytest.raises(ValueError):
        parse_array("1, two, 3")


@pytest.mark.parametrize("text", ["1, nan", "inf 2", "3; -Infinity"])
def test_parse_array_rejects_non_finite_values(text):
    with pytest.raises(ValueError, match="Not a number"):
        parse_array(text)
