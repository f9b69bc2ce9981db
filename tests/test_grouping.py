from dataclasses import dataclass

import pytest

from pipestreams.grouping import (
    batch,
    batch_factory,
    flatten,
    flatten_factory,
    group,
    group_factory,
)
from pipestreams.memory import mem_reader
from pipestreams.utils import consume

ERR_STREAM = RuntimeError("stream error")
ERR_NO_ITEMS = RuntimeError("no items and error")


def _drain(stream):
    """Read a stream by hand, recording each item with the error seen after it."""
    steps = []
    while stream.next():
        steps.append((stream.data(), stream.error()))
    return steps


@pytest.mark.parametrize(
    "items, err, size, expected_batches",
    [
        ([], None, 3, []),
        ([1, 2], None, 3, [[1, 2]]),
        ([1, 2, 3], None, 3, [[1, 2, 3]]),
        ([1, 2, 3, 4, 5, 6], None, 3, [[1, 2, 3], [4, 5, 6]]),
        ([1, 2, 3, 4, 5], None, 3, [[1, 2, 3], [4, 5]]),
        ([1, 2, 3], ERR_STREAM, 2, [[1, 2], [3]]),
        ([], ERR_NO_ITEMS, 2, []),
    ],
)
def test_batch_stream(items, err, size, expected_batches):
    stream = batch(mem_reader(items, err), size)
    assert [data for data, _ in _drain(stream)] == expected_batches
    assert stream.error() is err
    assert stream.next() is False


@pytest.mark.parametrize(
    "stream, expected",
    [
        (batch(mem_reader(range(1, 11)), 3), [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10]]),
        (batch_factory(mem_reader, 2)([1, 2, 3]), [[1, 2], [3]]),
        (flatten(mem_reader([[1, 2], [3], [4, 5]])), [1, 2, 3, 4, 5]),
        (flatten(mem_reader([[1, 2], [3], [], [4, 5]])), [1, 2, 3, 4, 5]),
        (flatten(mem_reader([])), []),
        (flatten(mem_reader([[]])), []),
        (flatten(mem_reader([[], []])), []),
        (flatten(mem_reader([[1, 2], [3, 4, 5], [6], [7, 8, 9]])), list(range(1, 10))),
        (flatten_factory(mem_reader)([[1], [], [2, 3]]), [1, 2, 3]),
        (group(mem_reader([1, 1, 2, 2, 3, 1]), lambda i: i), [[1, 1], [2, 2], [3], [1]]),
        (
            group(
                mem_reader(["apple", "apricot", "banana", "blueberry", "cherry", "coconut"]),
                lambda s: s[0],
            ),
            [["apple", "apricot"], ["banana", "blueberry"], ["cherry", "coconut"]],
        ),
        (group_factory(mem_reader, lambda n: n % 2)([1, 3, 2, 4, 5]), [[1, 3], [2, 4], [5]]),
    ],
)
def test_consumed_results(stream, expected):
    assert consume(stream) == expected


def test_flatten_error():
    with pytest.raises(RuntimeError, match="stream error"):
        consume(flatten(mem_reader([[1, 2], [3]], ERR_STREAM)))


def test_flatten_data_without_item_raises():
    stream = flatten(mem_reader([]))
    assert stream.next() is False
    with pytest.raises(IndexError):
        stream.data()


@pytest.mark.parametrize(
    "items, expected",
    [
        (["a", "a", "b", "b", "b", "a", "c"], [["a", "a"], ["b", "b", "b"], ["a"], ["c"]]),
        ([], []),
        (["single"], [["single"]]),
    ],
)
def test_group_steps(items, expected):
    stream = group(mem_reader(items), lambda s: s)
    assert _drain(stream) == [(want, None) for want in expected]
    assert stream.error() is None
    stream.close()


@dataclass
class _Person:
    name: str
    age: int


def test_group_custom_key():
    people = [
        _Person("Alice", 25),
        _Person("Bob", 25),
        _Person("Charlie", 25),
        _Person("David", 30),
        _Person("Eve", 30),
        _Person("Frank", 25),
    ]
    groups = consume(group(mem_reader(people), lambda p: p.age))
    assert [[(p.name, p.age) for p in g] for g in groups] == [
        [("Alice", 25), ("Bob", 25), ("Charlie", 25)],
        [("David", 30), ("Eve", 30)],
        [("Frank", 25)],
    ]


def test_group_captures_inner_error():
    stream = group(mem_reader([1, 1, 2], ERR_STREAM), lambda i: i)
    assert _drain(stream) == [([1, 1], None), ([2], ERR_STREAM)]