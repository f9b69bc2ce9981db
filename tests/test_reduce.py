import pytest

from pipestreams.memory import mem_reader
from pipestreams.reduce import reduce, reduce_map, reduce_slice


@pytest.mark.parametrize(
    "data,fn,initial,expected",
    [
        ([1, 2, 3, 4, 5], lambda acc, n: acc + n, 0, 15),
        ([2, 3, 4], lambda acc, n: acc * n, 1, 24),
        ([5, 2, 8, 1, 9, 3], lambda acc, n: n if n > acc else acc, 0, 9),
        ([], lambda acc, n: acc + n, 10, 10),
    ],
)
def test_reduce(data, fn, initial, expected):
    assert reduce(mem_reader(data), fn, initial) == expected


def test_reduce_with_error():
    with pytest.raises(ValueError, match="stream error"):
        reduce(mem_reader([1, 2, 3], ValueError("stream error")), lambda a, n: a + n, 0)


def _prepend(acc, item):
    return [item] + acc


def _append_long(acc, item):
    return acc + [item] if len(item) > 2 else acc


@pytest.mark.parametrize(
    "data,fn,expected",
    [
        (["a", "b", "c"], lambda acc, item: acc + [item], ["a", "b", "c"]),
        (["apple", "a", "application", "ab"], _append_long, ["apple", "application"]),
        (["first", "second", "third"], _prepend, ["third", "second", "first"]),
        ([], lambda acc, item: acc + [item], []),
    ],
)
def test_reduce_slice(data, fn, expected):
    assert reduce_slice(mem_reader(data), fn) == expected


def test_reduce_slice_with_error():
    with pytest.raises(ValueError, match="slice error"):
        reduce_slice(mem_reader(["a", "b"], ValueError("slice error")), lambda a, i: a + [i])


def _count(acc, word):
    acc[word] = acc.get(word, 0) + 1
    return acc


def _lengths(acc, word):
    acc[word] = len(word)
    return acc


def _long_lengths(acc, word):
    if len(word) > 1:
        acc[word] = len(word)
    return acc


@pytest.mark.parametrize(
    "data,fn,expected",
    [
        (
            ["apple", "banana", "apple", "cherry", "banana", "apple"],
            _count,
            {"apple": 3, "banana": 2, "cherry": 1},
        ),
        (["cat", "dog", "elephant", "cat"], _lengths, {"cat": 3, "dog": 3, "elephant": 8}),
        (["a", "bb", "ccc", "d", "ee"], _long_lengths, {"bb": 2, "ccc": 3, "ee": 2}),
        ([], _count, {}),
    ],
)
def test_reduce_map(data, fn, expected):
    assert reduce_map(mem_reader(data), fn) == expected


def test_reduce_map_with_error():
    with pytest.raises(ValueError, match="map error"):
        reduce_map(mem_reader(["a", "b"], ValueError("map error")), _count)


def test_reduce_slice_example():
    words = ["cat", "dog", "elephant", "ant", "butterfly", "bird"]
    result = reduce_slice(
        mem_reader(words), lambda acc, w: acc + [w] if len(w) > 3 else acc
    )
    assert result == ["elephant", "butterfly", "bird"]