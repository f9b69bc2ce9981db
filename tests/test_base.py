import pytest

from pipestreams.base import (
    EndOfStream,
    ReadStream,
    StreamError,
    Transform,
    WriteStream,
    collect,
    is_end_of_stream,
    iterate,
    iterate_with_errors,
    seq_keys,
    seq_values,
)


class _ListStream(ReadStream):
    def __init__(self, items, error=None, close_error=None):
        self._items = list(items)
        self._index = -1
        self._error = error
        self._close_error = close_error
        self.closed = 0

    def next(self):
        self._index += 1
        return self._index < len(self._items)

    def data(self):
        return self._items[self._index]

    def error(self):
        return self._error

    def close(self):
        self.closed += 1
        if self._close_error is not None:
            raise self._close_error


def test_iterate_yields_all_items_and_closes():
    stream = _ListStream(["a", "b", "c"])
    assert list(iterate(stream)) == ["a", "b", "c"]
    assert stream.closed == 1


def test_iterate_closes_on_early_stop():
    stream = _ListStream([1, 2, 3])
    it = iterate(stream)
    assert next(it) == 1
    it.close()
    assert stream.closed == 1


def test_iterate_ignores_close_failure():
    stream = _ListStream([1, 2], close_error=OSError("boom"))
    assert list(iterate(stream)) == [1, 2]


def test_dunder_iter_uses_iterate():
    stream = _ListStream([5, 6])
    assert list(ReadStream.__iter__(stream)) == [5, 6]
    assert stream.closed == 1


def test_context_manager_closes():
    stream = _ListStream([1])
    entered = ReadStream.__enter__(stream)
    assert entered is stream
    assert stream.closed == 0
    ReadStream.__exit__(stream, None, None, None)
    assert stream.closed == 1


def test_iterate_with_errors_reports_stream_error():
    err = ValueError("stream error")
    stream = _ListStream([1, 2], error=err)
    pairs = list(iterate_with_errors(stream))
    assert pairs == [(1, None), (2, None), (None, err)]


def test_iterate_with_errors_reports_close_error():
    close_err = OSError("close failed")
    stream = _ListStream([1], close_error=close_err)
    pairs = list(iterate_with_errors(stream))
    assert pairs == [(1, None), (None, close_err)]


def test_iterate_with_errors_clean_stream():
    stream = _ListStream(["x"])
    assert list(iterate_with_errors(stream)) == [("x", None)]
    assert stream.closed == 1


def test_collect():
    assert collect(iter([1, 2, 3])) == [1, 2, 3]
    assert collect(iter([])) == []


def test_seq_keys_and_values():
    data = {"apple": 1, "banana": 2, "cherry": 3}
    assert sorted(seq_keys(data.items())) == sorted(data)
    assert sorted(seq_values(data.items())) == sorted(data.values())


def test_is_end_of_stream():
    assert is_end_of_stream(EndOfStream()) is True
    assert is_end_of_stream(ValueError("x")) is False
    assert is_end_of_stream(None) is False


def test_is_end_of_stream_follows_cause():
    try:
        try:
            raise EndOfStream()
        except EndOfStream as inner:
            raise StreamError("stream err: EOF") from inner
    except StreamError as outer:
        assert is_end_of_stream(outer) is True


def test_stream_error_keeps_written():
    err = StreamError("read error: x", written=[1, 2])
    assert str(err) == "read error: x"
    assert err.written == [1, 2]


@pytest.mark.parametrize("cls", [ReadStream, WriteStream, Transform])
def test_abstract_classes_cannot_be_instantiated(cls):
    with pytest.raises(TypeError):
        cls()