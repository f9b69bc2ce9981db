"""Helpers that drain, fill and connect streams."""

from __future__ import annotations

import contextlib
from typing import Any, Callable, Iterable, Iterator, List, Tuple

from .base import (
    K,
    ReadStream,
    StreamError,
    T,
    V,
    WriteStream,
    _raise_failure,
    is_end_of_stream,
    seq_keys,
    seq_values,
)


@contextlib.contextmanager
def _reraise(message: str, written: Any) -> Iterator[None]:
    """Turn any exception in the block into a :class:`StreamError`."""
    try:
        yield
    except Exception as exc:
        raise StreamError(f"{message}: {exc}", written=written) from exc


def _read_items(src: ReadStream[T], written: Callable[[], Any]) -> Iterator[T]:
    """Yield the items of ``src``, stopping at end-of-stream and raising other errors."""
    while src.next():
        err = src.error()
        if err is not None:
            if is_end_of_stream(err):
                return
            raise StreamError(f"read error: {err}", written=written()) from err
        yield src.data()


def consume(stream: ReadStream[T]) -> List[T]:
    """Read every item of ``stream``; raise its error unless it is end-of-stream."""
    result = []
    while stream.next():
        result.append(stream.data())
    _raise_failure(stream)
    return result


def consume_err_skip(stream: ReadStream[T]) -> List[T]:
    """Read every item, leaving out those read while the stream reported an error."""
    result = []
    while stream.next():
        if stream.error() is None:
            result.append(stream.data())
    return result


def read_all(stream: ReadStream[T]) -> List[T]:
    """Same as :func:`consume`."""
    return consume(stream)


def write_all(stream: WriteStream[T], items: Iterable[T]) -> int:
    """Write all ``items`` to ``stream`` and flush it; return the amount written."""
    return write_seq(stream, iter(items))


def write_seq(stream: WriteStream[T], items: Iterable[T]) -> int:
    """Write everything an iterable yields to ``stream`` and flush it."""
    total = 0
    for item in items:
        with _reraise("write error", 0):
            total += stream.write(item)
    with _reraise("flush error", 0):
        stream.flush()
    return total


def write_seq_keys(stream: WriteStream[K], items: Iterable[Tuple[K, V]]) -> int:
    """Write the keys of a sequence of pairs to ``stream``."""
    return write_seq(stream, seq_keys(items))


def write_seq_values(stream: WriteStream[V], items: Iterable[Tuple[K, V]]) -> int:
    """Write the values of a sequence of pairs to ``stream``."""
    return write_seq(stream, seq_values(items))


def pipe(src: ReadStream[T], dst: WriteStream[T]) -> int:
    """Copy every item of ``src`` into ``dst``; return the amount written."""
    total = 0
    for item in _read_items(src, lambda: total):
        with _reraise("write error", total):
            total += dst.write(item)
    with _reraise("flush error", total):
        dst.flush()
    return total


def multicast(src: ReadStream[T], *destinations: WriteStream[T]) -> List[int]:
    """Copy every item of ``src`` into each destination; return per-destination amounts."""
    if not destinations:
        return []
    written = [0] * len(destinations)
    for item in _read_items(src, lambda: list(written)):
        for index, dst in enumerate(destinations):
            with _reraise(f"write error to destination {index}", list(written)):
                written[index] += dst.write(item)
    for index, dst in enumerate(destinations):
        with _reraise(f"flush error for destination {index}", list(written)):
            dst.flush()
    return written