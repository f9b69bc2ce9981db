"""Folding a stream into a single value."""

from __future__ import annotations

from typing import Callable, Dict, List

from .base import R, ReadStream, T, _raise_failure


def reduce(stream: ReadStream[T], fn: Callable[[R, T], R], initial: R) -> R:
    """Fold ``stream`` with ``fn`` starting from ``initial``.

    Any error the stream reports while items are read is raised; an
    end-of-stream reported after the last item is not.
    """
    result = initial
    while stream.next():
        err = stream.error()
        if err is not None:
            raise err
        result = fn(result, stream.data())
    _raise_failure(stream)
    return result


def reduce_slice(stream: ReadStream[T], fn: Callable[[List[T], T], List[T]]) -> List[T]:
    """Fold ``stream`` into a list that starts empty."""
    return reduce(stream, fn, [])


def reduce_map(stream: ReadStream[T], fn: Callable[[Dict, T], Dict]) -> Dict:
    """Fold ``stream`` into a dict that starts empty."""
    return reduce(stream, fn, {})