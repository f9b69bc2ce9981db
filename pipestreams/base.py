"""Core stream protocols and helpers for turning streams into iterators."""

from __future__ import annotations

import contextlib
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


class StreamError(Exception):
    """Failure while moving data between streams.

    ``written`` holds whatever had been written before the failure, when the
    operation that raised it keeps such a count.
    """

    def __init__(self, message: str, written: Any = None) -> None:
        super().__init__(message)
        self.written = written


class EndOfStream(Exception):
    """Marks the normal end of a stream rather than a failure."""


def is_end_of_stream(error: Optional[BaseException]) -> bool:
    """Tell whether an error is, or was caused by, an end-of-stream marker."""
    seen = set()
    while error is not None and id(error) not in seen:
        if isinstance(error, EndOfStream):
            return True
        seen.add(id(error))
        error = error.__cause__
    return False


class ReadStream(ABC, Generic[T]):
    """A pull-based source of items."""

    @abstractmethod
    def next(self) -> bool:
        """Advance to the next item; return False once there is none."""

    @abstractmethod
    def data(self) -> T:
        """Return the current item."""

    @abstractmethod
    def error(self) -> Optional[BaseException]:
        """Return the error the stream stopped on, if any."""

    @abstractmethod
    def close(self) -> None:
        """Release the resources behind the stream."""

    def __iter__(self) -> Iterator[T]:
        return iterate(self)

    def __enter__(self) -> "ReadStream[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class WriteStream(ABC, Generic[T]):
    """A sink that accepts items one at a time."""

    @abstractmethod
    def write(self, item: T) -> int:
        """Write one item and return how much was written."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered data to its destination."""

    @abstractmethod
    def error(self) -> Optional[BaseException]:
        """Return the error the stream is in, if any."""

    @abstractmethod
    def close(self) -> None:
        """Finish writing and release resources."""


class Transform(ABC):
    """Something that renders a stream into a writable target."""

    @abstractmethod
    def write_to(self, writer: Any) -> int:
        """Write the rendered stream to ``writer`` and return the amount written."""


ReadStreamFactory = Callable[[Any], ReadStream[Any]]
WriteStreamFactory = Callable[[Any], WriteStream[Any]]


class _InnerStream(ReadStream[T]):
    """A stream that reads from another one and shares its error and close."""

    def __init__(self, inner: ReadStream[Any]) -> None:
        self._inner = inner

    def error(self) -> Optional[BaseException]:
        return self._inner.error()

    def close(self) -> None:
        self._inner.close()


def _chain_factory(build: Callable[..., ReadStream[Any]], inner_factory: ReadStreamFactory,
                   *args: Any) -> ReadStreamFactory:
    """Make a factory that wraps what ``inner_factory`` makes with ``build``."""

    def factory(source: Any) -> ReadStream[Any]:
        return build(inner_factory(source), *args)

    return factory


def _raise_failure(stream: ReadStream[Any]) -> None:
    """Raise the stream's error unless it is absent or marks the end."""
    err = stream.error()
    if err is not None and not is_end_of_stream(err):
        raise err


def iterate(stream: ReadStream[T]) -> Iterator[T]:
    """Yield every item of ``stream``, closing it when iteration ends."""
    try:
        while stream.next():
            yield stream.data()
    finally:
        with contextlib.suppress(Exception):
            stream.close()


def iterate_with_errors(
    stream: ReadStream[T],
) -> Iterator[Tuple[Optional[T], Optional[BaseException]]]:
    """Yield ``(item, None)`` pairs, then ``(None, error)`` for any read or close error."""
    closed = False
    try:
        while stream.next():
            yield stream.data(), None
        err = stream.error()
        if err is not None:
            yield None, err
        closed = True
        try:
            stream.close()
        except Exception as exc:
            yield None, exc
    finally:
        if not closed:
            with contextlib.suppress(Exception):
                stream.close()


def collect(seq: Iterable[T]) -> list:
    """Gather all items of an iterable into a list."""
    return list(seq)


def seq_keys(pairs: Iterable[Tuple[K, V]]) -> Iterator[K]:
    """Yield the first element of each pair."""
    return (key for key, _ in pairs)


def seq_values(pairs: Iterable[Tuple[K, V]]) -> Iterator[V]:
    """Yield the second element of each pair."""
    return (value for _, value in pairs)