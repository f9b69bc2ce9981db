"""In-memory read and write streams."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .base import ReadStream, T, WriteStream


class MemoryStream(ReadStream[T]):
    """Reads items from a list; optionally reports a fixed error."""

    def __init__(self, items: Iterable[T], error: Optional[BaseException] = None) -> None:
        self._items: List[T] = list(items)
        self._cursor = -1
        self._error = error

    def next(self) -> bool:
        self._cursor += 1
        return self._cursor < len(self._items)

    def data(self) -> T:
        if not 0 <= self._cursor < len(self._items):
            raise IndexError("no current item")
        return self._items[self._cursor]

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        return None


class MemoryWriteStream(WriteStream[T]):
    """Collects written items in a list."""

    def __init__(self) -> None:
        self._items: List[T] = []
        self._error: Optional[BaseException] = None

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    def write(self, item: T) -> int:
        self._check()
        self._items.append(item)
        return 1

    def flush(self) -> None:
        self._check()

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        self._check()

    def items(self) -> List[T]:
        """Return the items written so far."""
        return self._items

    def set_error(self, error: Optional[BaseException]) -> None:
        """Put the stream into an error state."""
        self._error = error


def mem_reader(items: Iterable[T], error: Optional[BaseException] = None) -> MemoryStream[T]:
    """Create a stream that reads ``items`` from memory."""
    return MemoryStream(items, error)


def mem_writer() -> MemoryWriteStream:
    """Create a stream that collects written items in memory."""
    return MemoryWriteStream()