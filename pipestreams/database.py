"""A read stream over database result rows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, TypeVar

from .base import ReadStream

T = TypeVar("T")


class DBRows(ABC):
    """The row cursor a :class:`DBStream` reads from."""

    @abstractmethod
    def next(self) -> bool:
        """Move to the next row; return False when there is none."""

    @abstractmethod
    def scan(self) -> Sequence:
        """Return the column values of the current row."""

    @abstractmethod
    def close(self) -> None:
        """Release the rows."""


class DBStream(ReadStream[T]):
    """Turns each row into a value with ``scan_fn``.

    An exception from ``scan_fn`` becomes the error of that row and leaves
    :meth:`data` as None; a later successful scan clears it. The rows are
    closed once they are exhausted.
    """

    def __init__(self, rows: DBRows, scan_fn: Callable[[DBRows], T]) -> None:
        self._rows = rows
        self._scan_fn = scan_fn
        self._current: Optional[T] = None
        self._error: Optional[BaseException] = None

    def next(self) -> bool:
        keep = self._rows.next()
        if keep:
            try:
                self._current = self._scan_fn(self._rows)
                self._error = None
            except Exception as exc:
                self._current = None
                self._error = exc
        else:
            try:
                self._rows.close()
            except Exception:
                pass
        return keep

    def data(self) -> Optional[T]:
        return self._current

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        # The rows close themselves once exhausted.
        return None


def db(rows: DBRows, scan_fn: Callable[[DBRows], T]) -> DBStream[T]:
    """Create a stream over ``rows``, building each item with ``scan_fn``."""
    return DBStream(rows, scan_fn)