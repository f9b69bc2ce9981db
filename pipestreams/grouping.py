"""Streams that batch, flatten and group the items of another stream."""

from __future__ import annotations

from typing import Any, Callable, Generic, Hashable, List, Optional, TypeVar

from .base import ReadStream, ReadStreamFactory, T, _chain_factory, _InnerStream

KeyT = TypeVar("KeyT", bound=Hashable)


class _BufferedStream(_InnerStream[List[T]]):
    """Emits lists built from the inner stream and keeps the error it ended on."""

    def __init__(self, inner: ReadStream[T]) -> None:
        super().__init__(inner)
        self._buffer: List[T] = []
        self._error: Optional[BaseException] = None
        self._done = False

    def _capture_inner_error(self) -> None:
        self._error = self._inner.error() or self._error

    def data(self) -> List[T]:
        return self._buffer

    def error(self) -> Optional[BaseException]:
        return self._error


class BatchStream(_BufferedStream[T]):
    """Reads ``inner`` in chunks of up to ``batch_size`` items."""

    def __init__(self, inner: ReadStream[T], batch_size: int) -> None:
        super().__init__(inner)
        self._batch_size = batch_size

    def next(self) -> bool:
        if self._done:
            return False
        self._buffer = []
        while len(self._buffer) < self._batch_size:
            if not self._inner.next():
                self._capture_inner_error()
                break
            self._buffer.append(self._inner.data())
        if not self._buffer:
            self._done = True
            return False
        return True

    def data(self) -> List[T]:
        return self._buffer

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> Any:
        return super().close()


class FlattenerStream(_InnerStream[T]):
    """Emits each element of the sequences read from ``inner``, skipping empty ones."""

    def __init__(self, inner: ReadStream[Any]) -> None:
        super().__init__(inner)
        self._data: List[T] = []
        self._cursor = 0

    def next(self) -> bool:
        if self._cursor < len(self._data) - 1:
            self._cursor += 1
            return True
        self._cursor = 0
        while self._inner.next():
            self._data = list(self._inner.data())
            if self._data:
                return True
        self._data = []
        return False

    def data(self) -> T:
        if not self._data:
            raise IndexError("no current item")
        return self._data[self._cursor]

    def error(self) -> Optional[BaseException]:
        return super().error()

    def close(self) -> Any:
        return super().close()


class GroupStream(_BufferedStream[T], Generic[T, KeyT]):
    """Collects runs of consecutive items sharing the key ``key_func`` gives them."""

    def __init__(self, inner: ReadStream[T], key_func: Callable[[T], KeyT]) -> None:
        super().__init__(inner)
        self._key_func = key_func
        self._current_key: Optional[KeyT] = None
        self._has_next = False

    def next(self) -> bool:
        if self._done:
            return False
        self._buffer = []
        if not self._has_next and not self._inner.next():
            self._capture_inner_error()
            self._done = True
            return False

        first = self._inner.data()
        self._current_key = self._key_func(first)
        self._has_next = False
        self._buffer.append(first)

        while self._inner.next():
            item = self._inner.data()
            if self._key_func(item) != self._current_key:
                self._has_next = True
                break
            self._buffer.append(item)

        if not self._has_next:
            self._capture_inner_error()
        return bool(self._buffer)

    def data(self) -> List[T]:
        return self._buffer

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> Any:
        return super().close()


def batch(inner: ReadStream[T], batch_size: int) -> BatchStream[T]:
    """Read ``inner`` as lists of up to ``batch_size`` items."""
    return BatchStream(inner, batch_size)


def batch_factory(inner_factory: ReadStreamFactory, batch_size: int) -> ReadStreamFactory:
    """Wrap a stream factory so that the streams it makes are batched."""
    return _chain_factory(batch, inner_factory, batch_size)


def flatten(inner: ReadStream[Any]) -> FlattenerStream[Any]:
    """Turn a stream of sequences into a stream of their elements."""
    return FlattenerStream(inner)


def flatten_factory(inner_factory: ReadStreamFactory) -> ReadStreamFactory:
    """Wrap a stream factory so that the streams it makes are flattened."""
    return _chain_factory(flatten, inner_factory)


def group(inner: ReadStream[T], key_func: Callable[[T], KeyT]) -> GroupStream[T, KeyT]:
    """Group consecutive items of ``inner`` that share a key."""
    return GroupStream(inner, key_func)


def group_factory(inner_factory: ReadStreamFactory, key_func: Callable[[Any], Any]) -> ReadStreamFactory:
    """Wrap a stream factory so that the streams it makes are grouped."""
    return _chain_factory(group, inner_factory, key_func)