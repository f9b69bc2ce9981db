"""Streams that filter and transform the items of another stream."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Tuple

from .base import R, ReadStream, ReadStreamFactory, T, V, _chain_factory, _InnerStream


class FilterMapStream(_InnerStream[R], Generic[T, R]):
    """Filters and transforms in one step.

    ``predicate`` returns a ``(value, keep)`` pair; only values whose ``keep``
    is true are passed on.
    """

    def __init__(self, inner: ReadStream[T], predicate: Callable[[T], Tuple[R, bool]]) -> None:
        super().__init__(inner)
        self._predicate = predicate
        self._current: Optional[R] = None

    def next(self) -> bool:
        while self._inner.next():
            value, keep = self._predicate(self._inner.data())
            if keep:
                self._current = value
                return True
        self._current = None
        return False

    def data(self) -> Optional[R]:
        return self._current

    def error(self) -> Optional[BaseException]:
        return super().error()

    def close(self) -> Any:
        return super().close()


class FilterStream(FilterMapStream[T, T]):
    """Passes on only the items of ``inner`` that satisfy ``predicate``."""

    def __init__(self, inner: ReadStream[T], predicate: Callable[[T], bool]) -> None:
        super().__init__(inner, lambda item: (item, predicate(item)))

    def next(self) -> bool:
        return super().next()

    def data(self) -> Optional[T]:
        return super().data()

    def error(self) -> Optional[BaseException]:
        return super().error()

    def close(self) -> Any:
        return super().close()


class MapperStream(_InnerStream[V], Generic[T, V]):
    """Applies ``mapper`` to each item of ``inner``."""

    def __init__(self, inner: ReadStream[T], mapper: Callable[[T], V]) -> None:
        super().__init__(inner)
        self._mapper = mapper

    def next(self) -> bool:
        return self._inner.next()

    def data(self) -> V:
        return self._mapper(self._inner.data())

    def error(self) -> Optional[BaseException]:
        return super().error()

    def close(self) -> Any:
        return super().close()


class MapperErrStream(_InnerStream[V], Generic[T, V]):
    """Applies a mapper that may raise; the exception becomes the item's error.

    The error is reset on every successful mapping, so :meth:`error` reports
    the outcome of the current item, falling back to the inner stream's error.
    """

    def __init__(self, inner: ReadStream[T], mapper: Callable[[T], V]) -> None:
        super().__init__(inner)
        self._mapper = mapper
        self._current: Optional[V] = None
        self._error: Optional[BaseException] = None

    def next(self) -> bool:
        if not self._inner.next():
            return False
        try:
            self._current = self._mapper(self._inner.data())
            self._error = None
        except Exception as exc:
            self._current = None
            self._error = exc
        return True

    def data(self) -> Optional[V]:
        return self._current

    def error(self) -> Optional[BaseException]:
        return self._error if self._error is not None else super().error()

    def close(self) -> Any:
        return super().close()


def filter_stream(inner: ReadStream[T], predicate: Callable[[T], bool]) -> FilterStream[T]:
    """Keep only the items of ``inner`` for which ``predicate`` is true."""
    return FilterStream(inner, predicate)


def filter_factory(inner: ReadStreamFactory, predicate: Callable[[Any], bool]) -> ReadStreamFactory:
    """Wrap a stream factory so that the streams it makes are filtered."""
    return _chain_factory(filter_stream, inner, predicate)


def filter_map(
    inner: ReadStream[T], predicate: Callable[[T], Tuple[R, bool]]
) -> FilterMapStream[T, R]:
    """Filter and transform ``inner`` with a predicate returning ``(value, keep)``."""
    return FilterMapStream(inner, predicate)


def map_stream(inner: ReadStream[T], mapper: Callable[[T], V]) -> MapperStream[T, V]:
    """Transform every item of ``inner`` with ``mapper``."""
    return MapperStream(inner, mapper)


def map_factory(inner: ReadStreamFactory, mapper: Callable[[Any], Any]) -> ReadStreamFactory:
    """Wrap a stream factory so that the streams it makes are mapped."""
    return _chain_factory(map_stream, inner, mapper)


def map_err(inner: ReadStream[T], mapper: Callable[[T], V]) -> MapperErrStream[T, V]:
    """Transform every item with a mapper whose exceptions become stream errors."""
    return MapperErrStream(inner, mapper)