"""A read stream fed by any iterable, such as a generator or a drained queue."""

from __future__ import annotations

from typing import Iterable, Optional

from .base import ReadStream, T


class ChannelStream(ReadStream[T]):
    """Reads items from an iterable until it is exhausted; it never fails.

    A :class:`queue.Queue` can be read with ``iter(q.get, sentinel)``, the
    sentinel playing the part of a closed channel.
    """

    _END = object()

    def __init__(self, channel: Iterable[T]) -> None:
        self._iterator = iter(channel)
        self._current: Optional[T] = None

    def next(self) -> bool:
        item = next(self._iterator, self._END)
        self._current = None if item is self._END else item
        return item is not self._END

    def data(self) -> Optional[T]:
        return self._current

    def error(self) -> Optional[BaseException]:
        return None

    def close(self) -> None:
        return None


def channel(source: Iterable[T]) -> ChannelStream[T]:
    """Create a stream that reads from ``source``."""
    return ChannelStream(source)