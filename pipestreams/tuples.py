"""A small typed pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar, Union

T1 = TypeVar("T1")
T2 = TypeVar("T2")


@dataclass(frozen=True)
class Tuple2(Generic[T1, T2]):
    """An immutable pair of two values."""

    v1: T1
    v2: T2

    def __iter__(self) -> Iterator[Union[T1, T2]]:
        yield self.v1
        yield self.v2