"""Conversions between text and UTF-8 bytes."""

from __future__ import annotations

from typing import Union


def s2b(s: str) -> bytes:
    """Return the UTF-8 bytes of ``s``."""
    return s.encode("utf-8")


def b2s(b: Union[bytes, bytearray, memoryview]) -> str:
    """Return the text that the UTF-8 bytes ``b`` encode."""
    return bytes(b).decode("utf-8")