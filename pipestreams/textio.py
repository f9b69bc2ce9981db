"""Streams over file-like objects: lines, raw byte lines, and a byte writer."""

from __future__ import annotations

from typing import Any, Optional, Union

from .base import EndOfStream, ReadStream, WriteStream


def _as_text(line: Union[str, bytes, bytearray]) -> str:
    if isinstance(line, (bytes, bytearray)):
        return bytes(line).decode("utf-8")
    return line


def _as_bytes(line: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(line, str):
        return line.encode("utf-8")
    return bytes(line)


def _close_source(source: Any) -> None:
    close = getattr(source, "close", None)
    if callable(close):
        close()


class LineReaderStream(ReadStream[str]):
    """Reads text lines from ``source`` without their line terminators.

    ``source`` is any object with a ``readline`` method returning text or
    UTF-8 bytes. A trailing ``\\n`` is removed, together with a ``\\r`` before it.
    Reaching the end of the input is not reported as an error.
    """

    def __init__(self, source: Any) -> None:
        self._source = source
        self._current = ""
        self._error: Optional[BaseException] = None
        self._eof = False
        self._closed = False

    def next(self) -> bool:
        if self._closed or self._eof or self._error is not None:
            return False
        try:
            line = _as_text(self._source.readline())
        except Exception as exc:
            self._error = exc
            return False
        if not line:
            self._eof = True
            return False
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        else:
            self._eof = True
        self._current = line
        return True

    def data(self) -> str:
        return self._current

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        _close_source(self._source)


class ReaderStream(ReadStream[bytes]):
    """Reads ``source`` line by line as bytes, keeping the line terminators.

    Once the input is exhausted :meth:`error` reports :class:`EndOfStream`.
    """

    def __init__(self, source: Any) -> None:
        self._source = source
        self._current = b""
        self._error: Optional[BaseException] = None
        self._closed = False

    def next(self) -> bool:
        if self._closed or self._error is not None:
            return False
        try:
            line = _as_bytes(self._source.readline())
        except Exception as exc:
            self._error = exc
            return False
        if not line.endswith(b"\n"):
            self._error = EndOfStream()
            if not line:
                return False
        self._current = line
        return True

    def data(self) -> bytes:
        return self._current

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        _close_source(self._source)


class WriterStream(WriteStream[bytes]):
    """Writes data to a file-like ``target``; the first failure sticks."""

    def __init__(self, target: Any) -> None:
        self._target = target
        self._error: Optional[BaseException] = None

    def write(self, data: Union[bytes, str]) -> int:
        if self._error is not None:
            raise self._error
        try:
            written = self._target.write(data)
        except Exception as exc:
            self._error = exc
            raise
        return len(data) if written is None else written

    def flush(self) -> None:
        if self._error is not None:
            raise self._error
        flush = getattr(self._target, "flush", None)
        if callable(flush):
            try:
                flush()
            except Exception as exc:
                self._error = exc
                raise

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        if self._error is not None:
            raise self._error
        close = getattr(self._target, "close", None)
        if callable(close):
            try:
                close()
            except Exception as exc:
                self._error = exc
                raise


def lines(source: Any) -> LineReaderStream:
    """Create a stream of the text lines of ``source``."""
    return LineReaderStream(source)


def reader(source: Any) -> ReaderStream:
    """Create a stream of the byte lines of ``source``."""
    return ReaderStream(source)


def writer(target: Any) -> WriterStream:
    """Create a write stream that writes to ``target``."""
    return WriterStream(target)