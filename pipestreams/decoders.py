"""Streams that decode JSON values and delimited text rows."""

from __future__ import annotations

import codecs
import dataclasses
import json
import sys
from typing import Any, Callable, List, Optional, TypeVar

from .base import EndOfStream, ReadStream, StreamError

T = TypeVar("T")

_JSON_WHITESPACE = " \t\n\r"


def _build(into: Optional[Callable[[Any], Any]], value: Any) -> Any:
    if into is None:
        return value
    if isinstance(into, type) and dataclasses.is_dataclass(into) and isinstance(value, dict):
        names = {f.name for f in dataclasses.fields(into) if f.init}
        return into(**{k: v for k, v in value.items() if k in names})
    return into(value)


class JSONEachRowStream(ReadStream[T]):
    """Decodes consecutive JSON values from ``source``.

    Values may be separated by any JSON whitespace. ``into`` converts each
    decoded value; a dataclass receives the object keys that match its fields.
    At the end of input, or on a decoding failure, the source is closed and
    :meth:`error` reports :class:`EndOfStream` or the failure.
    """

    _CHUNK_SIZE = 65536

    def __init__(self, source: Any, into: Optional[Callable[[Any], T]] = None) -> None:
        self._source = source
        self._into = into
        self._decoder = json.JSONDecoder()
        self._text_decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self._eof = False
        self._current: Optional[T] = None
        self._error: Optional[BaseException] = None

    def _fill(self) -> None:
        chunk = self._source.read(self._CHUNK_SIZE)
        if isinstance(chunk, (bytes, bytearray)):
            text = self._text_decoder.decode(bytes(chunk), final=not chunk)
        else:
            text = chunk or ""
        if not chunk:
            self._eof = True
        self._buffer += text

    def _decode_next(self) -> Any:
        while True:
            self._buffer = self._buffer.lstrip(_JSON_WHITESPACE)
            if not self._buffer:
                if self._eof:
                    raise EndOfStream()
                self._fill()
                continue
            try:
                value, end = self._decoder.raw_decode(self._buffer)
            except json.JSONDecodeError:
                if self._eof:
                    raise
                self._fill()
                continue
            if end == len(self._buffer) and not self._eof:
                # A value touching the end of the buffer may continue in the next chunk.
                self._fill()
                continue
            self._buffer = self._buffer[end:]
            return value

    def next(self) -> bool:
        if self._error is not None:
            return False
        try:
            value = _build(self._into, self._decode_next())
        except Exception as exc:
            error: BaseException = exc
            try:
                self._source.close()
            except Exception as close_exc:
                error = StreamError(f"{exc}: {close_exc}")
                error.__cause__ = exc
            self._error = error
            return False
        self._current = value
        return True

    def data(self) -> Optional[T]:
        return self._current

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        self._source.close()


class CSVStream(ReadStream[T]):
    """Splits each line of ``source`` on ``separator``.

    No quoting is interpreted. Without ``into`` rows are lists of strings;
    otherwise ``into`` turns the list into a value, and whatever it raises
    stops the stream and becomes its error.
    """

    def __init__(
        self,
        source: Any,
        separator: str = ",",
        into: Optional[Callable[[List[str]], T]] = None,
    ) -> None:
        self._source = source
        self._separator = separator
        self._into = into
        self._current: Optional[T] = None
        self._error: Optional[BaseException] = None

    def _split(self, line: str) -> List[str]:
        if not self._separator:
            return list(line)
        return line.split(self._separator)

    def next(self) -> bool:
        if self._error is not None:
            return False
        try:
            line = self._source.readline()
        except Exception as exc:
            self._error = exc
            return False
        if isinstance(line, (bytes, bytearray)):
            line = bytes(line).decode("utf-8")
        if not line:
            return False
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        fields = self._split(line)
        try:
            value = fields if self._into is None else self._into(fields)
        except Exception as exc:
            self._error = exc
            return False
        self._current = value
        return True

    def data(self) -> Optional[T]:
        return self._current

    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self) -> None:
        self._source.close()


def json_rows(source: Any, into: Optional[Callable[[Any], T]] = None) -> JSONEachRowStream[T]:
    """Create a stream of the JSON values in ``source``."""
    return JSONEachRowStream(source, into)


def csv_stream(
    *,
    path: Optional[str] = None,
    reader: Any = None,
    mode: str = "r",
    separator: str = ",",
    into: Optional[Callable[[List[str]], T]] = None,
) -> CSVStream[T]:
    """Create a delimited-text stream over a file path, a reader, or standard input.

    A ``path`` takes precedence over ``reader``; opening it may raise ``OSError``.
    """
    if path:
        if "b" in mode:
            source = open(path, mode)
        else:
            source = open(path, mode, encoding="utf-8")
    elif reader is not None:
        source = reader
    else:
        source = sys.stdin
    return CSVStream(source, separator, into)