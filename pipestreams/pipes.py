"""Render read streams as CSV, a JSON array, or JSON lines into a writable target."""

from __future__ import annotations

import dataclasses
import io
import json
import math
from typing import Any, List, Optional, Sequence, Tuple

from .base import ReadStream, StreamError, Transform, is_end_of_stream

CSV_SEPARATOR_COMMA = ","
CSV_SEPARATOR_TAB = "\t"

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _is_binary(target: Any) -> bool:
    if isinstance(target, io.TextIOBase):
        return False
    if isinstance(target, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(target, "mode", None)
    return isinstance(mode, str) and "b" in mode


class _Sink:
    """Writes text to a text or binary target and counts UTF-8 bytes."""

    def __init__(self, target: Any) -> None:
        self._target = target
        self._binary = _is_binary(target)

    def write(self, text: str) -> int:
        data = text.encode("utf-8")
        self._target.write(data if self._binary else text)
        return len(data)


def _check_final(stream: ReadStream[Any], written: int) -> None:
    err = stream.error()
    if err is not None and not is_end_of_stream(err):
        raise StreamError(f"final stream error: {err}", written=written) from err


def _check_current(stream: ReadStream[Any], written: int) -> bool:
    """Return False when the stream reports its normal end; raise on other errors."""
    err = stream.error()
    if err is None:
        return True
    if is_end_of_stream(err):
        return False
    raise StreamError(f"stream err: {err}", written=written) from err


def _needs_quotes(field: str, separator: str) -> bool:
    if field == "":
        return False
    if field == "\\.":
        return True
    if any(ch in field for ch in (separator, '"', "\r", "\n")):
        return True
    return field[0].isspace()


def _format_csv_row(fields: Sequence[str], separator: str) -> str:
    if len(separator) != 1 or separator in ('"', "\r", "\n", "\ufffd"):
        raise ValueError("csv: invalid field or comment delimiter")
    parts = []
    for field in fields:
        text = str(field)
        if _needs_quotes(text, separator):
            text = '"' + text.replace('"', '""') + '"'
        parts.append(text)
    return separator.join(parts) + "\n"


def _to_plain(value: Any) -> Any:
    marshal = getattr(value, "marshal_json", None)
    if callable(marshal) and not isinstance(value, type):
        raw = marshal()
        if isinstance(raw, (bytes, bytearray)):
            raw = bytes(raw).decode("utf-8")
        return _to_plain(json.loads(raw))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _marshal_json(value: Any) -> str:
    text = json.dumps(
        _to_plain(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text


class TransformCSV(Transform):
    """Writes a stream of items with a ``marshal_csv()`` method as CSV.

    ``marshal_csv`` returns a ``(header, record)`` pair; the header of the
    first item is written once before the records. :meth:`write_to` returns
    the number of rows written, header included.
    """

    def __init__(self, stream: ReadStream[Any], separator: str = CSV_SEPARATOR_COMMA) -> None:
        self._stream = stream
        self._separator = separator

    def write_to(self, writer: Any) -> int:
        sink = _Sink(writer)
        written = 0
        header_written = False
        while self._stream.next():
            if not _check_current(self._stream, written):
                break
            try:
                header, record = self._stream.data().marshal_csv()
            except Exception as exc:
                raise StreamError(f"csv marshaling error: {exc}", written=written) from exc
            if not header_written:
                header_written = True
                try:
                    sink.write(_format_csv_row(header, self._separator))
                except Exception as exc:
                    raise StreamError(f"csv header write error: {exc}", written=written) from exc
                written += 1
            try:
                sink.write(_format_csv_row(record, self._separator))
            except Exception as exc:
                raise StreamError(f"csv record write error: {exc}", written=written) from exc
            written += 1
        _check_final(self._stream, written)
        return written


class TransformJSON(Transform):
    """Writes a stream as one JSON array; returns the number of UTF-8 bytes written."""

    def __init__(self, stream: ReadStream[Any]) -> None:
        self._stream = stream

    def write_to(self, writer: Any) -> int:
        sink = _Sink(writer)
        written = 0

        def emit(text: str) -> None:
            nonlocal written
            try:
                written += sink.write(text)
            except Exception as exc:
                raise StreamError(f"json write: {exc}", written=written) from exc

        emit("[")
        first = True
        while self._stream.next():
            if not _check_current(self._stream, written):
                break
            try:
                encoded = _marshal_json(self._stream.data())
            except Exception as exc:
                raise StreamError(f"json marshal: {exc}", written=written) from exc
            if not first:
                emit(",")
            first = False
            emit(encoded)
        emit("]")
        _check_final(self._stream, written)
        return written


class TransformJSONEachRow(Transform):
    """Writes each item as JSON on its own line; returns the UTF-8 bytes written."""

    def __init__(self, stream: ReadStream[Any]) -> None:
        self._stream = stream

    def write_to(self, writer: Any) -> int:
        sink = _Sink(writer)
        written = 0
        while self._stream.next():
            if not _check_current(self._stream, written):
                break
            try:
                encoded = _marshal_json(self._stream.data())
            except Exception as exc:
                raise StreamError(f"json marshal: {exc}", written=written) from exc
            try:
                written += sink.write(encoded)
            except Exception as exc:
                raise StreamError(f"json write: {exc}", written=written) from exc
            try:
                written += sink.write("\n")
            except Exception as exc:
                raise StreamError(
                    f"json write carriage return: {exc}", written=written
                ) from exc
        _check_final(self._stream, written)
        return written


def csv_transform(stream: ReadStream[Any], separator: str = CSV_SEPARATOR_COMMA) -> TransformCSV:
    """Create a CSV transform over ``stream``."""
    return TransformCSV(stream, separator)


def pipe_csv(stream: ReadStream[Any], writer: Any, separator: str = CSV_SEPARATOR_COMMA) -> int:
    """Write ``stream`` as CSV to ``writer``; return the number of rows written."""
    return csv_transform(stream, separator).write_to(writer)


def json_transform(stream: ReadStream[Any]) -> TransformJSON:
    """Create a JSON-array transform over ``stream``."""
    return TransformJSON(stream)


def pipe_json(stream: ReadStream[Any], writer: Any) -> int:
    """Write ``stream`` as a JSON array to ``writer``; return the bytes written."""
    return json_transform(stream).write_to(writer)


def json_each_row_transform(stream: ReadStream[Any]) -> TransformJSONEachRow:
    """Create a JSON-lines transform over ``stream``."""
    return TransformJSONEachRow(stream)


def pipe_json_each_row(stream: ReadStream[Any], writer: Any) -> int:
    """Write ``stream`` as JSON lines to ``writer``; return the bytes written."""
    return json_each_row_transform(stream).write_to(writer)