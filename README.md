# pipestreams

Composable, pull-based streams for Python. You advance a read stream with
`next()`, which returns `False` when nothing is left. You read the current
item with `data()` and the error the stream stopped on with `error()`.
Streams wrap one another to filter, map, batch, group or flatten data. You
can drain them into lists or write streams, or encode them as CSV, a JSON
array or JSON lines.

## Installation

```
pip install pipestreams
```

## Core pieces (`pipestreams.base`)

- `ReadStream` and `WriteStream` are the abstract stream types.
  `Transform` is the base of the encoders, which have a `write_to(writer)`
  method.
- Every `ReadStream` is iterable. Iterating yields its items and closes the
  stream at the end. It is also a context manager that closes the stream on
  exit.
- `iterate(stream)` does the same as iterating the stream.
  `iterate_with_errors(stream)` yields `(item, None)` pairs. After them it
  yields `(None, error)` for a read error and for a close error.
- `collect`, `seq_keys` and `seq_values` work on plain iterables and on
  iterables of pairs.
- `EndOfStream` marks the normal end of a stream. `is_end_of_stream(error)`
  tells whether an error is such a marker or was caused by one.
- `StreamError` is raised by the copying helpers and the encoders. Its
  `written` attribute holds what had been written before the failure.

## Reading and writing in memory

```python
from pipestreams.memory import mem_reader, mem_writer
from pipestreams.utils import pipe

source = mem_reader(["hello", "world"], None)
dest = mem_writer()
written = pipe(source, dest)        # 2
print(dest.items())                 # ['hello', 'world']
```

`mem_reader(items, error)` reads from a list. If `error` is given, the
stream reports it from `error()`. `mem_writer()` collects items, and each
`write` returns 1. After `set_error(exc)`, `write`, `flush` and `close`
raise that exception.

```python
with mem_reader([1, 2, 3], None) as stream:
    for value in stream:
        print(value)
```

## Draining and connecting (`pipestreams.utils`)

- `consume(stream)` and its alias `read_all` return all items as a list.
  They raise the stream's error, unless it is an end-of-stream marker.
- `consume_err_skip(stream)` keeps only the items read while `error()` was
  `None`.
- `write_all(stream, items)`, `write_seq`, `write_seq_keys` and
  `write_seq_values` write items to a write stream and then flush it.
  Write and flush failures raise `StreamError`.
- `pipe(src, dst)` copies a read stream into a write stream and returns the
  total written.
- `multicast(src, *destinations)` copies a read stream into several write
  streams and returns one total per destination.
- In `pipe` and `multicast`, a read error raises `StreamError("read error: ...")`.
  A write failure names the destination that failed.

## Building pipelines

```python
from pipestreams.memory import mem_reader
from pipestreams.transforms import filter_stream, map_stream
from pipestreams.grouping import batch, group
from pipestreams.utils import consume

evens = filter_stream(mem_reader(range(1, 11), None), lambda n: n % 2 == 0)
doubled = map_stream(evens, lambda n: n * 2)
print(consume(doubled))             # [4, 8, 12, 16, 20]

print(consume(batch(mem_reader([1, 2, 3, 4, 5], None), 2)))
# [[1, 2], [3, 4], [5]]

words = ["apple", "apricot", "banana", "cherry"]
print(consume(group(mem_reader(words, None), lambda w: w[0])))
# [['apple', 'apricot'], ['banana'], ['cherry']]
```

- `filter_map(inner, predicate)` filters and transforms in one step. The
  predicate returns a `(value, keep)` pair.
- `map_err(inner, mapper)` applies a mapper that may raise. The exception
  becomes the error of that item, and the stream goes on to the next one.
- `flatten(inner)` turns a stream of sequences into a stream of their
  elements, skipping empty sequences.
- `filter_factory`, `map_factory`, `batch_factory`, `flatten_factory` and
  `group_factory` wrap a function that builds a stream from a source. The
  streams it then builds are filtered, mapped, batched, flattened or
  grouped.

## Reducing (`pipestreams.reduce`)

```python
import io
from pipestreams.memory import mem_reader
from pipestreams.reduce import reduce, reduce_map
from pipestreams.textio import lines

total = reduce(mem_reader([1, 2, 3], None), lambda acc, n: acc + n, 0)  # 6

counts = reduce_map(
    lines(io.StringIO("a\nb\na\n")),
    lambda acc, w: {**acc, w: acc.get(w, 0) + 1},
)                                   # {'a': 2, 'b': 1}
```

`reduce_slice(stream, fn)` folds into a list that starts empty, and
`reduce_map` into a dict that starts empty. Any error the stream reports
while reading is raised.

## Sources and sinks

- `pipestreams.textio.lines(source)` reads text lines from any object with
  `readline`. It accepts text or UTF-8 bytes and strips `\n` and `\r\n`.
- `pipestreams.textio.reader(source)` reads byte lines and keeps their
  newlines. At the end of the input, `error()` reports `EndOfStream`.
- `pipestreams.textio.writer(target)` is a write stream over a writable
  file object. Its first failure sticks.
- `pipestreams.channel.channel(source)` reads items from any iterable,
  such as a generator or `iter(queue.get, sentinel)`. It never reports an
  error.
- `pipestreams.decoders.json_rows(source, into=None)` decodes consecutive
  JSON values separated by whitespace. `into` converts each value. A
  dataclass receives only the object keys that match its fields.
- `pipestreams.decoders.csv_stream(path=..., reader=..., mode="r",
  separator=",", into=None)` splits each line on the separator, without
  interpreting quotes. Rows are lists of strings unless `into` builds
  something else. With neither a path nor a reader it reads standard input.
- `pipestreams.database.db(rows, scan_fn)` reads from a `DBRows` cursor,
  which has `next`, `scan` and `close`. `scan_fn(rows)` builds each item,
  and the rows are closed once they are exhausted.

## Encoding (`pipestreams.pipes`)

```python
import io
from pipestreams.memory import mem_reader
from pipestreams.pipes import pipe_json

out = io.StringIO()
pipe_json(mem_reader([{"id": 1}, {"id": 2}], None), out)
print(out.getvalue())               # [{"id":1},{"id":2}]
```

- `pipe_csv(stream, writer, separator=",")` is the same as
  `csv_transform(...).write_to(...)`. Each item needs a `marshal_csv()`
  method that returns a `(header, record)` pair. The first header is
  written once, and fields are quoted where needed. It returns the number
  of rows written, header included. `CSV_SEPARATOR_COMMA` and
  `CSV_SEPARATOR_TAB` are provided.
- `pipe_json(stream, writer)` and `json_transform` write one JSON array.
  `pipe_json_each_row` and `json_each_row_transform` write one JSON value
  per line.
- The JSON encoders return the number of UTF-8 bytes written, and accept
  text or binary targets. Items may be plain values, dataclasses, or
  objects with a `marshal_json()` method. Output is compact. `<`, `>` and
  `&` are escaped, and whole floats are written as integers.
- Failures raise `StreamError`.

## Small helpers

- `pipestreams.tuples.Tuple2` is an immutable pair with fields `v1` and
  `v2`. It can be unpacked.
- `pipestreams.zero.s2b` and `b2s` convert between `str` and UTF-8
  `bytes`.

## What it does not do

`pipestreams` is a library only. It installs no command-line program and
does no concurrent or asynchronous streaming. It also has no database
driver: `db` works over any object that follows the `DBRows` interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```