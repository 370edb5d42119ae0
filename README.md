# zaplite

Building blocks for structured, levelled logging.

## Install

```
pip install zaplite
pip install "zaplite[test]"   # with the test dependencies
```

## What is inside

- `zaplite.levels`: `Level`, an `int` subclass with the constants
  `Level.DEBUG`, `INFO`, `WARN`, `ERROR`, `DPANIC`, `PANIC`, `FATAL` and
  `INVALID`; `parse_level`; the `LevelEnabler` protocol; and `level_of`, which
  reports the lowest enabled level of an enabler (or `Level.INVALID`).
- `zaplite.memory_encoder`: `MapObjectEncoder`, which encodes log context into
  plain dicts and lists, and the `ObjectMarshalerFunc` and `ArrayMarshalerFunc`
  adapters that turn a function into a marshaler.
- `zaplite.write_syncer`: the `WriteSyncer` protocol, `add_sync`, `lock`
  (`LockedWriteSyncer`), `new_multi_write_syncer` (`MultiWriteSyncer`) and
  `default_reflected_encoder`, which writes each value as one line of compact
  JSON.
- `zaplite.sampler`: `Sampler`, `new_sampler`, `new_sampler_with_options`,
  `sampler_hook`, `SamplingDecision` and `fnv32a`. The sampler passes through
  the first N entries per level and message in each tick, then every Mth.
- `zaplite.tee`: `new_tee` and `MultiCore`, which fan each operation out to
  several cores.
- `zaplite.grpc_logger`: `GrpcLogger`, `new_logger` and `with_debug`, which
  expose a logger through `print`/`printf`/`println`, `info*`, `warning*`,
  `error*`, `fatal*` and `v`.
- `zaplite.line_writer`: `LineWriter`, a writer that logs each line written to
  it as a separate entry.

## Levels

```python
from zaplite.levels import Level, parse_level

lvl = parse_level("WARNING")
assert lvl == Level.WARN
assert str(lvl) == "warn"
assert lvl.capital_string() == "WARN"
assert lvl.enabled(Level.ERROR)
```

`parse_level` accepts lower-case, all-caps and mixed-case names, plus
`"warning"`. An empty string parses as info. Any other text raises
`ValueError` with the message `unrecognized level: "..."`.

## In-memory encoding

```python
from zaplite.memory_encoder import MapObjectEncoder

enc = MapObjectEncoder()
enc.add_string("user", "jane")
enc.open_namespace("metrics")
enc.add_int("count", 1)
assert enc.fields == {"user": "jane", "metrics": {"count": 1}}
```

`add_uint` raises `ValueError` for a negative value.

## Write syncers

`add_sync` returns an object that already has `write` and `sync` unchanged;
any other writer is wrapped so that `sync` calls its `flush` when it has one.
A multi write syncer writes to every sink even when one fails, returns the
smallest non-zero byte count, and raises the failures afterwards (one error
as is, several as an `ExceptionGroup`).

## Cores, sampler and tee

The sampler and the tee wrap *cores*: objects you supply with `enabled(level)`,
`check(entry, checked)`, `write(entry, fields)`, `sync()` and
`with_fields(fields)`. Entries need `level`, `message` and `time` (a
`datetime`) attributes. `new_tee()` with one core returns it unchanged; with
none it returns a `MultiCore` that is never enabled.

## Adapters

`GrpcLogger` and `LineWriter` wrap a logger you supply with
`enabled(level)` and `log(level, message)`. `printf`-style methods use
Python `%` formatting. The `fatal*` methods log at FATAL and then call
`sys.exit(1)`.

```python
from zaplite.line_writer import LineWriter

with LineWriter(my_logger) as w:
    w.write(b"starting up\nrunning\n")
```

## What this package does not do

There is no logger, no core that encodes entries to JSON or console text, no
entry or field types, and no configuration loader. The package supplies the
parts listed above; the logger and cores they work with come from you.

## Running the tests

```
pytest
```