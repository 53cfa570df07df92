# matrixclock

Building blocks for a clock that shows the time on chained MAX7219 LED
matrices and takes its data as JSON.

The package has three parts:

- `matrixclock.timelib`: a software clock (`Clock`) that counts seconds
  from a millisecond source, re-syncs from a provider you supply, and
  reports its state as a `TimeStatus`. Free functions split Unix
  timestamps into calendar fields and back (`break_time`, `make_time`,
  `TimeElements`) and do day and week arithmetic (`day_of_week`,
  `previous_midnight`, `next_sunday`, ...).
- `matrixclock.display`: a `Max7219` frame buffer for a chain of 8x8
  modules, with the register addresses in `Command`. It clears, scrolls,
  inverts and pushes frames (rotated by 0, 90 or 270 degrees) to a sink
  that receives the bytes of each transfer.
- A small JSON toolkit: `matrixclock.values` (`JsonBuffer`, `JsonArray`,
  `JsonObject`, `JsonVariant`, `RawJson`), `matrixclock.parser`
  (`JsonParser`, `parse`, `parse_array`, `parse_object`),
  `matrixclock.writer` (`JsonWriter`), `matrixclock.numbers` (lenient
  number recognition and parsing) and `matrixclock.arena` (`Arena`, a
  fixed-capacity byte buffer).

## Install

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Keeping time

```python
import time
from matrixclock.timelib import Clock, TimeStatus

clock = Clock(lambda: int(time.monotonic() * 1000))
clock.set_time_parts(14, 30, 0, 1, 6, 2018)   # 14:30:00, 1 June 2018
t = clock.now()
print(clock.hour(t), clock.minute(t), clock.weekday(t))
assert clock.time_status() is TimeStatus.SET
```

Without a millisecond source, `Clock()` uses the process's monotonic
clock. The field accessors (`hour`, `minute`, `weekday`, `year`, ...)
read the current time when called without an argument. `weekday` counts
Sunday as 1.

`set_sync_provider` takes a callable that returns a Unix time, or 0 when
no time is available. The clock calls it again once every sync interval
has passed (300 seconds unless `set_sync_interval` says otherwise). When
a sync fails on a clock that was set before, `time_status()` reports
`TimeStatus.NEEDS_SYNC`.

## Driving the display

```python
from matrixclock.display import Max7219

frames = []
matrix = Max7219(4, frames.append, 90)
matrix.initialize()
matrix.buffer[0] = 0b10101010
matrix.scroll_left()
matrix.refresh_all()
```

Each transfer reaches the sink as one `bytes` object holding a
command/data pair per device, farthest device first. Without a sink the
transfers are collected in `matrix.frames`. The frame buffer
(`matrix.buffer`) holds eight bytes per device plus eight more for a
character being scrolled in.

## Parsing and writing JSON

```python
from matrixclock.parser import parse_object

obj = parse_object('{"temp": 21.5, "city": "Example"}', 10)
if obj.success():
    print(obj.get("temp").as_float())
    print(obj.to_json())
```

The parser is lenient, as small devices need: it takes C and C++ style
comments, single-quoted strings and unquoted words, which are kept as
`RawJson` text and converted when read. When the input is malformed it
does not raise. It returns an invalid container, and that container's
`success()` is false.

Values can be built by hand too:

```python
from matrixclock.values import JsonBuffer

buffer = JsonBuffer()          # pass a capacity in bytes to limit it
obj = buffer.create_object()
obj["hello"] = 1
obj.create_nested_array("list").add(2.5)
print(obj.to_json())           # {"hello":1,"list":[2.5]}
```

A `JsonBuffer` with a capacity refuses additions once it is full:
`add` and `set` return false, and `create_array` / `create_object`
return the invalid container.

## What it does not do

The package does not talk to hardware. `Max7219` only computes the
bytes of each transfer; sending them over SPI or GPIO pins is left to
the sink you pass in. There is no command-line program, no network time
client and no weather or data fetching: a sync provider or JSON text
must come from your own code. The time functions work in UTC seconds
only and have no time-zone or month and day name handling.