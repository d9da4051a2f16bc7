# wgtunnel

Pure-Python building blocks for a userspace WireGuard-style tunnel. It needs
nothing outside the standard library.

## What is inside

- `wgtunnel.replay.Filter` is a sliding-window anti-replay filter in the style
  of RFC 6479. `validate_counter(counter, limit)` accepts each counter once,
  provided it is below `limit` and not behind the window. `reset()` empties the
  filter.
- `wgtunnel.ratelimiter.Ratelimiter` is a token-bucket limiter keyed by IP
  address. It allows a burst of 5 packets and then 20 packets per second.
  Call `init()` before use, or use it as a context manager. A background
  thread drops entries that have been idle for more than a second, and you can
  also call `cleanup()` yourself. `allow(ip)` takes a string, an integer or an
  `ipaddress` object. The clock can be replaced by passing `time_now`, a
  function that returns integer nanoseconds.
- `wgtunnel.pools.WaitPool(limit, factory)` is an object pool. With a non-zero
  `limit`, `get()` blocks while `limit` objects are checked out. `put(item)`
  returns an object to the pool, and `count()` reports how many are out.
- `wgtunnel.tai64n` builds 12-byte TAI64N timestamps whose nanosecond part is
  whitened. Use `now()` or `stamp(unix_nanos)`. A `Timestamp` compares by its
  raw bytes and offers `after(other)`, `seconds`, `nanoseconds` and
  `bytes(ts)`.
- `wgtunnel.padding` provides two functions. `calculate_padding_size(packet_size, mtu)`
  gives the number of zeros needed to pad to a multiple of 16 without going
  past the MTU, where an MTU of 0 means no limit. `pad_packet(packet, mtu)`
  returns the padded bytes.
- `wgtunnel.peer` provides two names. `peer_name(public_key)` gives the short
  form `peer(XXXX…YYYY)` of a 32-byte key. `PeerEndpoint` holds a peer's current
  endpoint:
  - `set_from_packet` follows roaming, unless `disable_roaming` is set.
  - `mark_src_for_clearing` asks for the endpoint's cached source to be cleared
    before the next send.
  - `take_for_send` returns the endpoint and applies any pending clear. It
    raises `LookupError` when no endpoint is known.
- `wgtunnel.timers.Timer(callback)` is a re-armable one-shot timer:
  - `mod(delay)` arms it, with the delay in seconds.
  - `delete()` disarms it.
  - `delete_sync()` disarms it and also waits for a running callback to finish.
  - `is_pending()` reports whether it is armed.
- `wgtunnel.staging.StagedQueue(capacity=128)` is a bounded first-in, first-out
  queue of outbound batches:
  - `stage(batch)` adds a batch. When the queue is full it evicts the oldest
    batches and returns them.
  - `pop()` takes the oldest batch, or returns `None` if the queue is empty.
  - `flush()` drains the queue.

## Example

```python
from wgtunnel.replay import Filter
from wgtunnel.ratelimiter import Ratelimiter
from wgtunnel.padding import pad_packet

limit = 2**64 - 2**13 - 1
f = Filter()
assert f.validate_counter(1, limit)
assert not f.validate_counter(1, limit)

with Ratelimiter() as limiter:
    assert limiter.allow("192.0.2.1")

assert len(pad_packet(b"x" * 17, 1420)) == 32
```

## What it does not do

This package holds only the pieces listed above. It does not contain:

- a tunnel device;
- the Noise handshake or the transport encryption;
- UDP or TUN input and output;
- a configuration protocol or a control socket;
- a command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```