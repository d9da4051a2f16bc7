"""TAI64N timestamps with whitened sub-second precision."""

from __future__ import annotations

import datetime
import struct
import time
from dataclasses import dataclass

TIMESTAMP_SIZE = 12
BASE = 0x400000000000000A
WHITENER_MASK = 0x1000000 - 1

_NANOS_PER_SECOND = 1_000_000_000
_UINT64_MASK = (1 << 64) - 1
_UINT32_MASK = (1 << 32) - 1
_LAYOUT = struct.Struct(">QI")


@dataclass(frozen=True, order=True)
class Timestamp:
    """A 12-byte TAI64N label: big-endian seconds then nanoseconds.

    Ordering follows the byte order of the raw label.
    """

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("timestamp must be built from bytes")
        raw = bytes(self.raw)
        if len(raw) != TIMESTAMP_SIZE:
            raise ValueError(
                f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "raw", raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def after(self, other: "Timestamp") -> bool:
        """Return True if this timestamp is strictly later than ``other``."""
        return self.raw > other.raw

    @property
    def seconds(self) -> int:
        """Seconds since the Unix epoch."""
        secs, _ = _LAYOUT.unpack(self.raw)
        value = (secs - BASE) & _UINT64_MASK
        return value - (1 << 64) if value >= 1 << 63 else value

    @property
    def nanoseconds(self) -> int:
        """Nanosecond field of the label."""
        _, nano = _LAYOUT.unpack(self.raw)
        return nano

    def __str__(self) -> str:
        moment = datetime.datetime.fromtimestamp(
            self.seconds, tz=datetime.timezone.utc
        )
        return f"{moment:%Y-%m-%d %H:%M:%S}.{self.nanoseconds:09d} +0000 UTC"


def stamp(unix_nanos: int) -> Timestamp:
    """Build the whitened timestamp for a time given in Unix nanoseconds."""
    secs, nano = divmod(unix_nanos, _NANOS_PER_SECOND)
    secs = (BASE + secs) & _UINT64_MASK
    nano = (nano & ~WHITENER_MASK) & _UINT32_MASK
    return Timestamp(_LAYOUT.pack(secs, nano))


def now() -> Timestamp:
    """Whitened timestamp for the current wall-clock time."""
    return stamp(time.time_ns())