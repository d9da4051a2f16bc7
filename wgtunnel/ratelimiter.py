"""Per-address token-bucket rate limiter with background garbage collection."""

from __future__ import annotations

import ipaddress
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

PACKETS_PER_SECOND = 20
PACKETS_BURSTABLE = 5
GARBAGE_COLLECT_TIME = 1_000_000_000  # nanoseconds
PACKET_COST = 1_000_000_000 // PACKETS_PER_SECOND
MAX_TOKENS = PACKET_COST * PACKETS_BURSTABLE

_GC_INTERVAL = 1.0  # seconds

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass
class _Entry:
    last_time: int
    tokens: int


class _CollectorSignal:
    """Wakes or stops the garbage-collection thread."""

    def __init__(self) -> None:
        self.cond = threading.Condition()
        self.reset = False
        self.stopped = False

    def wake(self) -> None:
        with self.cond:
            self.reset = True
            self.cond.notify()

    def stop(self) -> None:
        with self.cond:
            self.stopped = True
            self.cond.notify()


class Ratelimiter:
    """Allows a small burst of packets per source address, then a steady rate.

    ``time_now`` returns the current time in integer nanoseconds.
    """

    def __init__(self, time_now: Optional[Callable[[], int]] = None) -> None:
        self._time_now = time_now or time.monotonic_ns
        self._lock = threading.Lock()
        self._table: Optional[Dict[IPAddress, _Entry]] = None
        self._signal: Optional[_CollectorSignal] = None
        self._thread: Optional[threading.Thread] = None

    def __enter__(self) -> "Ratelimiter":
        self.init()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def init(self) -> None:
        """Empty the table and (re)start the garbage-collection thread."""
        with self._lock:
            old_signal, old_thread = self._signal, self._thread
            signal = _CollectorSignal()
            self._signal = signal
            self._table = {}
            thread = threading.Thread(
                target=self._collect, args=(signal,), name="ratelimiter-gc", daemon=True
            )
            self._thread = thread
        if old_signal is not None:
            old_signal.stop()
        if old_thread is not None:
            old_thread.join()
        thread.start()

    def close(self) -> None:
        """Stop the garbage-collection thread."""
        with self._lock:
            signal, thread = self._signal, self._thread
        if signal is not None:
            signal.stop()
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _collect(self, signal: _CollectorSignal) -> None:
        ticking = False
        while True:
            with signal.cond:
                if not signal.stopped and not signal.reset:
                    signal.cond.wait(_GC_INTERVAL if ticking else None)
                if signal.stopped:
                    return
                if signal.reset:
                    signal.reset = False
                    ticking = True
                    continue
            if ticking and self.cleanup():
                ticking = False

    def cleanup(self) -> bool:
        """Drop entries idle for longer than the collection time.

        Returns True if the table is empty afterwards.
        """
        with self._lock:
            if not self._table:
                return True
            now = self._time_now()
            stale = [
                ip
                for ip, entry in self._table.items()
                if now - entry.last_time > GARBAGE_COLLECT_TIME
            ]
            for ip in stale:
                del self._table[ip]
            return not self._table

    def allow(self, ip: Union[str, int, IPAddress]) -> bool:
        """Return True if a packet from ``ip`` may pass now."""
        address = ipaddress.ip_address(ip)
        with self._lock:
            if self._table is None:
                raise RuntimeError("ratelimiter is not initialised")
            entry = self._table.get(address)
            now = self._time_now()
            if entry is None:
                self._table[address] = _Entry(
                    last_time=now, tokens=MAX_TOKENS - PACKET_COST
                )
                if len(self._table) == 1 and self._signal is not None:
                    self._signal.wake()
                return True

            entry.tokens = min(entry.tokens + (now - entry.last_time), MAX_TOKENS)
            entry.last_time = now
            if entry.tokens > PACKET_COST:
                entry.tokens -= PACKET_COST
                return True
            return False