"""Re-armable one-shot timers in the style of kernel timer lists."""

from __future__ import annotations

import threading
from typing import Callable, Optional


class Timer:
    """Calls ``callback`` once after the delay given to ``mod``.

    Re-arming replaces any earlier schedule; deleting cancels it.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._modifying_lock = threading.Lock()
        self._running_lock = threading.Lock()
        self._pending = False
        self._generation = 0
        self._thread: Optional[threading.Timer] = None

    def _fire(self, generation: int) -> None:
        with self._running_lock:
            with self._modifying_lock:
                if not self._pending or generation != self._generation:
                    return
                self._pending = False
            self._callback()

    def _stop_locked(self) -> None:
        self._generation += 1
        if self._thread is not None:
            self._thread.cancel()
            self._thread = None

    def mod(self, delay: float) -> None:
        """Arm the timer to fire after ``delay`` seconds."""
        if delay < 0:
            raise ValueError("delay must not be negative")
        with self._modifying_lock:
            self._stop_locked()
            self._pending = True
            thread = threading.Timer(delay, self._fire, args=(self._generation,))
            thread.daemon = True
            self._thread = thread
            thread.start()

    def delete(self) -> None:
        """Disarm the timer; a callback already running is not waited for."""
        with self._modifying_lock:
            self._pending = False
            self._stop_locked()

    def delete_sync(self) -> None:
        """Disarm the timer and wait for a running callback to finish."""
        self.delete()
        with self._running_lock:
            self.delete()

    def is_pending(self) -> bool:
        """True while the timer is armed and has not fired."""
        with self._modifying_lock:
            return self._pending