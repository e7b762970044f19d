from __future__ import annotations

import logging
import threading
import time
from enum import Enum

logger = logging.getLogger(__name__)


class TimeUnit(Enum):
    """Length of one rate-limit window, in seconds."""

    MILLISECONDS = 0.001
    SECONDS = 1.0
    MINUTES = 60.0
    HOURS = 3600.0
    DAYS = 86400.0

    @property
    def seconds(self) -> float:
        return self.value

    @classmethod
    def parse(cls, name: str | TimeUnit) -> TimeUnit:
        """Look up a unit by name, case-insensitively (``"minutes"`` -> MINUTES)."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            valid = ", ".join(u.name for u in cls)
            raise ValueError(f"Unknown time unit {name!r} (expected one of: {valid})") from None


class RateLimiter:
    """Fixed-window call counter.

    Every ``try_acquire`` counts as an attempt, accepted or not. A background
    thread zeroes the counter once per window at a fixed rate, independent of
    traffic. Bursts straddling a reset can admit up to ``2 * limit`` calls in
    a short span; that is inherent to fixed windows.
    """

    def __init__(self, limit: int, window: float, *, autostart: bool = True) -> None:
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self._limit = max(limit, 0)
        self._window = float(window)
        self._calls = 0
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        if autostart:
            self.start()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window(self) -> float:
        return self._window

    @property
    def calls(self) -> int:
        """Attempts counted in the current window, including rejected ones."""
        with self._lock:
            return self._calls

    @property
    def saturated(self) -> bool:
        with self._lock:
            return self._calls > self._limit

    def try_acquire(self) -> bool:
        """Count one attempt; True if it still fits in the current window."""
        with self._lock:
            self._calls += 1
            return self._calls <= self._limit

    def reset(self) -> None:
        with self._lock:
            self._calls = 0

    def start(self) -> None:
        """Start the reset thread. The first reset fires one window from now."""
        if self._thread is not None:
            return
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self._run, name="crpt-rate-limit-reset", daemon=True
        )
        self._thread.start()

    def close(self) -> None:
        """Stop the reset thread. The counter keeps its last value."""
        self._stopped.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        # Fixed rate: deadlines advance by whole windows so late wakeups don't drift.
        deadline = time.monotonic() + self._window
        while not self._stopped.wait(max(0.0, deadline - time.monotonic())):
            self.reset()
            logger.debug("Rate limit window reset (limit %d)", self._limit)
            deadline += self._window

    def __enter__(self) -> RateLimiter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
