"""Monotonic Clock — UTC timestamps that never go backwards within a process.

Invariants:
    - now() returns timezone-aware UTC datetimes
    - Successive now() calls never decrease, even if the wall clock steps back
    - Thread-safe: a single lock guards the last issued value
"""

import threading
from datetime import datetime, timezone
from typing import Callable


class MonotonicClock:
    """Wall clock clamped to the last issued timestamp."""

    def __init__(self, source: Callable[[], datetime] | None = None):
        self._source = source or (lambda: datetime.now(timezone.utc))
        self._lock = threading.Lock()
        self._last: datetime | None = None

    def now(self) -> datetime:
        with self._lock:
            current = self._source()
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current
