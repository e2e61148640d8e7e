"""Identifier generation for steps and groups.

Ids are millisecond timestamps rendered as strings. The generator never
hands out the same value twice within a process: when the clock has not
advanced (or went backwards) the next id is the previous one plus one.
"""

import threading
import time
from collections.abc import Callable

IdFactory = Callable[[], str]


class IdGenerator:
    """Monotonic timestamp-based id source."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


generate_id: IdFactory = IdGenerator()


def unique_id(new_id: IdFactory, taken: set[str]) -> str:
    """Draw ids from ``new_id`` until one is not in ``taken``."""
    candidate = new_id()
    while candidate in taken:
        candidate = new_id()
    return candidate
