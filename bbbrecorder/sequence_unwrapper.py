"""Turns wrapping fixed-width sequence numbers into a monotonic count."""

from __future__ import annotations

import threading


class SequenceUnwrapper:
    """Unwraps ``base``-bit sequence numbers into unbounded integers.

    With ``base=16``: 65534, 65535, 0, 1 become 65534, 65535, 65536, 65537.
    """

    def __init__(self, base: int) -> None:
        self._lock = threading.Lock()
        self._in_max = 1 << base
        self._wrap_arounds = 0
        self._highest = 0
        self._last_unwrapped = 0
        self._started = False

    def unwrap(self, n: int) -> int:
        """Return the unwrapped value of sequence number ``n``."""
        with self._lock:
            self._last_unwrapped = self._unwrap(n)
            return self._last_unwrapped

    def _unwrap(self, n: int) -> int:
        if not self._started:
            self._started = True
            self._highest = n
            return n

        if n == self._highest:
            return self._wrap_arounds + n

        half = self._in_max >> 1
        if n < self._highest:
            if self._highest - n > half:
                self._wrap_arounds += self._in_max
                self._highest = n
            return self._wrap_arounds + n

        if n - self._highest > half:
            # A late packet from before the last wraparound.
            if self._wrap_arounds - self._in_max + n <= 0:
                self._wrap_arounds += self._in_max
            return self._wrap_arounds - self._in_max + n

        self._highest = n
        return self._wrap_arounds + n