"""Bitmap of received RTP sequence numbers with missing-packet detection."""

from __future__ import annotations

_U16 = 0xFFFF
_HALF = 1 << 15

ALLOWED_SIZES = tuple(1 << i for i in range(6, 16))
_INVALID_SIZE_MESSAGE = "invalid ReceiveLog size, must be one of: " + ", ".join(
    str(size) for size in ALLOWED_SIZES
)


class ReceiveLog:
    """Tracks which of the last ``size`` sequence numbers have arrived."""

    def __init__(self, size: int) -> None:
        if size not in ALLOWED_SIZES:
            raise ValueError(_INVALID_SIZE_MESSAGE)
        self._size = size
        self._received = bytearray(size)
        self._end = 0
        self._started = False
        self._last_consecutive = 0

    @property
    def last_consecutive(self) -> int:
        """Highest sequence number up to which nothing is missing."""
        return self._last_consecutive

    def add(self, seq: int) -> None:
        """Record that ``seq`` has been received."""
        seq &= _U16
        if not self._started:
            self._set(seq)
            self._end = seq
            self._started = True
            self._last_consecutive = seq
            return

        diff = (seq - self._end) & _U16
        if diff == 0:
            return
        if diff < _HALF:
            i = (self._end + 1) & _U16
            while i != seq:
                self._clear(i)
                i = (i + 1) & _U16
            self._end = seq

            if (self._last_consecutive + 1) & _U16 == seq:
                self._last_consecutive = seq
            elif (seq - self._last_consecutive) & _U16 > self._size:
                self._last_consecutive = (seq - self._size) & _U16
                self._fix_last_consecutive()
        elif (self._last_consecutive + 1) & _U16 == seq:
            self._last_consecutive = seq
            self._fix_last_consecutive()

        self._set(seq)

    def get(self, seq: int) -> bool:
        """Whether ``seq`` is within the window and has been received."""
        seq &= _U16
        diff = (self._end - seq) & _U16
        if diff >= _HALF or diff >= self._size:
            return False
        return self._is_set(seq)

    def missing_seq_numbers(self, skip_last_n: int) -> list[int]:
        """Sequence numbers missing after ``last_consecutive``.

        The newest ``skip_last_n`` numbers are not reported.
        """
        until = (self._end - skip_last_n) & _U16
        if (until - self._last_consecutive) & _U16 >= _HALF:
            return []

        missing = []
        stop = (until + 1) & _U16
        i = (self._last_consecutive + 1) & _U16
        while i != stop:
            if not self._is_set(i):
                missing.append(i)
            i = (i + 1) & _U16
        return missing

    def _set(self, seq: int) -> None:
        self._received[seq % self._size] = 1

    def _clear(self, seq: int) -> None:
        self._received[seq % self._size] = 0

    def _is_set(self, seq: int) -> bool:
        return bool(self._received[seq % self._size])

    def _fix_last_consecutive(self) -> None:
        stop = (self._end + 1) & _U16
        i = (self._last_consecutive + 1) & _U16
        while i != stop and self._is_set(i):
            i = (i + 1) & _U16
        self._last_consecutive = (i - 1) & _U16