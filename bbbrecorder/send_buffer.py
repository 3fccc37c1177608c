"""Ring buffer of recently sent RTP packets, for retransmission."""

from __future__ import annotations

from typing import Any

_U16 = 0xFFFF
_HALF = 1 << 15

ALLOWED_SIZES = tuple(1 << i for i in range(16))
_INVALID_SIZE_MESSAGE = "invalid sendBuffer size, must be one of: " + ", ".join(
    str(size) for size in ALLOWED_SIZES
)


class SendBuffer:
    """Keeps the last ``size`` packets, keyed by ``packet.sequence_number``."""

    def __init__(self, size: int) -> None:
        if size not in ALLOWED_SIZES:
            raise ValueError(_INVALID_SIZE_MESSAGE)
        self._size = size
        self._packets: list[Any] = [None] * size
        self._last_added = 0
        self._started = False

    def add(self, packet: Any) -> None:
        """Store a packet, forgetting any skipped sequence numbers."""
        seq = packet.sequence_number & _U16
        if not self._started:
            self._packets[seq % self._size] = packet
            self._last_added = seq
            self._started = True
            return

        diff = (seq - self._last_added) & _U16
        if diff == 0:
            return
        if diff < _HALF:
            i = (self._last_added + 1) & _U16
            while i != seq:
                self._packets[i % self._size] = None
                i = (i + 1) & _U16

        self._packets[seq % self._size] = packet
        self._last_added = seq

    def get(self, seq: int) -> Any | None:
        """Return the packet with sequence number ``seq`` if still held."""
        seq &= _U16
        diff = (self._last_added - seq) & _U16
        if diff >= _HALF or diff >= self._size:
            return None
        return self._packets[seq % self._size]