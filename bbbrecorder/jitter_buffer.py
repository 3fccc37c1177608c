"""Reorders packets by their unwrapped sequence number."""

from __future__ import annotations

from typing import Any


class JitterBuffer:
    """A fixed-size ring of packets indexed by unwrapped sequence number.

    Packets are released in order by :meth:`next_packets`, stopping at the
    first gap.
    """

    def __init__(self, size: int) -> None:
        if not 0 < size <= 0xFFFF:
            raise ValueError(f"invalid jitter buffer size {size}")
        self._size = size
        self._packets: list[Any] = [None] * size
        self._next_start = 0
        self._end = 0

    @property
    def next_start(self) -> int:
        """Sequence number of the next packet to release."""
        return self._next_start

    @property
    def end(self) -> int:
        """Highest sequence number seen so far."""
        return self._end

    @property
    def slots(self) -> tuple[Any, ...]:
        """Snapshot of the ring contents; empty slots are ``None``."""
        return tuple(self._packets)

    def _slot(self, seq: int) -> int:
        return seq % self._size

    def add(self, seq: int, packet: Any) -> bool:
        """Store a packet; return False if it is too old or already present."""
        if self._end - seq >= self._size:
            return False

        if seq <= self._end and self._packets[self._slot(seq)] is not None:
            return False

        if self._next_start == 0:
            self._next_start = seq

        if seq > self._end:
            if seq - self._end >= self._size:
                self._packets = [None] * self._size
            else:
                for missing in range(self._end + 1, seq):
                    self._packets[self._slot(missing)] = None
            self._end = seq

        oldest = self._end - self._size + 1
        if self._next_start < oldest:
            self._next_start = oldest

        self._packets[self._slot(seq)] = packet
        return True

    def next_packets(self) -> list[Any]:
        """Pop the consecutive run of packets starting at ``next_start``."""
        if self._next_start > self._end:
            return []

        if self._packets[self._slot(self._next_start)] is None:
            return []

        last = self._end
        for seq in range(self._next_start + 1, self._end + 1):
            if self._packets[self._slot(seq)] is None:
                last = seq - 1
                break

        released = []
        for seq in range(self._next_start, last + 1):
            index = self._slot(seq)
            released.append(self._packets[index])
            self._packets[index] = None

        self._next_start = last + 1
        return released

    def set_next_packets_start(self, next_packets_start: int) -> None:
        """Skip ahead, dropping anything held before ``next_packets_start``."""
        if self._next_start < next_packets_start:
            for seq in range(self._next_start, next_packets_start):
                self._packets[self._slot(seq)] = None
            self._next_start = next_packets_start