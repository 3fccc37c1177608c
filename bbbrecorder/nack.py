"""Conversion between lost sequence numbers and RTCP NACK pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

_U16 = 0xFFFF


@dataclass(frozen=True)
class NackPair:
    """One RTCP generic NACK entry: a packet id and a 16-bit bitmask."""

    packet_id: int
    lost_packets: int = 0


def nack_pairs(seq_nums: Sequence[int]) -> list[NackPair]:
    """Group sorted 16-bit sequence numbers into NACK pairs."""
    if not seq_nums:
        return []

    pairs: list[NackPair] = []
    packet_id = seq_nums[0] & _U16
    lost = 0
    for seq in seq_nums[1:]:
        seq &= _U16
        if (seq - packet_id) & _U16 > 16:
            pairs.append(NackPair(packet_id, lost))
            packet_id, lost = seq, 0
            continue
        shift = (seq - packet_id - 1) & _U16
        if shift < 16:
            lost |= 1 << shift

    pairs.append(NackPair(packet_id, lost))
    return pairs


def nack_pairs_to_sequence_numbers(pairs: Iterable[NackPair]) -> list[int]:
    """Expand NACK pairs back into the sequence numbers they cover."""
    seqs: list[int] = []
    for pair in pairs:
        seqs.append(pair.packet_id)
        seqs.extend(
            (pair.packet_id + bit + 1) & _U16
            for bit in range(16)
            if pair.lost_packets & (1 << bit)
        )
    return seqs