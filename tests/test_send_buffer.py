from dataclasses import dataclass

import pytest

from bbbrecorder.send_buffer import SendBuffer

STARTS = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 511, 512, 513, 32767, 32768, 32769,
          65527, 65528, 65529, 65530, 65531, 65532, 65533, 65534, 65535]


@dataclass
class Packet:
    sequence_number: int


@pytest.mark.parametrize("start", STARTS)
def test_send_buffer(start):
    sb = SendBuffer(8)

    def seq(n):
        return (start + n) & 0xFFFF

    def add(*nums):
        for n in nums:
            sb.add(Packet(seq(n)))

    def assert_get(*nums):
        for n in nums:
            packet = sb.get(seq(n))
            assert packet is not None, f"packet not found: {seq(n)}"
            assert packet.sequence_number == seq(n)

    def assert_not_get(*nums):
        assert [n for n in nums if sb.get(seq(n)) is not None] == []

    add(0, 1, 2, 3, 4, 5, 6, 7)
    assert_get(0, 1, 2, 3, 4, 5, 6, 7)

    add(8)
    assert_get(8)
    assert_not_get(0)

    add(10)
    assert_get(10)
    assert_not_get(1, 2, 9)

    add(22)
    assert_get(22)
    assert_not_get(*range(3, 22))


def test_duplicate_keeps_first_packet():
    sb = SendBuffer(4)
    first = Packet(5)
    sb.add(first)
    sb.add(Packet(6))
    sb.add(Packet(6))
    assert sb.get(5) is first


@pytest.mark.parametrize("size", [0, 3, 100, 65536])
def test_invalid_size(size):
    with pytest.raises(ValueError, match="invalid sendBuffer size"):
        SendBuffer(size)