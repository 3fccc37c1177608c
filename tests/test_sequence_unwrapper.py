from bbbrecorder.sequence_unwrapper import SequenceUnwrapper


def test_sequence_unwrapper():
    unwrapper = SequenceUnwrapper(16)

    assert unwrapper.unwrap(65534) == 65534
    assert unwrapper.unwrap(65535) == 65535
    assert unwrapper.unwrap(0) == 65536
    assert unwrapper.unwrap(2) == 65538

    for i in range(3, 1 << 16):
        unwrapper.unwrap(i)
    assert unwrapper.unwrap(0) == 131072

    assert unwrapper.unwrap(0) == 131072


def test_late_packet_before_first_wraparound():
    unwrapper = SequenceUnwrapper(16)
    assert unwrapper.unwrap(2) == 2
    assert unwrapper.unwrap(65534) == 65534


def test_late_packet_after_wraparound():
    unwrapper = SequenceUnwrapper(16)
    assert unwrapper.unwrap(65535) == 65535
    assert unwrapper.unwrap(1) == 65537
    assert unwrapper.unwrap(65534) == 65534
    assert unwrapper.unwrap(2) == 65538


def test_reordered_packets_within_window():
    unwrapper = SequenceUnwrapper(16)
    assert unwrapper.unwrap(100) == 100
    assert unwrapper.unwrap(105) == 105
    assert unwrapper.unwrap(103) == 103
    assert unwrapper.unwrap(106) == 106


def test_small_base():
    unwrapper = SequenceUnwrapper(4)
    values = [unwrapper.unwrap(n) for n in [14, 15, 0, 1, 2]]
    assert values == [14, 15, 16, 17, 18]