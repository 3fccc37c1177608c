from bbbrecorder.nack import NackPair, nack_pairs, nack_pairs_to_sequence_numbers


def u16(i):
    return i & 0xFFFF


SEQ_NUMS = [
    65533, 65534, u16(65547), u16(65548), u16(65549),
    u16(65550),
    u16(65580), u16(65581),
]

PAIRS = [
    NackPair(packet_id=65533, lost_packets=0b1110000000000001),
    NackPair(packet_id=14, lost_packets=0b0000000000000000),
    NackPair(packet_id=44, lost_packets=0b0000000000000001),
]


def test_nack_pairs():
    assert nack_pairs(SEQ_NUMS) == PAIRS


def test_nack_pairs_to_sequence_numbers():
    assert nack_pairs_to_sequence_numbers(PAIRS) == SEQ_NUMS


def test_empty_input():
    assert nack_pairs([]) == []
    assert nack_pairs_to_sequence_numbers([]) == []


def test_single_number():
    assert nack_pairs([7]) == [NackPair(7, 0)]


def test_duplicate_number_sets_no_bit():
    assert nack_pairs([5, 5, 6]) == [NackPair(5, 0b1)]


def test_roundtrip_within_window():
    seqs = [100, 101, 105, 116, 117, 200]
    assert nack_pairs_to_sequence_numbers(nack_pairs(seqs)) == seqs