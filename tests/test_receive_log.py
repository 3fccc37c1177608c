import pytest

from bbbrecorder.receive_log import ReceiveLog

STARTS = [0, 1, 127, 128, 129, 511, 512, 513, 32767, 32768, 32769,
          65407, 65408, 65409, 65534, 65535]


def span(lo, hi):
    return list(range(lo, hi + 1))


@pytest.mark.parametrize("start", STARTS)
def test_receive_log(start):
    rl = ReceiveLog(128)

    def seq(n):
        return (start + n) & 0xFFFF

    def add(*nums):
        for n in nums:
            rl.add(seq(n))

    def assert_get(*nums):
        assert [n for n in nums if not rl.get(seq(n))] == []

    def assert_not_get(*nums):
        assert [n for n in nums if rl.get(seq(n))] == []

    def assert_missing(skip, nums):
        assert rl.missing_seq_numbers(skip) == [seq(n) for n in nums]

    def assert_last_consecutive(n):
        assert rl.last_consecutive == seq(n)

    add(0)
    assert_get(0)
    assert_missing(0, [])
    assert_last_consecutive(0)

    add(*span(1, 127))
    assert_get(*span(1, 127))
    assert_missing(0, [])
    assert_last_consecutive(127)

    add(128)
    assert_get(128)
    assert_not_get(0)
    assert_missing(0, [])
    assert_last_consecutive(128)

    add(130)
    assert_get(130)
    assert_not_get(1, 2, 129)
    assert_missing(0, [129])
    assert_last_consecutive(128)

    add(333)
    assert_get(333)
    assert_not_get(*span(0, 332))
    assert_missing(0, span(206, 332))
    assert_missing(10, span(206, 323))
    assert_last_consecutive(205)

    add(329)
    assert_get(329)
    assert_missing(0, span(206, 328) + span(330, 332))
    assert_missing(5, span(206, 328))
    assert_last_consecutive(205)

    add(*span(207, 320))
    assert_get(*span(207, 320))
    assert_missing(0, [206] + span(321, 328) + span(330, 332))
    assert_last_consecutive(205)

    add(334)
    assert_get(334)
    assert_not_get(206)
    assert_missing(0, span(321, 328) + span(330, 332))
    assert_last_consecutive(320)

    add(*span(322, 328))
    assert_get(*span(322, 328))
    assert_missing(0, [321] + span(330, 332))
    assert_last_consecutive(320)

    add(321)
    assert_get(321)
    assert_missing(0, span(330, 332))
    assert_last_consecutive(329)


@pytest.mark.parametrize("size", [0, 1, 32, 100, 65535])
def test_invalid_size(size):
    with pytest.raises(ValueError, match="must be one of: 64, 128"):
        ReceiveLog(size)


def test_error_message_lists_sizes():
    with pytest.raises(ValueError) as info:
        ReceiveLog(3)
    assert str(info.value).endswith("16384, 32768")