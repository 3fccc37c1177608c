import pytest

from bbbrecorder.ebml.datatype import DataType
from bbbrecorder.ebml.elementtable import (
    element_bytes,
    element_data_type,
    element_from_bytes,
    is_top_level,
)
from bbbrecorder.ebml.elementtype import ElementType


def _defined_elements():
    defined = []
    for element in ElementType:
        try:
            element_bytes(element)
        except LookupError:
            continue
        defined.append(element)
    return defined


def test_segment_bytes_and_type():
    assert element_bytes(ElementType.Segment) == bytes([0x18, 0x53, 0x80, 0x67])
    assert element_data_type(ElementType.Segment) == DataType.MASTER


def test_ebml_header_bytes():
    assert element_bytes(ElementType.EBML) == bytes([0x1A, 0x45, 0xDF, 0xA3])


def test_data_types_from_table():
    assert element_data_type(ElementType.SimpleBlock) == DataType.BLOCK
    assert element_data_type(ElementType.DiscardPadding) == DataType.INT
    assert element_data_type(ElementType.Duration) == DataType.FLOAT
    assert element_data_type(ElementType.DateUTC) == DataType.DATE
    assert element_data_type(ElementType.CodecID) == DataType.STRING


def test_top_level_flags():
    assert is_top_level(ElementType.Cluster) is True
    assert is_top_level(ElementType.Tracks) is True
    assert is_top_level(ElementType.Segment) is False
    assert is_top_level(ElementType.EBML) is False
    assert is_top_level(ElementType.SimpleBlock) is False


def test_every_defined_element_round_trips():
    defined = _defined_elements()
    assert len(defined) > 200
    for element in defined:
        assert element_from_bytes(element_bytes(element)) == element


def test_ids_are_unique():
    defined = _defined_elements()
    ids = {element_bytes(element) for element in defined}
    assert len(ids) == len(defined)


def test_trailing_data_is_ignored():
    data = element_bytes(ElementType.Cluster) + b"\x01\x02"
    assert element_from_bytes(data) == ElementType.Cluster


def test_invalid_has_no_definition():
    with pytest.raises(LookupError):
        element_bytes(ElementType.Invalid)


def test_empty_data_is_unexpected_eof():
    with pytest.raises(EOFError):
        element_from_bytes(b"")


def test_truncated_id_is_unexpected_eof():
    with pytest.raises(EOFError):
        element_from_bytes(bytes([0x18, 0x53]))


def test_unknown_id_raises_lookup_error():
    with pytest.raises(LookupError):
        element_from_bytes(bytes([0xFF]))


def test_zero_leading_byte_is_invalid():
    with pytest.raises(ValueError):
        element_from_bytes(bytes([0x00, 0x01]))