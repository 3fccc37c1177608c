import pytest

from bbbrecorder.ebml.elementtype import (
    ElementType,
    UnknownElementNameError,
    element_type_from_string,
)


def test_roundtrip_all_element_types():
    for value in range(1, len(ElementType)):
        element = ElementType(value)
        assert element_type_from_string(str(element)) is element


def test_element_max_is_unknown():
    assert str(ElementType(len(ElementType))) == "unknown"


def test_invalid_is_unknown():
    name = str(ElementType(0))
    assert name == "unknown"
    with pytest.raises(UnknownElementNameError):
        element_type_from_string(name)


def test_segment_name_and_value():
    segment = element_type_from_string("Segment")
    assert segment is ElementType.Segment
    assert str(segment) == "Segment"
    assert int(segment) == 11


def test_values_are_contiguous():
    values = [int(e) for e in ElementType]
    assert values == list(range(len(values)))
    last = element_type_from_string("TagBinary")
    assert int(last) == len(ElementType) - 1


@pytest.mark.parametrize(
    "name, expected",
    [
        ("TimecodeScale", ElementType.TimestampScale),
        ("Timecode", ElementType.Timestamp),
        ("EBML", ElementType.EBML),
        ("SimpleBlock", ElementType.SimpleBlock),
    ],
)
def test_lookup_including_webm_aliases(name, expected):
    assert element_type_from_string(name) is expected


def test_unknown_name_raises():
    with pytest.raises(UnknownElementNameError) as info:
        element_type_from_string("NoSuchElement")
    assert str(info.value) == 'parsing "NoSuchElement": unknown element name'
    assert info.value.name == "NoSuchElement"


def test_unknown_name_is_lookup_error():
    with pytest.raises(LookupError):
        element_type_from_string("unknown")


def test_invalid_name_is_not_parseable():
    with pytest.raises(UnknownElementNameError):
        element_type_from_string("Invalid")


def test_unknown_error_matches_its_class():
    with pytest.raises(UnknownElementNameError) as info:
        element_type_from_string("Bogus")
    assert info.value.matches(UnknownElementNameError)
    assert info.value.matches(LookupError)