import pytest

from bbbrecorder.ebml.errors import EbmlError, wrap_error, wrap_errorf


class DummyError(Exception):
    def __init__(self, err):
        super().__init__()
        self.err = err

    def __str__(self):
        return str(self.err)


@pytest.fixture
def errors():
    base = ValueError("an error")
    other = ValueError("an another error")
    chained = wrap_errorf(base, "info")
    return {
        "base": base,
        "other": other,
        "chained": chained,
        "double_chained": wrap_errorf(chained, "info"),
        "chained_nil": wrap_errorf(None, "info"),
        "chained_other": wrap_errorf(other, "info"),
        "chained_112": wrap_errorf(DummyError(base), "info"),
        "nil_112": wrap_errorf(DummyError(None), "info"),
    }


def test_chained_matches_base(errors):
    assert errors["chained"].matches(errors["base"])


def test_matches_itself(errors):
    assert errors["chained"].matches(errors["chained"])


def test_double_chained_matches_base(errors):
    assert errors["double_chained"].matches(errors["base"])


def test_attribute_chain_matches_base(errors):
    assert errors["chained_112"].matches(errors["base"])


def test_nil_chain_matches_none(errors):
    assert errors["chained_nil"].matches(None)


def test_non_matches(errors):
    assert not errors["chained_nil"].matches(errors["base"])
    assert not errors["chained_other"].matches(errors["base"])
    assert not errors["nil_112"].matches(errors["base"])


def test_error_string(errors):
    assert str(errors["chained"]) == "info: an error"


def test_unwrap(errors):
    assert errors["chained"].unwrap() is errors["base"]


def test_cause_is_set(errors):
    assert errors["chained"].__cause__ is errors["base"]


def test_matches_by_class():
    err = wrap_error(KeyError("k"), "lookup")
    assert err.matches(KeyError)
    assert not err.matches(TypeError)


def test_wrap_errorf_formats_arguments():
    base = ValueError("an error")
    err = wrap_errorf(base, 'parsing "%s"', "Foo")
    assert str(err) == 'parsing "Foo": an error'
    assert err.failure == 'parsing "Foo"'


def test_can_be_raised_and_caught():
    base = ValueError("boom")
    with pytest.raises(EbmlError) as info:
        raise wrap_error(base, "failed")
    assert info.value.err is base
    assert str(info.value) == "failed: boom"