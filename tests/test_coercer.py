import pytest

from fakes import FakeBoxedInt

from cypher_view.graph.coercer import (
    MAX_SAFE_INTEGER,
    ValueCoercer,
    is_safe_integer,
    unbox_integer,
)


@pytest.fixture
def coercer():
    return ValueCoercer()


def test_unbox_integer_combines_words():
    assert unbox_integer(0, 5) == 5
    assert unbox_integer(1, 0) == 2**32
    assert unbox_integer(-1, -1) == -1
    assert unbox_integer(0x7FFFFFFF, -1) == 2**63 - 1


def test_boxed_integer_object_within_safe_range(coercer):
    assert coercer.coerce(FakeBoxedInt(high=0, low=42)) == 42


def test_map_with_low_and_high_keys_is_not_unboxed(coercer):
    value = {"low": 12, "high": 0}
    assert coercer.coerce(value) is value


def test_large_integer_renders_as_string_by_default(coercer):
    big = MAX_SAFE_INTEGER + 1
    assert coercer.coerce(big) == str(big)
    assert coercer.coerce(FakeBoxedInt(high=0x7FFFFFFF, low=-1)) == str(2**63 - 1)


def test_large_integer_native_mode_keeps_int():
    coercer = ValueCoercer("native")
    big = MAX_SAFE_INTEGER + 10
    assert coercer.coerce(big) == big


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        ValueCoercer("float")


def test_lists_recurse(coercer):
    big = -(MAX_SAFE_INTEGER + 1)
    assert coercer.coerce([1, FakeBoxedInt(0, 2), [big, "x"]]) == [1, 2, [str(big), "x"]]
    assert coercer.coerce((1, 2)) == [1, 2]


def test_maps_pass_through(coercer):
    value = {"a": FakeBoxedInt(0, 1), "low": 1}
    assert coercer.coerce(value) is value


@pytest.mark.parametrize("value", [None, True, False, 1.5, "text"])
def test_other_scalars_pass_through(coercer, value):
    assert coercer.coerce(value) is value


def test_is_safe_integer_bounds():
    assert is_safe_integer(MAX_SAFE_INTEGER)
    assert is_safe_integer(-MAX_SAFE_INTEGER)
    assert not is_safe_integer(MAX_SAFE_INTEGER + 1)
