import pytest

from influx_db_client import (
    BooleanValue,
    EncodingError,
    FloatValue,
    IntegerValue,
    StringValue,
    value_of,
)


@pytest.mark.parametrize(
    ("value", "line"),
    [
        (StringValue("bar"), '"bar"'),
        (StringValue('say "hi" \\o/'), '"say \\"hi\\" \\\\o/"'),
        (IntegerValue(11), "11i"),
        (IntegerValue(-3), "-3i"),
        (FloatValue(22.3), "22.3"),
        (FloatValue(1.0), "1.0"),
        (FloatValue(0.1 + 0.2), "0.30000000000000004"),
        (BooleanValue(True), "true"),
        (BooleanValue(False), "false"),
    ],
)
def test_field_rendering(value, line: str) -> None:
    assert value.to_line() == line


def test_tag_rendering_is_unquoted() -> None:
    assert StringValue("a b").to_tag() == "a b"
    assert IntegerValue(12).to_tag() == "12"
    assert FloatValue(12.6).to_tag() == "12.6"
    assert BooleanValue(True).to_tag() == "true"


def test_variants_are_distinct() -> None:
    assert IntegerValue(1) != FloatValue(1.0)
    assert IntegerValue(1) == IntegerValue(1)
    assert StringValue("true") != BooleanValue(True)


def test_value_of_maps_python_types() -> None:
    assert value_of(True) == BooleanValue(True)
    assert value_of(3) == IntegerValue(3)
    assert value_of(3.0) == FloatValue(3.0)
    assert value_of("x") == StringValue("x")
    wrapped = FloatValue(2.5)
    assert value_of(wrapped) is wrapped


def test_value_of_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        value_of(None)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        value_of([1, 2])  # type: ignore[arg-type]


@pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_floats_fail_to_render(number: float) -> None:
    with pytest.raises(EncodingError):
        FloatValue(number).to_line()


def test_integers_outside_int64_fail_to_render() -> None:
    assert IntegerValue(2**63 - 1).to_line() == "9223372036854775807i"
    with pytest.raises(EncodingError):
        IntegerValue(2**63).to_line()


@pytest.mark.parametrize("raw", [True, False, "5", 5.0, None])
def test_integer_value_rejects_non_integers(raw) -> None:
    with pytest.raises(EncodingError):
        IntegerValue(raw).to_line()  # type: ignore[arg-type]
    with pytest.raises(EncodingError):
        IntegerValue(raw).to_tag()  # type: ignore[arg-type]
