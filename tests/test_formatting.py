import math

import pytest
from hypothesis import given, strategies as st

from backend.formatting import ERROR_MARKER, format_number, parse_display


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.1 + 0.2, "0.3"),
        (5.0, "5"),
        (-0.0, "0"),
        (-1e-11, "0"),
        (2.50, "2.5"),
        (-2.5, "-2.5"),
        (1 / 3, "0.3333333333"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1e-05, "0.00001"),
        (5e-05, "0.00005"),
        (-2.5e-05, "-0.000025"),
        (1e-06, "0.000001"),
        (1.5e-07, "1.5e-7"),
        (1e-10, "1e-10"),
        (float(2**53), "9007199254740992"),
        (float(2**60), "1152921504606847000"),
        (123456.789, "123456.789"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_format_non_finite_is_error(value):
    assert format_number(value) == ERROR_MARKER


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", 0.0),
        ("-", 0.0),
        ("", 0.0),
        (".", 0.0),
        ("0.", 0.0),
        ("-0.", 0.0),
        ("-12.5", -12.5),
        ("1e+21", 1e21),
        (ERROR_MARKER, 0.0),
        ("nan", 0.0),
    ],
)
def test_parse_display(text, expected):
    assert parse_display(text) == expected


finite_floats = st.floats(allow_nan=False, allow_infinity=False)


@given(finite_floats)
def test_format_is_idempotent(x):
    text = format_number(x)
    assert format_number(parse_display(text)) == text


@given(finite_floats)
def test_format_has_no_dangling_point_or_zeros(x):
    text = format_number(x)
    assert text
    assert not text.endswith(".")
    if "." in text and "e" not in text:
        assert not text.endswith("0")
