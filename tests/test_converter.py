from unittest import mock

import pytest

from quickcsv.converter import Converter, NoConverterError, ValueKind
from quickcsv.params import ConverterParams


@pytest.fixture
def converter():
    return Converter(ConverterParams())


@pytest.fixture
def defaulting():
    return Converter(ConverterParams(True, 0.0, 1))


# Cases from reading values as char.
@pytest.mark.parametrize("text, expected", [("a", "a"), ("x", "x"), ("b", "b"), ("z", "z")])
def test_char_takes_first_character(converter, text, expected):
    assert converter.to_val(text, ValueKind.CHAR) == expected


def test_char_of_longer_text_and_empty(converter):
    assert converter.to_val("hello", ValueKind.CHAR) == "h"
    assert converter.to_val("", ValueKind.CHAR) == "\0"


# Cases from invalid conversion raising an error.
@pytest.mark.parametrize("text", ["", "x", "#", "y", "$"])
def test_invalid_int_raises(converter, text):
    with pytest.raises(ValueError):
        converter.to_val(text, ValueKind.INT)


@pytest.mark.parametrize("text", ["", "x", "#", "y", "$"])
def test_invalid_double_raises(converter, text):
    with pytest.raises(ValueError):
        converter.to_val(text, ValueKind.DOUBLE)


# Cases from default conversion to custom values.
def test_default_integer_values(defaulting):
    assert defaulting.to_val("", ValueKind.INT) == 1
    assert defaulting.to_val("x", ValueKind.LONG_LONG) == 1
    assert defaulting.to_val("#", ValueKind.UNSIGNED) == 1


def test_default_float_values(defaulting):
    assert defaulting.to_val("", ValueKind.DOUBLE) == 0.0
    assert defaulting.to_val("y", ValueKind.LONG_DOUBLE) == 0.0
    assert defaulting.to_val("$", ValueKind.FLOAT) == 0.0


def test_default_applies_to_overflow():
    conv = Converter(ConverterParams(True, 2.5, 7))
    assert conv.to_val("99999999999", ValueKind.INT) == 7
    assert conv.to_val("1e999", ValueKind.DOUBLE) == 2.5


def test_default_integer_wraps_for_unsigned():
    conv = Converter(ConverterParams(True, 0.0, -1))
    assert conv.to_val("bad", ValueKind.UNSIGNED) == 4294967295


def test_integer_parses_numeric_prefix(converter):
    assert converter.to_val("12abc", ValueKind.INT) == 12
    assert converter.to_val("  -42", ValueKind.LONG) == -42
    assert converter.to_val("+7", ValueKind.INT) == 7
    assert converter.to_val("0x10", ValueKind.INT) == 0


def test_int_out_of_range(converter):
    assert converter.to_val("2147483647", ValueKind.INT) == 2147483647
    with pytest.raises(OverflowError):
        converter.to_val("2147483648", ValueKind.INT)
    assert converter.to_val("2147483648", ValueKind.LONG_LONG) == 2147483648
    with pytest.raises(OverflowError):
        converter.to_val("9223372036854775808", ValueKind.LONG_LONG)


def test_unsigned_negative_wraps(converter):
    assert converter.to_val("-1", ValueKind.UNSIGNED) == 4294967295
    assert converter.to_val("-1", ValueKind.UNSIGNED_LONG_LONG) == 18446744073709551615
    with pytest.raises(OverflowError):
        converter.to_val("18446744073709551616", ValueKind.UNSIGNED_LONG)


def test_float_parsing(converter):
    assert converter.to_val("0.5", ValueKind.DOUBLE) == 0.5
    assert converter.to_val("1.5xyz", ValueKind.DOUBLE) == 1.5
    assert converter.to_val("1e3", ValueKind.DOUBLE) == 1000.0
    assert converter.to_val("0x1.8p1", ValueKind.DOUBLE) == 3.0
    assert converter.to_val("-inf", ValueKind.DOUBLE) == float("-inf")


def test_double_overflow(converter):
    with pytest.raises(OverflowError):
        converter.to_val("1e400", ValueKind.DOUBLE)


def test_numeric_locale_decimal_comma(converter):
    with mock.patch("locale.localeconv", return_value={"decimal_point": ","}):
        assert converter.to_val("0,25", ValueKind.DOUBLE) == 0.25
        assert converter.to_val("0.25", ValueKind.DOUBLE) == 0.0


def test_without_numeric_locale_requires_whole_text():
    conv = Converter(ConverterParams(numeric_locale=False))
    assert conv.to_val("0.001", ValueKind.DOUBLE) == 0.001
    with mock.patch("locale.localeconv", return_value={"decimal_point": ","}):
        assert conv.to_val("0.5", ValueKind.DOUBLE) == 0.5
    with pytest.raises(ValueError):
        conv.to_val("12abc", ValueKind.DOUBLE)
    with pytest.raises(ValueError):
        conv.to_val("inf", ValueKind.DOUBLE)
    with pytest.raises(ValueError):
        conv.to_val("1e400", ValueKind.DOUBLE)


def test_string_passthrough(converter):
    assert converter.to_val(" a b ", ValueKind.STRING) == " a b "
    assert converter.to_val("", ValueKind.STRING) == ""


def test_python_types_as_kind(converter):
    assert converter.to_val("42", int) == 42
    assert converter.to_val("2.5", float) == 2.5
    assert converter.to_val("text", str) == "text"
    with pytest.raises(NoConverterError):
        converter.to_val("1", list)


def test_to_str(converter):
    assert converter.to_str(81) == "81"
    assert converter.to_str(-3) == "-3"
    assert converter.to_str(0.5) == "0.5"
    assert converter.to_str(1234567.0) == "1.23457e+06"
    assert converter.to_str(3.0) == "3"
    assert converter.to_str("256,8") == "256,8"


def test_to_str_unsupported(converter):
    with pytest.raises(NoConverterError, match="unsupported conversion datatype"):
        converter.to_str([1, 2])
    with pytest.raises(NoConverterError):
        converter.to_str(True)


def test_round_trip_integers(converter):
    for value in (0, 1, -17, 390625, 2147483647):
        assert converter.to_val(converter.to_str(value), ValueKind.LONG_LONG) == value